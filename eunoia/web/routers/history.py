from __future__ import annotations
from fastapi import APIRouter, Request, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from eunoia.web.dependencies import TEMPLATE_DIR, category_url, entry_from_form, get_services

router = APIRouter()
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
templates.env.globals["category_url"] = category_url

@router.get("/history", response_class=HTMLResponse)
def history_home(request: Request, category: str | None = None):
    services = get_services(request)
    items = services.history.browse()
    if category:
        items = [it for it in items if it.category == category]
    return templates.TemplateResponse(request, "history.html", {
        "categories": services.categories.list_categories(),
        "selected_category": category,
        "items": items,
    })


@router.post("/history/remove")
def remove_history_entry(
    request: Request,
    word: str = Form(...),
    meaning: str = Form(...),
    category: str = Form(...),
    date: str = Form(...),
    next_url: str = Form("/history"),
):
    services = get_services(request)
    # Only that day's presentation; the word itself stays in its category.
    services.history.remove(entry_from_form(word, meaning, category, "", date))
    if not next_url.startswith("/") or next_url.startswith("//"):
        next_url = "/history"
    return RedirectResponse(url=next_url, status_code=303)
