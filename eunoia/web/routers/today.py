from __future__ import annotations
from fastapi import APIRouter, Request, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from eunoia.web.dependencies import TEMPLATE_DIR, category_url, entry_from_form, get_services

router = APIRouter()
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
templates.env.globals["category_url"] = category_url


@router.get("/today", response_class=HTMLResponse)
def today_home(request: Request, category: str | None = None):
    services = get_services(request)
    words = services.today.today_words()
    # What the Today page shows is what counts as "presented".
    services.history.record_many(words)

    shown = [w for w in words if w.category == category] if category else words
    return templates.TemplateResponse(request, "today.html", {
        "categories": services.categories.list_categories(),
        "selected_category": category,
        "words": shown,
    })


@router.post("/words/delete")
def delete_word(
    request: Request,
    word: str = Form(...),
    meaning: str = Form(...),
    category: str = Form(...),
    source: str = Form(""),
    date: str = Form(""),
    next_url: str = Form("/today"),
):
    services = get_services(request)
    services.words.delete_word(entry_from_form(word, meaning, category, source, date))
    if not next_url.startswith("/") or next_url.startswith("//"):
        next_url = "/today"
    return RedirectResponse(url=next_url, status_code=303)
