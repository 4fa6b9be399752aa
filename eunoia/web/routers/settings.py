from __future__ import annotations
from fastapi import APIRouter, BackgroundTasks, Request, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from eunoia.data.errors import StoreError
from eunoia.web.dependencies import TEMPLATE_DIR, get_services

router = APIRouter()
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))


def _render(request: Request, error: str | None = None, message: str | None = None, status_code: int = 200):
    services = get_services(request)
    try:
        has_key = bool(services.app_settings.get_api_key())
        last_fetch = services.app_settings.get_last_fetch_date()
    except StoreError:
        has_key, last_fetch = False, None
    return templates.TemplateResponse(request, "settings.html", {
        "categories": services.categories.list_categories(),
        "has_api_key": has_key,
        "last_fetch": last_fetch,
        "error": error,
        "message": message,
    }, status_code=status_code)


@router.get("/settings", response_class=HTMLResponse)
def settings_home(request: Request, message: str | None = None):
    return _render(request, message=message)


@router.post("/settings/api-key")
def save_api_key(request: Request, api_key: str = Form("")):
    api_key = api_key.strip()
    if not api_key:
        return _render(request, error="API key cannot be empty.", status_code=400)
    try:
        get_services(request).app_settings.set_api_key(api_key)
    except StoreError:
        return _render(request, error="Could not save the API key.", status_code=500)
    return RedirectResponse(url="/settings?message=API+key+saved", status_code=303)


@router.post("/settings/fetch-now")
def fetch_now(request: Request, background_tasks: BackgroundTasks):
    services = get_services(request)
    if services.scheduler.running:
        services.scheduler.fetch_now()
    else:
        background_tasks.add_task(services.scheduler.run_job, force=True)
    return RedirectResponse(url="/settings?message=Fetching+new+words", status_code=303)


@router.post("/settings/categories")
def create_category(request: Request, display_name: str = Form("")):
    created = get_services(request).categories.create_category(display_name)
    if created is None:
        return _render(request, error="Category name is empty or already in use.", status_code=400)
    return RedirectResponse(url="/settings?message=Category+created", status_code=303)


@router.post("/settings/categories/{key}/delete")
def delete_category(request: Request, key: str):
    if not get_services(request).categories.delete_category(key):
        return _render(request, error="That category cannot be deleted.", status_code=400)
    return RedirectResponse(url="/settings?message=Category+deleted", status_code=303)


@router.post("/settings/words")
def add_word(request: Request, category: str = Form(...), word: str = Form(""), meaning: str = Form("")):
    try:
        added = get_services(request).words.add_user_word(category, word, meaning)
    except ValueError as e:
        return _render(request, error=str(e), status_code=400)
    if added is None:
        return _render(request, error="That word already exists in this category.", status_code=400)
    return RedirectResponse(url="/settings?message=Word+added", status_code=303)
