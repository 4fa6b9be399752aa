from __future__ import annotations
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from eunoia.web.dependencies import TEMPLATE_DIR, get_services

router = APIRouter()
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))

@router.get("/quiz", response_class=HTMLResponse)
def quiz_home(request: Request):
    words = get_services(request).quiz.select_batch()
    return templates.TemplateResponse(request, "quiz.html", {"words": words})
