from __future__ import annotations
from fastapi import APIRouter
from fastapi.responses import RedirectResponse

router = APIRouter()

@router.get("/")
def home():
    return RedirectResponse(url="/today", status_code=303)
