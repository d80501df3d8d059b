"""Static views: home, login and registration forms."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from api.rendering import render

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def home(request: Request):
    return render(request, "home.html")


@router.get("/login", response_class=HTMLResponse)
async def login_form(request: Request):
    return render(request, "login.html")


@router.get("/register", response_class=HTMLResponse)
async def register_form(request: Request):
    return render(request, "register.html")
