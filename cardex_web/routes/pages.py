"""HTML pages of the catalogue browser."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

WEB_DIR = Path(__file__).resolve().parents[1]
TEMPLATE_DIR = WEB_DIR / "templates"
STATIC_DIR = WEB_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))

router = APIRouter(include_in_schema=False)

PAGES = {
    "/": ("home.html", "Cards", "cards"),
    "/search": ("search.html", "Search", "search"),
    "/artists": ("artists.html", "Artists", "artists"),
}


def _render(request: Request, path: str) -> HTMLResponse:
    template, title, page_id = PAGES[path]
    context = {"title": title, "page_id": page_id, "active": path, "pages": PAGES}
    return templates.TemplateResponse(request, template, context)


@router.get("/", response_class=HTMLResponse)
async def home_page(request: Request) -> HTMLResponse:
    return _render(request, "/")


@router.get("/search", response_class=HTMLResponse)
async def search_page(request: Request) -> HTMLResponse:
    return _render(request, "/search")


@router.get("/artists", response_class=HTMLResponse)
async def artists_page(request: Request) -> HTMLResponse:
    return _render(request, "/artists")
