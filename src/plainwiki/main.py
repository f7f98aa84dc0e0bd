"""PlainWiki FastAPI application."""

import logging
from collections.abc import Iterator
from pathlib import Path

from fastapi import Depends, FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from plainwiki.config import settings
from plainwiki.core.errors import (
    InvalidTitleError,
    PageNotFoundError,
    RenderError,
    StorageIOError,
)
from plainwiki.core.links import LinkRenderer
from plainwiki.core.models import Page
from plainwiki.core.storage import FileStorage, is_valid_title
from plainwiki.core.templating import PageRenderer

logger = logging.getLogger(__name__)

# Initialize app
app = FastAPI(
    title=settings.app_title,
    debug=settings.debug,
)

# Setup templates
templates_path = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(templates_path))
renderer = PageRenderer(templates.env, LinkRenderer())

# Initialize storage
storage = FileStorage(settings.data_dir)


def get_context(**kwargs) -> dict:
    """Create base context for templates."""
    return {
        "app_title": settings.app_title,
        **kwargs,
    }


def page_title(request: Request, title: str) -> Iterator[str]:
    """Validate the title path parameter and log the request around it."""
    if not is_valid_title(title):
        raise HTTPException(status_code=404, detail="Not Found")

    action = request.url.path.strip("/").split("/", 1)[0]
    client = request.client.host if request.client else "-"
    logger.info(
        "request started for action '%s' on page '%s' from %s", action, title, client
    )
    try:
        yield title
    finally:
        logger.info(
            "request finished for action '%s' on page '%s' from %s",
            action,
            title,
            client,
        )


# ========== Error mapping ==========


@app.exception_handler(InvalidTitleError)
async def invalid_title_handler(request: Request, exc: InvalidTitleError):
    return PlainTextResponse("404 page not found", status_code=404)


@app.exception_handler(StorageIOError)
@app.exception_handler(RenderError)
async def server_error_handler(request: Request, exc: Exception):
    return PlainTextResponse(str(exc), status_code=500)


# ========== Routes ==========


@app.get("/view/{title}", response_class=HTMLResponse)
async def view_page(title: str = Depends(page_title)):
    """View a wiki page."""
    try:
        page = await storage.load_page(title)
    except PageNotFoundError:
        # Page doesn't exist - redirect to edit to create it
        return RedirectResponse(url=f"/edit/{title}", status_code=302)

    return HTMLResponse(renderer.render_with_links("view.html", page, **get_context()))


@app.get("/edit/{title}", response_class=HTMLResponse)
async def edit_page(title: str = Depends(page_title)):
    """Edit page form."""
    try:
        page = await storage.load_page(title)
        exists = True
    except PageNotFoundError:
        # New page
        page = Page(title=title)
        exists = False

    return HTMLResponse(
        renderer.render("edit.html", page, **get_context(exists=exists))
    )


@app.post("/save/{title}")
async def save_page(title: str = Depends(page_title), body: str = Form("")):
    """Save page content."""
    await storage.save_page(title, body.encode("utf-8"))
    return RedirectResponse(url=f"/view/{title}", status_code=302)


# Registered last so it only sees paths no page route matched
@app.api_route("/{path:path}", methods=["GET", "HEAD", "POST"])
async def index(path: str):
    """Send visitors to the front page."""
    return RedirectResponse(url=f"/view/{settings.front_page}", status_code=308)
