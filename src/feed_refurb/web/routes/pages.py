# ABOUTME: Landing page route with the refurbish form.
# ABOUTME: Simple template rendering without any fetching.

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from feed_refurb.web.dependencies import Templates

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, templates: Templates):
    """Display the landing page."""
    return templates.TemplateResponse(
        request=request,
        name="index.html",
        context={"path": "/"},
    )
