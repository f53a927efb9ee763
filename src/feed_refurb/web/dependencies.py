# ABOUTME: FastAPI dependency injection for templates and the shared refurbisher.
# ABOUTME: Provides reusable dependencies for route handlers.

from typing import Annotated

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates

from feed_refurb.feeds import FeedRefurbisher


def get_templates(request: Request) -> Jinja2Templates:
    """Get Jinja2 templates from app state."""
    return request.app.state.templates


Templates = Annotated[Jinja2Templates, Depends(get_templates)]


def get_refurbisher(request: Request) -> FeedRefurbisher:
    """Get the refurbisher created in the app lifespan."""
    return request.app.state.refurbisher


Refurbisher = Annotated[FeedRefurbisher, Depends(get_refurbisher)]
