# ABOUTME: FastAPI application factory with Jinja2 templates and refurbisher lifespan.
# ABOUTME: Main entry point for the feed-refurb web frontend.

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from feed_refurb import __version__
from feed_refurb.config import APP_NAME, Settings, get_settings
from feed_refurb.feeds import FeedRefurbisher
from feed_refurb.web.routes import pages, refurb

logger = structlog.get_logger()

WEB_DIR = Path(__file__).parent
TEMPLATES_DIR = WEB_DIR / "templates"


async def http_error(request: Request, exc: StarletteHTTPException) -> HTMLResponse:
    """Render the 404 page, or a plain error for other HTTP exceptions."""
    if exc.status_code != 404:
        return HTMLResponse(content=str(exc.detail), status_code=exc.status_code)

    templates: Jinja2Templates = request.app.state.templates
    return templates.TemplateResponse(
        request=request,
        name="error/404.html",
        context={"path": request.url.path},
        status_code=404,
    )


def create_app(
    settings: Settings | None = None,
    refurbisher: FeedRefurbisher | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings for the shared refurbisher. Defaults to get_settings().
        refurbisher: Pre-built refurbisher; one is created at startup if omitted.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """Hold one refurbisher, and its HTTP client, for the app's lifetime."""
        logger.info("app_startup", version=__version__, source_version=settings.source_version)
        app.state.refurbisher = refurbisher or FeedRefurbisher(settings)
        yield
        logger.info("app_shutdown")
        app.state.refurbisher.close()

    app = FastAPI(
        title=APP_NAME,
        description="Replace RSS item descriptions with content extracted from the linked pages",
        version=__version__,
        lifespan=lifespan,
    )

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.globals["app_name"] = APP_NAME
    templates.env.globals["version"] = __version__
    templates.env.globals["source_version"] = settings.source_version
    app.state.templates = templates

    app.add_exception_handler(StarletteHTTPException, http_error)

    app.include_router(pages.router)
    app.include_router(refurb.router)

    return app
