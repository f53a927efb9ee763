# ABOUTME: Refurbish endpoint returning a feed with extracted item descriptions.
# ABOUTME: Maps selector errors to 400 and feed fetch/parse failures to 406.

from typing import Annotated

import structlog
from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response

from feed_refurb.errors import RefurbError, SelectorCompileError
from feed_refurb.feeds import compile_selector
from feed_refurb.web.dependencies import Refurbisher

log = structlog.get_logger()

router = APIRouter()


@router.get("/refurb", response_class=Response)
def refurb_feed(
    refurbisher: Refurbisher,
    feed: Annotated[str, Query(description="URL of the RSS feed to refurbish")],
    description_selector: Annotated[
        str, Query(description="CSS selector for the article parts to keep")
    ],
):
    """Fetch a feed and replace item descriptions with the selected article content.

    Runs in FastAPI's threadpool since refurbishment blocks until every
    item is done.
    """
    try:
        selector = compile_selector(description_selector)
    except SelectorCompileError as e:
        log.info("invalid_selector", selector=description_selector, error=str(e))
        raise HTTPException(status_code=400, detail="Invalid description selector") from e

    try:
        xml = refurbisher.refurbish_to_xml(feed, selector)
    except RefurbError as e:
        log.warning("refurb_failed", feed=feed, error=str(e))
        raise HTTPException(status_code=406, detail="Could not refurbish feed") from e

    return Response(content=xml, media_type="application/rss+xml; charset=utf-8")
