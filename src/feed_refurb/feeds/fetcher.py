# ABOUTME: Shared HTTP client construction and linked-article downloading.
# ABOUTME: Uses httpx; article failures surface as ArticleFetchError.

import httpx
import structlog

from feed_refurb.config import Settings
from feed_refurb.errors import ArticleFetchError

log = structlog.get_logger()


def build_http_client(settings: Settings) -> httpx.Client:
    """Create the HTTP client shared by the feed fetch and all article fetches."""
    return httpx.Client(
        timeout=settings.http_timeout,
        headers={"User-Agent": settings.http_user_agent},
        follow_redirects=True,
    )


def fetch_article(url: str, client: httpx.Client) -> str:
    """Download an article and decode its body as text.

    Args:
        url: The article URL to fetch.
        client: Shared HTTP client.

    Returns:
        The decoded document text.

    Raises:
        ArticleFetchError: On malformed URLs, network errors, non-2xx status, or a body that
            cannot be decoded in its declared charset.
    """
    try:
        response = client.get(url)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise ArticleFetchError(url, ArticleFetchError.HTTP, str(e) or type(e).__name__) from e

    encoding = response.encoding or "utf-8"
    try:
        text = response.content.decode(encoding)
    except (LookupError, UnicodeDecodeError) as e:
        raise ArticleFetchError(url, ArticleFetchError.DECODE, str(e)) from e

    log.debug("article_fetched", url=url, status=response.status_code, length=len(text))
    return text
