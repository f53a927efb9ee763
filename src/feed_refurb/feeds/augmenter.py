# ABOUTME: Replaces one feed item's description with an extract of its linked article.
# ABOUTME: Every per-item failure is contained here and reported as an outcome, never raised.

from enum import Enum

import httpx
import structlog

from feed_refurb.errors import ArticleFetchError
from feed_refurb.feeds.extractor import extract
from feed_refurb.feeds.fetcher import fetch_article
from feed_refurb.feeds.selector import Selector
from feed_refurb.models import Item

log = structlog.get_logger()


class AugmentOutcome(str, Enum):
    """What happened to a single item during refurbishment."""

    AUGMENTED = "augmented"
    NO_LINK = "no_link"
    NO_MATCH = "no_match"
    FETCH_FAILED = "fetch_failed"
    DECODE_FAILED = "decode_failed"
    FAILED = "failed"


def augment_item(
    item: Item,
    selector: Selector,
    client: httpx.Client,
    *,
    keep_description_on_empty_match: bool = False,
) -> AugmentOutcome:
    """Fetch an item's linked article and use the selected parts as its description.

    The item is left untouched when it has no link or its article cannot be
    fetched or decoded. When the selector matches nothing the description is
    overwritten with "" unless ``keep_description_on_empty_match`` is set.

    Args:
        item: Feed item, owned exclusively by the caller for this call.
        selector: Compiled selector shared across items.
        client: Shared HTTP client.
        keep_description_on_empty_match: Keep the original description when
            the selector matches nothing.

    Returns:
        The outcome for this item.
    """
    if not item.link:
        return AugmentOutcome.NO_LINK

    url = item.link
    log.debug("item_has_link", url=url)

    try:
        text = fetch_article(url, client)
    except ArticleFetchError as e:
        log.warning("article_fetch_failed", url=url, kind=e.kind, error=str(e))
        if e.kind == ArticleFetchError.DECODE:
            return AugmentOutcome.DECODE_FAILED
        return AugmentOutcome.FETCH_FAILED

    description = extract(text, selector)

    if not description and keep_description_on_empty_match:
        log.info("selector_matched_nothing", url=url)
        return AugmentOutcome.NO_MATCH

    item.description = description
    log.debug("description_set", url=url, length=len(description))
    return AugmentOutcome.AUGMENTED
