# ABOUTME: Top-level refurbishment pipeline: fetch feed, augment items in parallel, return it.
# ABOUTME: Only feed-level fetch and parse failures escape; item failures are contained.

from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed

import httpx
import structlog

from feed_refurb.config import Settings, get_settings
from feed_refurb.errors import FeedFetchError, FeedParseError
from feed_refurb.feeds.augmenter import AugmentOutcome, augment_item
from feed_refurb.feeds.codec import FeedFormatError, parse_feed, render_feed
from feed_refurb.feeds.fetcher import build_http_client
from feed_refurb.feeds.selector import Selector
from feed_refurb.models import Channel

log = structlog.get_logger()

DEFAULT_MAX_WORKERS = 16


def refurbish(
    feed_url: str,
    selector: Selector,
    client: httpx.Client,
    *,
    max_workers: int | None = None,
    keep_description_on_empty_match: bool = False,
) -> Channel:
    """Fetch a feed and replace each linked item's description with an article extract.

    Items are augmented concurrently. The call returns once every item has
    been augmented or skipped; item order is the order of the fetched feed.

    Args:
        feed_url: URL of the RSS feed.
        selector: Compiled selector applied to every linked article.
        client: HTTP client shared by all fetches.
        max_workers: Upper bound on concurrent article fetches.
        keep_description_on_empty_match: Keep an item's description when the
            selector matches nothing in its article.

    Returns:
        The fetched Channel with refurbished item descriptions.

    Raises:
        FeedFetchError: If the feed cannot be downloaded.
        FeedParseError: If the feed body is not valid RSS.
    """
    log.info("fetching_feed", url=feed_url)
    try:
        response = client.get(feed_url)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        log.error("feed_fetch_error", url=feed_url, error=str(e))
        raise FeedFetchError(feed_url, "Could not fetch feed") from e

    log.info("feed_fetched", url=feed_url, status=response.status_code)

    try:
        channel = parse_feed(response.content)
    except FeedFormatError as e:
        log.error("feed_parse_error", url=feed_url, error=str(e))
        raise FeedParseError(feed_url, "Could not parse feed") from e

    log.info("feed_parsed", url=feed_url, items=len(channel.items))

    outcomes = _augment_all(
        channel,
        selector,
        client,
        max_workers=max_workers or DEFAULT_MAX_WORKERS,
        keep_description_on_empty_match=keep_description_on_empty_match,
    )

    counts = Counter(outcome.value for outcome in outcomes)
    log.info("feed_refurbished", url=feed_url, items=len(outcomes), **counts)
    return channel


def _augment_all(
    channel: Channel,
    selector: Selector,
    client: httpx.Client,
    *,
    max_workers: int,
    keep_description_on_empty_match: bool,
) -> list[AugmentOutcome]:
    items = channel.items
    if not items:
        return []

    # One slot per item; each task writes only its own slot and its own item.
    outcomes: list[AugmentOutcome] = [AugmentOutcome.FAILED] * len(items)

    with ThreadPoolExecutor(max_workers=min(max_workers, len(items))) as executor:
        future_map = {
            executor.submit(
                augment_item,
                item,
                selector,
                client,
                keep_description_on_empty_match=keep_description_on_empty_match,
            ): idx
            for idx, item in enumerate(items)
        }

        for future in as_completed(future_map):
            idx = future_map[future]
            try:
                outcomes[idx] = future.result()
            except Exception:
                log.exception("item_augment_failed", link=items[idx].link)

    return outcomes


class FeedRefurbisher:
    """Owns the shared HTTP client and runs refurbishments with configured settings."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialized HTTP client."""
        if self._client is None:
            self._client = build_http_client(self.settings)
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "FeedRefurbisher":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def refurbish(self, feed_url: str, selector: Selector) -> Channel:
        """Refurbish a feed using this instance's client and settings."""
        return refurbish(
            feed_url,
            selector,
            self.client,
            max_workers=self.settings.max_workers,
            keep_description_on_empty_match=self.settings.keep_description_on_empty_match,
        )

    def refurbish_to_xml(self, feed_url: str, selector: Selector) -> str:
        """Refurbish a feed and render it as RSS 2.0 XML."""
        return render_feed(self.refurbish(feed_url, selector))
