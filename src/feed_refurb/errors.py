# ABOUTME: Exception hierarchy for feed refurbishment.
# ABOUTME: Feed-level errors abort a run; article-level errors stay inside the item augmenter.


class RefurbError(RuntimeError):
    """Base class for errors that abort a whole refurbishment run."""

    def __init__(self, feed_url: str, message: str) -> None:
        super().__init__(f"{message}: {feed_url}")
        self.feed_url = feed_url


class FeedFetchError(RefurbError):
    """The feed could not be downloaded (network error, timeout, non-2xx status)."""


class FeedParseError(RefurbError):
    """The feed body is not a readable RSS document."""


class ArticleFetchError(RuntimeError):
    """A linked article could not be downloaded or decoded as text.

    ``kind`` is ``"http"`` for transport and status failures and
    ``"decode"`` when the body is not valid text in its declared charset.
    """

    HTTP = "http"
    DECODE = "decode"

    def __init__(self, url: str, kind: str, message: str) -> None:
        super().__init__(f"{message}: {url}")
        self.url = url
        self.kind = kind


class SelectorCompileError(ValueError):
    """A CSS selector string could not be compiled."""

    def __init__(self, selector: str, message: str) -> None:
        super().__init__(f"Invalid selector {selector!r}: {message}")
        self.selector = selector
