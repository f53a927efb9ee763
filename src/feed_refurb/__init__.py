# ABOUTME: Main package for feed-refurb, the RSS description refurbisher.
# ABOUTME: Exports the refurbishment pipeline, its models, errors and settings.

__version__ = "0.1.0"

from feed_refurb.config import Settings, get_settings  # noqa: E402
from feed_refurb.errors import (  # noqa: E402
    FeedFetchError,
    FeedParseError,
    RefurbError,
    SelectorCompileError,
)
from feed_refurb.feeds import FeedRefurbisher, compile_selector, refurbish  # noqa: E402
from feed_refurb.models import Channel, Item  # noqa: E402

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "Channel",
    "Item",
    "FeedFetchError",
    "FeedParseError",
    "RefurbError",
    "SelectorCompileError",
    "FeedRefurbisher",
    "compile_selector",
    "refurbish",
]
