# ABOUTME: Feed processing module for RSS refurbishment.
# ABOUTME: Handles feed fetching, per-item article extraction and feed rendering.

from feed_refurb.feeds.refurbisher import FeedRefurbisher, refurbish
from feed_refurb.feeds.selector import Selector, compile_selector

__all__ = ["FeedRefurbisher", "Selector", "compile_selector", "refurbish"]
