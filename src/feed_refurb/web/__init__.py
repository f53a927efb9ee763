# ABOUTME: Web frontend for feed-refurb.
# ABOUTME: Exposes the FastAPI application factory.

from feed_refurb.web.app import create_app

__all__ = ["create_app"]
