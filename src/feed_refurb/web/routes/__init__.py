# ABOUTME: Routes module initialization.
# ABOUTME: Exports all route modules for FastAPI app.

from feed_refurb.web.routes import pages, refurb

__all__ = ["pages", "refurb"]
