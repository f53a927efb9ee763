# ABOUTME: Pydantic models for RSS feed data structures.
# ABOUTME: Defines Channel (the feed) and its ordered Items.

from pydantic import BaseModel, PrivateAttr


class Item(BaseModel):
    """One feed entry. Only ``description`` is rewritten by refurbishment."""

    title: str | None = None
    link: str | None = None
    description: str | None = None
    author: str | None = None
    categories: list[str] = []
    comments: str | None = None
    guid: str | None = None
    pub_date: str | None = None

    # description as read from the source document
    _source_description: str | None = PrivateAttr(default=None)


class Channel(BaseModel):
    """RSS channel metadata plus its items in document order.

    A Channel read by ``parse_feed`` remembers the document it came from so
    that rendering can keep every element the model does not cover.
    """

    title: str = ""
    link: str = ""
    description: str = ""
    language: str | None = None
    copyright: str | None = None
    pub_date: str | None = None
    last_build_date: str | None = None
    generator: str | None = None
    ttl: str | None = None
    items: list[Item] = []

    _source: bytes | None = PrivateAttr(default=None)
