# ABOUTME: RSS codec: parses feed bytes into a Channel and renders it back to XML.
# ABOUTME: Uses feedparser for reading and lxml to write the source document back with new descriptions.

import re

import feedparser
import structlog
from lxml import etree

from feed_refurb.models import Channel, Item

log = structlog.get_logger()

# bozo exceptions that feedparser raises for documents it still parsed fully
_BENIGN_BOZO = (feedparser.CharacterEncodingOverride, feedparser.NonXMLContentType)

# <item> in RSS 0.9x/2.0, RSS 1.0 and RSS 0.90
_ITEM_TAGS = (
    "item",
    "{http://purl.org/rss/1.0/}item",
    "{http://my.netscape.com/rdf/simple/0.9/}item",
)

# Characters XML 1.0 cannot carry, even escaped
_INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class FeedFormatError(ValueError):
    """Raised when bytes are not a well-formed RSS document."""


def _xml_parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, strip_cdata=False)


def _load_document(content: bytes) -> etree._Element:
    try:
        return etree.fromstring(content, parser=_xml_parser())
    except etree.XMLSyntaxError as e:
        raise FeedFormatError(f"Malformed feed: {e}") from e


def _item_elements(root: etree._Element) -> list[etree._Element]:
    return list(root.iter(*_ITEM_TAGS))


def _description_tag(item_element: etree._Element) -> str:
    namespace = etree.QName(item_element).namespace
    return f"{{{namespace}}}description" if namespace else "description"


def _clean_text(value: str) -> str:
    return _INVALID_XML_CHARS.sub("", value)


def parse_feed(content: bytes) -> Channel:
    """Parse an RSS document.

    Args:
        content: Raw feed body as downloaded.

    Returns:
        Channel with its items in document order. The raw document is kept
        on the Channel for ``render_feed``.

    Raises:
        FeedFormatError: If the document is malformed or not RSS.
    """
    parsed = feedparser.parse(content, sanitize_html=False, resolve_relative_uris=False)

    if parsed.bozo and not isinstance(parsed.bozo_exception, _BENIGN_BOZO):
        raise FeedFormatError(f"Malformed feed: {parsed.bozo_exception}")

    version = parsed.get("version", "")
    if not version.startswith("rss"):
        raise FeedFormatError(f"Unsupported feed format: {version or 'unknown'}")

    root = _load_document(content)
    item_elements = _item_elements(root)
    if len(item_elements) != len(parsed.entries):
        raise FeedFormatError(
            f"Found {len(item_elements)} <item> elements but {len(parsed.entries)} entries"
        )

    feed = parsed.feed
    channel = Channel(
        title=feed.get("title", ""),
        link=feed.get("link", ""),
        description=feed.get("subtitle", ""),
        language=feed.get("language"),
        copyright=feed.get("rights"),
        pub_date=feed.get("published"),
        last_build_date=feed.get("updated"),
        generator=feed.get("generator"),
        ttl=feed.get("ttl"),
        items=[
            _parse_item(entry, element)
            for entry, element in zip(parsed.entries, item_elements, strict=True)
        ],
    )
    channel._source = content

    log.debug("feed_decoded", version=version, items=len(channel.items))
    return channel


def _parse_item(entry: feedparser.FeedParserDict, element: etree._Element) -> Item:
    # feedparser fills `link` from a permalink guid too; only <link> elements add to `links`
    link = entry.get("link") if entry.get("links") else None

    # Read <description> itself; feedparser may report itunes:summary as the summary
    description_element = element.find(_description_tag(element))
    description = None
    if description_element is not None:
        description = str(description_element.xpath("string()"))

    item = Item(
        title=entry.get("title"),
        link=link,
        description=description,
        author=entry.get("author"),
        categories=[tag["term"] for tag in entry.get("tags", []) if tag.get("term")],
        comments=entry.get("comments"),
        guid=entry.get("id"),
        pub_date=entry.get("published"),
    )
    item._source_description = description
    return item


def _set_description(item_element: etree._Element, value: str | None) -> None:
    tag = _description_tag(item_element)
    description_element = item_element.find(tag)

    if value is None:
        if description_element is not None:
            item_element.remove(description_element)
        return

    if description_element is None:
        description_element = etree.SubElement(item_element, tag)
    else:
        del description_element[:]
    description_element.text = _clean_text(value)


def render_feed(channel: Channel) -> str:
    """Serialize a Channel as RSS XML.

    A Channel read by ``parse_feed`` is written back from its source
    document: only the ``<description>`` of items whose description
    changed is rewritten, so enclosures, images, extension elements and
    attributes pass through untouched. A Channel built by hand is rendered
    as RSS 2.0 from its fields, omitting those that are None.
    """
    if channel._source is None:
        root = _build_rss_feed(channel)
    else:
        root = _load_document(channel._source)
        for item, element in zip(channel.items, _item_elements(root), strict=True):
            if item.description != item._source_description:
                _set_description(element, item.description)

    xml = etree.tostring(root.getroottree(), xml_declaration=True, encoding="UTF-8")
    return xml.decode("utf-8")


def _add_text(parent: etree._Element, tag: str, value: str | None) -> None:
    if value is not None:
        etree.SubElement(parent, tag).text = _clean_text(value)


def _build_rss_feed(channel: Channel) -> etree._Element:
    rss = etree.Element("rss", version="2.0")

    channel_el = etree.SubElement(rss, "channel")
    _add_text(channel_el, "title", channel.title)
    _add_text(channel_el, "link", channel.link)
    _add_text(channel_el, "description", channel.description)
    _add_text(channel_el, "language", channel.language)
    _add_text(channel_el, "copyright", channel.copyright)
    _add_text(channel_el, "pubDate", channel.pub_date)
    _add_text(channel_el, "lastBuildDate", channel.last_build_date)
    _add_text(channel_el, "generator", channel.generator)
    _add_text(channel_el, "ttl", channel.ttl)

    for item in channel.items:
        item_el = etree.SubElement(channel_el, "item")
        _add_text(item_el, "title", item.title)
        _add_text(item_el, "link", item.link)
        _add_text(item_el, "description", item.description)
        _add_text(item_el, "author", item.author)
        for category in item.categories:
            _add_text(item_el, "category", category)
        _add_text(item_el, "comments", item.comments)
        _add_text(item_el, "guid", item.guid)
        _add_text(item_el, "pubDate", item.pub_date)

    return rss
