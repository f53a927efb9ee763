# ABOUTME: Pytest fixtures and configuration for feed-refurb tests.
# ABOUTME: Provides test settings, sample feed/article documents, and mock HTTP clients.

from collections.abc import Callable, Iterator

import httpx
import pytest
from lxml import etree

from feed_refurb.config import Settings

HOST = "http://feeds.test"
FEED_URL = f"{HOST}/feed.rss"
ARTICLE_URL = f"{HOST}/articles/latest-cool-article-123"

SOURCE_FEED = """<?xml version="1.0" encoding="UTF-8" ?>
<rss version="2.0">
<channel>
  <title>My Test Feed</title>
  <link>{host}</link>
  <description>Test feed for testing purposes!</description>
  <language>en-us</language>
  {items}
</channel>
</rss>
"""

SOURCE_ITEM = """<item>
    <title><![CDATA[{title}]]></title>
    <description><![CDATA[{description}]]></description>
    <link>{link}</link>
    <author>webmaster@feeds.test</author>
    <pubDate>Fri, 31 Aug 2018 03:59:52 +0000</pubDate>
    <guid>{link}</guid>
  </item>"""

LINKLESS_ITEM = """<item>
    <title>No link here</title>
    <description>Keep me as I am</description>
    <guid>urn:feeds-test:no-link</guid>
  </item>"""

EPISODE_URL = f"{HOST}/episodes/1"

# Elements and attributes outside the Channel/Item fields
PODCAST_FEED = f"""<?xml version="1.0" encoding="UTF-8"?>
<?xml-stylesheet type="text/xsl" href="/feed.xsl"?>
<rss version="2.0"
     xmlns:content="http://purl.org/rss/1.0/modules/content/"
     xmlns:itunes="http://www.itunes.com/dtds/podcast-1.0.dtd">
<channel>
  <title>Podcast</title>
  <link>{HOST}</link>
  <description>Episodes</description>
  <image>
    <url>{HOST}/cover.png</url>
    <title>Podcast</title>
    <link>{HOST}</link>
  </image>
  <itunes:author>Someone</itunes:author>
  <!-- generated nightly -->
  <item>
    <title>Episode 1</title>
    <link>{EPISODE_URL}</link>
    <description><![CDATA[<p>short notes</p>]]></description>
    <content:encoded><![CDATA[<p>full notes</p>]]></content:encoded>
    <enclosure url="{HOST}/ep1.mp3" length="1234" type="audio/mpeg"/>
    <category domain="{HOST}/tags">audio</category>
    <source url="{HOST}/other.rss">Other</source>
    <guid isPermaLink="false">episode-1</guid>
  </item>
  <item>
    <title>Trailer</title>
    <itunes:summary>Only an itunes summary</itunes:summary>
    <guid isPermaLink="false">trailer</guid>
  </item>
</channel>
</rss>
"""

MAIN_IMAGE ='<img class="main-image" src="/images/latest-cool-article-123-main.jpg">'

ARTICLE_ELEMENT = """<article>
      <p>Here is my latest cool article. It's very good and full of cool and useful information.</p>
      <p>My RSS feed is truncated, so you'd better click my links! I'd better see you in Google Analytics.</p>
    </article>"""

ARTICLE_HTML = f"""<!DOCTYPE html>
<head>
  <title>My Latest Cool Article</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
</head>
<body>
  <nav>
    <a href="/">Home</a>
    <a href="/articles">Articles</a>
  </nav>
  <section>
    <h1>My Latest Cool Article</h1>
    <img class="main-image" src="/images/latest-cool-article-123-main.jpg" />
    {ARTICLE_ELEMENT}
  </section>
</body>"""

EXPECTED_DESCRIPTION = f"{MAIN_IMAGE}<br>{ARTICLE_ELEMENT}"

ORIGINAL_DESCRIPTION = "bad and not good article summary, click for more"

# A route is either (status, content type, body) or an exception to raise.
Route = tuple[int, str, str | bytes] | Exception


def build_feed(*items: str) -> str:
    """Render the sample channel around the given <item> snippets."""
    return SOURCE_FEED.format(host=HOST, items="\n  ".join(items))


def build_item(
    link: str,
    title: str = "My Latest Cool Article",
    description: str = ORIGINAL_DESCRIPTION,
) -> str:
    """Render one linked <item> snippet."""
    return SOURCE_ITEM.format(link=link, title=title, description=description)


def canonical(xml: str | bytes, without_descriptions: bool = False) -> bytes:
    """C14N form of a document, optionally with every item <description> removed."""
    if isinstance(xml, str):
        xml = xml.encode("utf-8")
    root = etree.fromstring(xml)
    if without_descriptions:
        for description in root.findall("channel/item/description"):
            description.getparent().remove(description)
    return etree.tostring(root, method="c14n")


def xml_route(body: str) -> Route:
    return (200, "application/xml", body)


def html_route(body: str | bytes, content_type: str = "text/html; charset=utf-8") -> Route:
    return (200, content_type, body)


@pytest.fixture
def mock_settings() -> Settings:
    """Create settings for testing."""
    return Settings(
        http_timeout=5,
        user_agent=None,
        source_version="test123",
        max_workers=4,
        keep_description_on_empty_match=False,
        log_level="DEBUG",
        log_format="console",
    )


@pytest.fixture
def make_client() -> Iterator[Callable[[dict[str, Route]], httpx.Client]]:
    """Build httpx clients that answer from a URL -> Route table.

    Unknown URLs get a 404.
    """
    clients: list[httpx.Client] = []

    def _make(routes: dict[str, Route]) -> httpx.Client:
        def handler(request: httpx.Request) -> httpx.Response:
            route = routes.get(str(request.url))
            if route is None:
                return httpx.Response(404, text="not found")
            if isinstance(route, Exception):
                raise route
            status, content_type, body = route
            content = body.encode("utf-8") if isinstance(body, str) else body
            return httpx.Response(status, headers={"content-type": content_type}, content=content)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def sample_routes() -> dict[str, Route]:
    """Feed with one linked item plus its article."""
    return {
        FEED_URL: xml_route(build_feed(build_item(ARTICLE_URL))),
        ARTICLE_URL: html_route(ARTICLE_HTML),
    }
