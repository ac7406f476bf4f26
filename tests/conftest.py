from datetime import date, timedelta
from xml.sax.saxutils import escape

import pytest

from rssreader.models import FeedEntry, NormalizedFeed, RawFetchResult


def rss_document(title="dummy channel", items=()) -> bytes:
    """RSS 2.0 bytes; each item is a (title, pub_date) pair, None leaves the element out."""
    parts = []
    for item_title, pub_date in items:
        inner = ""
        if item_title is not None:
            inner += f"<title>{escape(item_title)}</title>"
        if pub_date is not None:
            inner += f"<pubDate>{pub_date}</pubDate>"
        parts.append(f"<item>{inner}<link>https://example.com/</link></item>")
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel>'
        f"<title>{escape(title)}</title><link>https://example.com/</link>"
        "<description>test feed</description>"
        f"{''.join(parts)}</channel></rss>"
    ).encode("utf-8")


def raw_result(content: bytes, source="https://example.com/feed.xml", latency=0.25) -> RawFetchResult:
    return RawFetchResult(source=source, content=content, latency=timedelta(seconds=latency))


@pytest.fixture
def dated_feed() -> NormalizedFeed:
    entries = (
        FeedEntry("1", date(2021, 1, 1)),
        FeedEntry("2", date(2020, 1, 1)),
        FeedEntry("3", date(2019, 1, 1)),
        FeedEntry("4", date(2018, 1, 1)),
    )
    return NormalizedFeed(name="mock channel", entries=entries, fetch_latency=timedelta(milliseconds=120))
