from __future__ import annotations
import re
import logging
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

import feedparser

from .errors import ParseError
from .models import FeedEntry, NormalizedFeed, RawFetchResult

log = logging.getLogger(__name__)

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
# obsolete RFC 822 zone names still allowed by RFC 2822, in hours from UTC
ZONES = {"UT": 0, "UTC": 0, "GMT": 0, "Z": 0,
         "EST": -5, "EDT": -4, "CST": -6, "CDT": -5,
         "MST": -7, "MDT": -6, "PST": -8, "PDT": -7}

RFC2822_RE = re.compile(
    r"^(?P<wday>[A-Z][a-z]{2}), (?P<day>\d{1,2}) (?P<mon>[A-Z][a-z]{2}) (?P<year>\d{4}) "
    r"(?P<hh>\d{2}):(?P<mm>\d{2}):(?P<ss>\d{2}) (?P<zone>[+-]\d{4}|[A-Z]{1,3})$"
)


def _zone(text: str) -> timezone:
    if text[0] in "+-":
        sign = -1 if text[0] == "-" else 1
        hours, minutes = int(text[1:3]), int(text[3:5])
        if minutes > 59:
            raise ValueError(f"bad offset {text!r}")
        return timezone(sign * timedelta(hours=hours, minutes=minutes))
    if text not in ZONES:
        raise ValueError(f"unknown zone {text!r}")
    return timezone(timedelta(hours=ZONES[text]))


def parse_rfc2822_date(text: str) -> date:
    """Parse an RSS ``pubDate`` and return its calendar date.

    Only the full RFC 2822 form is accepted, e.g. ``Wed, 06 Oct 2021 17:00:53 GMT``.
    The date is taken in the timestamp's own offset. Raises ``ValueError``.
    """
    m = RFC2822_RE.match(text.strip())
    if not m:
        raise ValueError(f"{text!r} is not an RFC 2822 date-time")
    if m["wday"] not in WEEKDAYS or m["mon"] not in MONTHS:
        raise ValueError(f"{text!r} has an unknown weekday or month name")
    dt = datetime(int(m["year"]), MONTHS.index(m["mon"]) + 1, int(m["day"]),
                  int(m["hh"]), int(m["mm"]), int(m["ss"]), tzinfo=_zone(m["zone"]))
    if WEEKDAYS[dt.weekday()] != m["wday"]:
        raise ValueError(f"{text!r}: weekday does not match the date")
    return dt.date()


def _check_document(parsed, source: str):
    exc = parsed.get("bozo_exception")
    if parsed.get("bozo") and not isinstance(exc, feedparser.CharacterEncodingOverride):
        raise ParseError(source, f"invalid feed content: {exc}")
    if not parsed.get("version"):
        raise ParseError(source, "not a recognised feed format")
    if parsed.feed.get("title") is None:
        raise ParseError(source, "feed has no channel title")


def normalize_feed(raw: RawFetchResult) -> NormalizedFeed:
    parsed = feedparser.parse(raw.content)
    _check_document(parsed, raw.source)

    entries = []
    for e in parsed.entries:
        title, published = e.get("title"), e.get("published")
        if title is None or published is None:
            continue
        try:
            pub_date = parse_rfc2822_date(published)
        except ValueError as err:
            raise ParseError(raw.source,
                             f"couldn't parse {published!r} publish date, RFC 2822 format needed") from err
        entries.append(FeedEntry(title=title, publication_date=pub_date))

    log.debug("%s: kept %d of %d entries", raw.source, len(entries), len(parsed.entries))
    return NormalizedFeed(name=parsed.feed.title, entries=tuple(entries),
                          fetch_latency=raw.latency)


def filter_entries(cutoff: date, feed: NormalizedFeed) -> NormalizedFeed:
    """Keep entries published on or after ``cutoff``."""
    return replace(feed, entries=tuple(e for e in feed.entries if e.publication_date >= cutoff))
