from __future__ import annotations
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Tuple


@dataclass(frozen=True)
class FeedEntry:
    title: str
    publication_date: date


@dataclass(frozen=True)
class NormalizedFeed:
    name: str
    entries: Tuple[FeedEntry, ...] = ()
    fetch_latency: Optional[timedelta] = None


@dataclass(frozen=True)
class RawFetchResult:
    source: str
    content: bytes
    latency: timedelta


@dataclass
class RunSummary:
    launched: int = 0
    succeeded: int = 0
    failed: int = 0
    dropped: int = 0
