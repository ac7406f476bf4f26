from __future__ import annotations
import asyncio, logging, time
from concurrent.futures import Executor, ThreadPoolExecutor
from datetime import date, timedelta
from typing import Iterable, Optional

import requests

from .errors import FeedError, FetchError, SinkClosed
from .models import NormalizedFeed, RawFetchResult, RunSummary
from .parse import filter_entries, normalize_feed
from .sinks import FeedSink

log = logging.getLogger(__name__)

HEADERS = {"User-Agent": "rssreader/0.1"}


def fetch_feed(url: str, timeout: Optional[float] = None, headers: Optional[dict] = None) -> RawFetchResult:
    start = time.perf_counter()
    try:
        r = requests.get(url, headers=headers or HEADERS, timeout=timeout); r.raise_for_status()
        content = r.content
    except requests.RequestException as e:
        raise FetchError(url, f"couldn't fetch rss feed: {e}") from e
    latency = timedelta(seconds=time.perf_counter() - start)
    log.debug("fetched %s (%d bytes) in %.3fs", url, len(content), latency.total_seconds())
    return RawFetchResult(source=url, content=content, latency=latency)


async def process_feed(url: str, cutoff: Optional[date] = None,
                       timeout: Optional[float] = None, headers: Optional[dict] = None,
                       executor: Optional[Executor] = None) -> NormalizedFeed:
    loop = asyncio.get_running_loop()
    raw = await loop.run_in_executor(executor, fetch_feed, url, timeout, headers)
    feed = normalize_feed(raw)
    if cutoff is not None:
        feed = filter_entries(cutoff, feed)
    return feed


async def _unit(url: str, cutoff, timeout, headers, executor):
    # never raises: the outcome travels back to the collector
    try:
        return url, await process_feed(url, cutoff, timeout, headers, executor), None
    except Exception as e:
        return url, None, e


async def collect_feeds(urls: Iterable[str], sink: FeedSink, cutoff: Optional[date] = None,
                        timeout: Optional[float] = None, headers: Optional[dict] = None) -> RunSummary:
    """Fetch every feed concurrently and push each processed feed to ``sink``
    in completion order.

    Each feed gets its own fetch thread, so no feed waits for another to start.
    A failing feed is logged and skipped; it never stops the other feeds. Returns
    once every launched feed has finished.
    """
    urls = list(urls)
    summary = RunSummary(launched=len(urls))
    pool = ThreadPoolExecutor(max_workers=max(1, len(urls)), thread_name_prefix="fetch")
    try:
        tasks = [asyncio.ensure_future(_unit(u, cutoff, timeout, headers, pool)) for u in urls]
        for next_done in asyncio.as_completed(tasks):
            url, feed, err = await next_done
            if err is not None:
                summary.failed += 1
                if isinstance(err, FeedError):
                    log.error("Err: %s", err)
                else:
                    log.error("unexpected failure processing %s", url, exc_info=err)
                continue
            summary.succeeded += 1
            try:
                sink.push(feed)
            except SinkClosed:
                summary.dropped += 1
                log.error("receiver dropped, %s not delivered", url)
    finally:
        pool.shutdown(wait=False)
    return summary
