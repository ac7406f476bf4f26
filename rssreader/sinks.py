from __future__ import annotations
import asyncio
from typing import Optional

from rich.console import Console

from .errors import SinkClosed
from .models import NormalizedFeed


class FeedSink:
    def push(self, feed: NormalizedFeed) -> None:
        """Hand one feed over to the consumer. Raises ``SinkClosed`` if it is gone."""
        raise NotImplementedError()


class ConsoleSink(FeedSink):
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def push(self, feed: NormalizedFeed) -> None:
        self.console.print(feed)


class ChannelSink(FeedSink):
    """Unbounded queue between the collector and a single async consumer.

    ``async for feed in channel`` yields pushed feeds and stops once the channel
    is closed and drained.
    """

    _END = object()

    def __init__(self):
        self._queue: asyncio.Queue = asyncio.Queue()
        self.closed = False

    def push(self, feed: NormalizedFeed) -> None:
        if self.closed:
            raise SinkClosed("channel is closed")
        self._queue.put_nowait(feed)

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self._queue.put_nowait(self._END)

    def __aiter__(self):
        return self

    async def __anext__(self) -> NormalizedFeed:
        item = await self._queue.get()
        if item is self._END:
            # leave the marker for any other reader
            self._queue.put_nowait(item)
            raise StopAsyncIteration
        return item
