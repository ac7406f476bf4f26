from datetime import date
from io import StringIO

import pytest
from rich.console import Console

from rssreader.errors import SinkClosed
from rssreader.models import FeedEntry, NormalizedFeed
from rssreader.sinks import ChannelSink, ConsoleSink

FEED = NormalizedFeed("channel", entries=(FeedEntry("hello", date(2021, 10, 6)),))


@pytest.mark.asyncio
async def test_channel_yields_in_push_order_until_closed():
    channel = ChannelSink()
    second = NormalizedFeed("second")
    channel.push(FEED); channel.push(second)
    channel.close()

    assert [f async for f in channel] == [FEED, second]
    # a closed, drained channel stays exhausted
    assert [f async for f in channel] == []


@pytest.mark.asyncio
async def test_push_after_close_raises():
    channel = ChannelSink()
    channel.close(); channel.close()
    assert channel.closed
    with pytest.raises(SinkClosed):
        channel.push(FEED)


def test_console_sink_renders_record():
    out = StringIO()
    ConsoleSink(Console(file=out, width=120)).push(FEED)
    text = out.getvalue()
    assert "NormalizedFeed" in text
    assert "channel" in text
    assert "hello" in text
