import asyncio, logging, sys
from pathlib import Path

import click
from rich.console import Console

from rssreader.config import DEFAULT_PATH, load_settings
from rssreader.errors import ConfigError
from rssreader.rss_collect import collect_feeds
from rssreader.sinks import ChannelSink, ConsoleSink
from rssreader.sources import load_feed_urls
from rssreader.telegram_out import TelegramNotifier

log = logging.getLogger("rssreader")
screen = ConsoleSink(Console())


async def run(urls, cutoff, settings: dict, notifier: TelegramNotifier = None):
    channel = ChannelSink()
    headers = {"User-Agent": settings["user_agent"]}

    async def produce():
        try:
            return await collect_feeds(urls, channel, cutoff, settings["timeout"], headers)
        finally:
            channel.close()

    producer = asyncio.create_task(produce())
    try:
        async for feed in channel:
            screen.push(feed)
            if notifier: await notifier.send(feed)
    finally:
        channel.close()
        summary = await producer
    return summary


async def start(urls, cutoff, settings: dict, telegram: bool):
    if not telegram:
        return await run(urls, cutoff, settings)
    tg = settings["telegram"]
    async with TelegramNotifier(tg["bot_token"], tg["chat_id"]) as notifier:
        return await run(urls, cutoff, settings, notifier)


@click.command()
@click.option("-d", "--date", "cutoff", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Only keep entries published on or after this date (YYYY-MM-DD).")
@click.option("-f", "--file", "path", type=click.Path(dir_okay=False, path_type=Path),
              help="Feed list to read when nothing is piped on stdin.")
@click.option("-c", "--config", "config_path", default=DEFAULT_PATH, show_default=True,
              help="Optional YAML settings file.")
@click.option("--telegram", is_flag=True, help="Also post every feed to the OUT_CHAT Telegram chat.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
def cli(cutoff, path, config_path, telegram, verbose):
    """Fetch RSS feeds concurrently and print them, optionally filtered by date."""
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s", level=logging.INFO)
    for name in ("urllib3", "httpx"):
        logging.getLogger(name).setLevel(logging.WARNING)
    try:
        settings = load_settings(config_path)
        logging.getLogger().setLevel("DEBUG" if verbose else settings["log_level"])
        urls = load_feed_urls(path, None if path is not None or sys.stdin.isatty() else sys.stdin)
        tg = settings["telegram"]
        if telegram and not (tg["bot_token"] and tg["chat_id"]):
            raise ConfigError("--telegram needs BOT_TOKEN and OUT_CHAT")
        summary = asyncio.run(start(urls, cutoff.date() if cutoff else None, settings, telegram))
    except ConfigError as e:
        log.error("Application error: %s", e)
        raise SystemExit(1)
    log.info("%d feeds: %d processed, %d failed", summary.launched, summary.succeeded, summary.failed)


if __name__ == "__main__":
    cli()
