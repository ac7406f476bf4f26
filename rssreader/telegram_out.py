from __future__ import annotations
import logging

from telegram import Bot, constants
from telegram.error import TelegramError
from telegram.helpers import escape_markdown

from .errors import ConfigError
from .models import NormalizedFeed

log = logging.getLogger(__name__)

MAX_LEN = constants.MessageLimit.MAX_TEXT_LENGTH


def format_feed(feed: NormalizedFeed) -> str:
    head = f"📰 *{escape_markdown(feed.name)}*"
    if feed.fetch_latency is not None:
        head += f"\n_fetched in {feed.fetch_latency.total_seconds():.2f}s, {len(feed.entries)} entries_"
    lines = [head]
    for e in feed.entries:
        lines.append(f"{e.publication_date.isoformat()} {escape_markdown(e.title)}")
    msg = "\n".join(lines)
    if len(msg) > MAX_LEN:
        msg = msg[:MAX_LEN - 2].rsplit("\n", 1)[0] + "\n…"
    return msg


class TelegramNotifier:
    """Posts each feed to one chat. Use as ``async with TelegramNotifier(...)``."""

    def __init__(self, token: str, chat_id: str, bot: Bot = None):
        self.bot = bot or Bot(token)
        self.chat_id = chat_id

    async def __aenter__(self):
        try:
            await self.bot.initialize()
        except TelegramError as e:
            raise ConfigError(f"Telegram bot unusable: {e}") from e
        return self

    async def __aexit__(self, *exc):
        await self.bot.shutdown()

    async def send(self, feed: NormalizedFeed) -> bool:
        try:
            await self.bot.send_message(chat_id=self.chat_id, text=format_feed(feed),
                                        parse_mode=constants.ParseMode.MARKDOWN)
        except TelegramError as e:
            log.error("couldn't deliver %s to chat %s: %s", feed.name, self.chat_id, e)
            return False
        return True
