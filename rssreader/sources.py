from __future__ import annotations
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Union
from urllib.parse import urlparse

from .errors import ConfigError


def _valid_url(url: str) -> bool:
    p = urlparse(url)
    return p.scheme in ("http", "https") and bool(p.netloc)


def read_feed_urls(lines: Iterable[str]) -> List[str]:
    """Feed URLs from a CSV-ish listing: header line first, URL in the first column."""
    urls = []
    it = iter(lines)
    next(it, None)
    for line in it:
        if not line.strip():
            continue
        url = line.split(",", 1)[0].strip()
        if not _valid_url(url):
            raise ConfigError(f"Couldn't parse the url {url!r}.")
        urls.append(url)
    return urls


def load_feed_urls(path: Optional[Union[str, Path]] = None, stream: Optional[TextIO] = None) -> List[str]:
    if stream is not None:
        try:
            return read_feed_urls(stream)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Couldn't read feed list from stdin: {e}") from e
    if path is None:
        raise ConfigError("No feed list: pipe one on stdin or pass a file with -f.")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return read_feed_urls(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Couldn't read feed list {path}: {e}") from e
