from __future__ import annotations
import os
import yaml

from .errors import ConfigError

DEFAULT_PATH = "rssreader.yaml"


def load_settings(path: str = DEFAULT_PATH) -> dict:
    """Settings from an optional YAML file, with secrets taken from the environment.

    Keys: ``user_agent``, ``timeout`` (seconds, ``None`` leaves it to the HTTP
    stack), ``log_level`` and ``telegram: {bot_token, chat_id}``.
    ``BOT_TOKEN``, ``OUT_CHAT`` and ``LOG_LEVEL`` override the file.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        data = {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Couldn't load settings from {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")

    data.setdefault("user_agent", "rssreader/0.1"); data.setdefault("timeout", None)
    data.setdefault("log_level", "INFO")
    tg = data.get("telegram") or {}
    if not isinstance(tg, dict):
        raise ConfigError(f"{path}: 'telegram' must be a mapping")
    tg.setdefault("bot_token", None); tg.setdefault("chat_id", None)
    data["telegram"] = tg

    if os.getenv("BOT_TOKEN"): tg["bot_token"] = os.getenv("BOT_TOKEN")
    if os.getenv("OUT_CHAT"): tg["chat_id"] = os.getenv("OUT_CHAT")
    if os.getenv("LOG_LEVEL"): data["log_level"] = os.getenv("LOG_LEVEL")

    if data["timeout"] is not None:
        try:
            data["timeout"] = float(data["timeout"])
        except (TypeError, ValueError):
            raise ConfigError(f"timeout must be a number of seconds, got {data['timeout']!r}") from None
    data["log_level"] = str(data["log_level"]).upper()
    if data["log_level"] not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ConfigError(f"unknown log level {data['log_level']!r}")
    return data
