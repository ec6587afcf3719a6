from __future__ import annotations

import os
from dataclasses import dataclass

from .constants import DEFAULT_FORCE_ADD_SUBJECT, DEFAULT_INBOX_POLL_SECONDS


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "y", "on"}


def _get_str(name: str, default: str) -> str:
    return os.getenv(name, default).strip() or default


def _require(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise RuntimeError(f"{name} is required")
    return value


@dataclass(frozen=True)
class Settings:
    reddit_client_id: str
    reddit_client_secret: str
    reddit_username: str
    reddit_password: str
    subreddit: str
    reddit_user_agent: str = "DeltaBot moderator override"
    sqlite_path: str = "deltabot.sqlite3"
    log_level: str = "INFO"
    inbox_poll_seconds: int = DEFAULT_INBOX_POLL_SECONDS
    force_add_subject: str = DEFAULT_FORCE_ADD_SUBJECT
    # Serialize overlapping commands for the same comment
    serialize_by_comment: bool = True
    # Empty disables failure alerts
    discord_alert_webhook_url: str = ""


def load_settings() -> Settings:
    return Settings(
        reddit_client_id=_require("REDDIT_CLIENT_ID"),
        reddit_client_secret=_require("REDDIT_CLIENT_SECRET"),
        reddit_username=_require("REDDIT_USERNAME"),
        reddit_password=_require("REDDIT_PASSWORD"),
        subreddit=_require("SUBREDDIT"),
        reddit_user_agent=_get_str("REDDIT_USER_AGENT", "DeltaBot moderator override"),
        sqlite_path=_get_str("SQLITE_PATH", "deltabot.sqlite3"),
        log_level=_get_str("LOG_LEVEL", "INFO"),
        inbox_poll_seconds=max(1, _get_int("INBOX_POLL_SECONDS", DEFAULT_INBOX_POLL_SECONDS)),
        force_add_subject=_get_str("FORCE_ADD_SUBJECT", DEFAULT_FORCE_ADD_SUBJECT),
        serialize_by_comment=_get_bool("SERIALIZE_BY_COMMENT", True),
        discord_alert_webhook_url=os.getenv("DISCORD_ALERT_WEBHOOK_URL", "").strip(),
    )
