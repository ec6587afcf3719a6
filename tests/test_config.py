"""Tests for environment-backed settings."""

import pytest

from deltabot.config import load_settings

REQUIRED = {
    "REDDIT_CLIENT_ID": "cid",
    "REDDIT_CLIENT_SECRET": "secret",
    "REDDIT_USERNAME": "DeltaBot",
    "REDDIT_PASSWORD": "pw",
    "SUBREDDIT": "changemyview",
}

OPTIONAL = [
    "REDDIT_USER_AGENT",
    "SQLITE_PATH",
    "LOG_LEVEL",
    "INBOX_POLL_SECONDS",
    "FORCE_ADD_SUBJECT",
    "SERIALIZE_BY_COMMENT",
    "DISCORD_ALERT_WEBHOOK_URL",
]


@pytest.fixture
def env(monkeypatch):
    for name in OPTIONAL:
        monkeypatch.delenv(name, raising=False)
    for name, value in REQUIRED.items():
        monkeypatch.setenv(name, value)
    return monkeypatch


def test_defaults(env):
    settings = load_settings()
    assert settings.subreddit == "changemyview"
    assert settings.reddit_username == "DeltaBot"
    assert settings.sqlite_path == "deltabot.sqlite3"
    assert settings.log_level == "INFO"
    assert settings.inbox_poll_seconds == 30
    assert settings.force_add_subject == "force add"
    assert settings.serialize_by_comment is True
    assert settings.discord_alert_webhook_url == ""


def test_overrides(env):
    env.setenv("INBOX_POLL_SECONDS", "5")
    env.setenv("SERIALIZE_BY_COMMENT", "off")
    env.setenv("FORCE_ADD_SUBJECT", "add")
    env.setenv("DISCORD_ALERT_WEBHOOK_URL", " https://discord.com/api/webhooks/1/abc ")
    settings = load_settings()
    assert settings.inbox_poll_seconds == 5
    assert settings.serialize_by_comment is False
    assert settings.force_add_subject == "add"
    assert settings.discord_alert_webhook_url == "https://discord.com/api/webhooks/1/abc"


def test_malformed_int_falls_back(env):
    env.setenv("INBOX_POLL_SECONDS", "soon")
    assert load_settings().inbox_poll_seconds == 30


@pytest.mark.parametrize("name", sorted(REQUIRED))
def test_missing_required_raises(env, name):
    env.delenv(name)
    with pytest.raises(RuntimeError, match=name):
        load_settings()
