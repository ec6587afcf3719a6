"""Tests for Discord webhook failure alerts."""

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from deltabot.services.failure_alerter import FailureAlerter

WEBHOOK = "https://discord.com/api/webhooks/1/token"


@pytest.fixture
def webhook(monkeypatch):
    hook = MagicMock()
    hook.send = AsyncMock()
    from_url = MagicMock(return_value=hook)
    monkeypatch.setattr(discord.Webhook, "from_url", from_url)
    return hook


async def test_disabled_without_url(webhook):
    alerter = FailureAlerter("")
    assert not alerter.enabled
    await alerter.send("title", "detail")
    webhook.send.assert_not_called()


async def test_sends_title_and_detail(webhook):
    alerter = FailureAlerter(WEBHOOK)
    try:
        await alerter.send("Force add failed", "ResolutionError: NotFound")
    finally:
        await alerter.close()

    content = webhook.send.await_args.kwargs["content"]
    assert content.startswith("**Force add failed**")
    assert "ResolutionError: NotFound" in content
    assert webhook.send.await_args.kwargs["username"] == "DeltaBot"


async def test_long_detail_is_truncated_inside_code_block(webhook):
    alerter = FailureAlerter(WEBHOOK)
    try:
        await alerter.send("Force add failed", "x" * 5000)
    finally:
        await alerter.close()

    content = webhook.send.await_args.kwargs["content"]
    assert len(content) <= 2000
    assert content.endswith("...\n```")


async def test_delivery_errors_are_logged_not_raised(webhook, caplog):
    webhook.send.side_effect = discord.HTTPException(MagicMock(status=500, reason="Server Error"), "boom")
    alerter = FailureAlerter(WEBHOOK)
    try:
        with caplog.at_level("ERROR", logger="deltabot.failure_alerter"):
            await alerter.send("Force add failed", "detail")
    finally:
        await alerter.close()

    assert any("Failed to send failure alert" in r.getMessage() for r in caplog.records)
