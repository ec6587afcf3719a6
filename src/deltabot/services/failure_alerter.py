from __future__ import annotations

import logging
from typing import Optional

import aiohttp
import discord

from ..constants import MAX_ALERT_LENGTH

log = logging.getLogger("deltabot.failure_alerter")


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 4] + "\n..."


class FailureAlerter:
    """Posts command failures to a Discord channel webhook for the bot devs.

    Disabled when no webhook URL is configured. Delivery errors are logged and
    never raised.
    """

    def __init__(self, webhook_url: str, *, username: str = "DeltaBot") -> None:
        self._url = webhook_url.strip()
        self._username = username
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def enabled(self) -> bool:
        return bool(self._url)

    async def send(self, title: str, detail: str) -> None:
        if not self.enabled:
            return
        head = f"**{title}**\n```\n"
        tail = "\n```"
        content = head + _truncate(detail, MAX_ALERT_LENGTH - len(head) - len(tail)) + tail
        try:
            if self._session is None or self._session.closed:
                self._session = aiohttp.ClientSession()
            webhook = discord.Webhook.from_url(self._url, session=self._session)
            await webhook.send(content=content, username=self._username)
        except (discord.HTTPException, aiohttp.ClientError, ValueError):
            log.exception("Failed to send failure alert")

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
