from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from praw.exceptions import InvalidURL
from praw.models import Comment as PrawComment

log = logging.getLogger("deltabot.override.locks")


def comment_key(locator: str) -> str:
    """Stable key for a comment locator: the comment id when it can be parsed."""
    try:
        return PrawComment.id_from_url(locator.strip()).lower()
    except InvalidURL:
        return locator.strip().lower()


class CommentLocks:
    """Per-comment asyncio locks so overlapping commands for one comment run one at a time."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, locator: str) -> AsyncIterator[str]:
        key = comment_key(locator)
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            if lock.locked():
                log.info("Waiting for in-flight override on comment %s", key)
            async with lock:
                yield key
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                self._waiters.pop(key, None)
                self._locks.pop(key, None)
