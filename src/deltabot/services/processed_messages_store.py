from __future__ import annotations

import aiosqlite

from .base import BaseService


class ProcessedMessageStore(BaseService):
    """Ids of private messages already dispatched.

    The inbox can hand back the same unread message more than once (e.g. when
    mark-read fails), so each message id is claimed before its command runs.
    """

    async def _create_tables(self, db: aiosqlite.Connection) -> None:
        await db.execute(
            """
            CREATE TABLE IF NOT EXISTS processed_messages (
              message_id TEXT PRIMARY KEY,
              subject TEXT NOT NULL,
              created_at_iso TEXT NOT NULL
            )
            """
        )

    async def claim(self, message_id: str, subject: str, created_at_iso: str) -> bool:
        """Try to claim a message id. Returns True if newly claimed, False if already handled."""
        async with aiosqlite.connect(self._path) as db:
            try:
                await db.execute(
                    "INSERT INTO processed_messages (message_id, subject, created_at_iso) VALUES (?, ?, ?)",
                    (message_id, subject, created_at_iso),
                )
                await db.commit()
                return True
            except aiosqlite.IntegrityError:
                self._logger.debug("Message %s already processed", message_id)
                return False

