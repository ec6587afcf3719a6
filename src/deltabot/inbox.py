from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional

from .models import OverrideCommand, PrivateMessage, WorkflowOutcome
from .override.workflow import OverrideWorkflow, describe_failure
from .reddit.client import RedditService, author_name
from .services.failure_alerter import FailureAlerter
from .services.processed_messages_store import ProcessedMessageStore

log = logging.getLogger("deltabot.inbox")

ModeratorsFn = Callable[[], Awaitable[set[str]]]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class PrivateMessageDispatcher:
    """Routes moderator force-add PMs to the override workflow.

    This is the outer layer the workflow re-raises into: failures are logged
    and alerted here, after the moderator has already been told.
    """

    def __init__(
        self,
        *,
        workflow: OverrideWorkflow,
        processed: ProcessedMessageStore,
        moderators: ModeratorsFn,
        force_add_subject: str,
        alerter: Optional[FailureAlerter] = None,
    ) -> None:
        self.workflow = workflow
        self.processed = processed
        self.moderators = moderators
        self.subject = force_add_subject.strip().lower()
        self.alerter = alerter

    async def dispatch(self, message: PrivateMessage) -> Optional[WorkflowOutcome]:
        if message.subject.strip().lower() != self.subject:
            log.debug("Ignoring PM %s with subject %r", message.id, message.subject)
            return None

        mods = await self.moderators()
        if (message.author or "").lower() not in mods:
            log.warning("Ignoring force add from non-moderator %s (pm=%s)", message.author, message.id)
            return None

        if not await self.processed.claim(message.id, message.subject, _now_iso()):
            log.info("PM %s already handled; skipping", message.id)
            return None

        command = OverrideCommand.from_message(message)
        try:
            return await self.workflow.execute(command)
        except Exception as exc:
            log.exception("Force add failed (pm=%s, locator=%r)", message.id, command.comment_locator)
            outcome = WorkflowOutcome.failed(describe_failure(exc))
            if self.alerter is not None:
                await self.alerter.send(f"Force add failed for {command.comment_locator}", outcome.diagnostic or "")
            return outcome


class InboxPoller:
    """Polls unread PMs on an interval and feeds them to the dispatcher."""

    def __init__(self, service: RedditService, dispatcher: PrivateMessageDispatcher, *, poll_seconds: int) -> None:
        self._service = service
        self._dispatcher = dispatcher
        self._poll_seconds = max(1, int(poll_seconds))
        self._stop = asyncio.Event()

    @staticmethod
    def to_message(item: Any) -> PrivateMessage:
        return PrivateMessage(
            id=item.id,
            author=author_name(item),
            subject=item.subject or "",
            body=item.body or "",
        )

    async def poll_once(self) -> int:
        items = await self._service.unread_messages()
        for item in items:
            await self._dispatcher.dispatch(self.to_message(item))
            await self._service.mark_read(item)
        return len(items)

    async def run(self) -> None:
        self._stop.clear()
        log.info("Inbox poller started (every %ss)", self._poll_seconds)
        while not self._stop.is_set():
            try:
                handled = await self.poll_once()
                if handled:
                    log.info("Processed %s unread message(s)", handled)
            except Exception:
                log.exception("Inbox poll failed")
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self._poll_seconds)
            except asyncio.TimeoutError:
                pass
        log.info("Inbox poller stopped")

    def stop(self) -> None:
        self._stop.set()
