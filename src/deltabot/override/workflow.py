from __future__ import annotations

import logging
import traceback
from typing import Optional

from ..interfaces import Collaborators, validate_collaborators
from ..models import DeltaCommentReplyType, OverrideCommand, WorkflowOutcome
from .locks import CommentLocks

log = logging.getLogger("deltabot.override")


def describe_failure(exc: BaseException) -> str:
    """Full descriptive text of a failure: type, message and traceback."""
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip()


class OverrideWorkflow:
    """Moderator force-add of a delta on a single comment.

    Every fact is re-read from Reddit on each run; nothing is cached between
    commands. A delta awarded before a later step fails is not rolled back;
    the moderator re-issues the command and the guard lets it through because
    no successful reply exists yet.
    """

    def __init__(self, collaborators: Collaborators, *, locks: Optional[CommentLocks] = None) -> None:
        self.c = validate_collaborators(collaborators)
        self.locks = locks

    async def execute(self, command: OverrideCommand) -> WorkflowOutcome:
        if self.locks is None:
            return await self._execute(command)
        async with self.locks.hold(command.comment_locator):
            return await self._execute(command)

    async def _execute(self, command: OverrideCommand) -> WorkflowOutcome:
        c = self.c
        log.info(
            "Force add requested by %s for %r (pm=%s)",
            command.requester_id,
            command.comment_locator,
            command.message_id,
        )
        try:
            comment = await c.resolver.resolve_by_locator(command.comment_locator)
            # Replies are needed to look for an existing bot reply
            await c.resolver.populate_context(comment)

            detection = c.detector.detect(comment)

            if detection.has_prior_reply and detection.was_successful:
                log.info("Comment %s already has a successful delta reply; not awarding again", comment.id)
                outcome = WorkflowOutcome.already_awarded()
                await self._notify(command, outcome)
                return outcome

            # Mods can award to any comment, eligibility rules do not apply
            await c.awarder.award(comment)

            reply = c.composer.compose(DeltaCommentReplyType.MODERATOR_ADDED, comment)

            # Never edit the old reply: delete it, then post the moderator one
            if detection.prior_reply is not None:
                await c.publisher.delete(detection.prior_reply)
            await c.publisher.publish(comment, reply)

            outcome = WorkflowOutcome.succeeded()
            await self._notify(command, outcome)
            log.info("Delta force-added to comment %s", comment.id)
            return outcome
        except Exception as exc:
            outcome = WorkflowOutcome.failed(describe_failure(exc))
            log.warning("Force add failed for %r: %s: %s", command.comment_locator, type(exc).__name__, exc)
            await self._notify(command, outcome)
            # Re-raised so the caller logs it
            raise

    async def _notify(self, command: OverrideCommand, outcome: WorkflowOutcome) -> None:
        await self.c.notifier.reply_to_requester(command.message_id, outcome.reply_text)
