from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any, Optional

import praw

from ..constants import REPLY_PARAMS_END, REPLY_PARAMS_START
from ..errors import PublishError
from ..models import Comment, DeltaCommentReplyType, ReplyDetectionResult
from .client import REDDIT_ERRORS

log = logging.getLogger("deltabot.replies")

_PARAMS_RE = re.compile(re.escape(REPLY_PARAMS_START) + r"\s*(\{.*?\})\s*" + re.escape(REPLY_PARAMS_END), re.DOTALL)

_TEMPLATES: dict[DeltaCommentReplyType, str] = {
    DeltaCommentReplyType.SUCCESS_CONFIRMATION: "Confirmed: 1 delta awarded to /u/{awardee}.",
    DeltaCommentReplyType.MODERATOR_ADDED: (
        "Confirmed: 1 delta awarded to /u/{awardee}. This delta was added by a moderator."
    ),
    DeltaCommentReplyType.FAIL_COMMENT_TOO_SHORT: (
        "This delta has been rejected. The length of your comment suggests that you haven't "
        "explained how /u/{awardee} changed your view."
    ),
    DeltaCommentReplyType.FAIL_CANNOT_AWARD_SELF: "You cannot award yourself a delta.",
    DeltaCommentReplyType.FAIL_CANNOT_AWARD_OP: "You cannot award OP a delta as they are the OP.",
    DeltaCommentReplyType.FAIL_CANNOT_AWARD_BOT: "You cannot award a delta to DeltaBot.",
}


def render_params(params: dict[str, Any]) -> str:
    return f"{REPLY_PARAMS_START}\n{json.dumps(params, separators=(',', ':'))}\n{REPLY_PARAMS_END}"


def parse_params(body: str) -> Optional[dict[str, Any]]:
    """Hidden parameter block of a bot reply, or None if absent or unreadable."""
    match = _PARAMS_RE.search(body or "")
    if not match:
        return None
    try:
        data = json.loads(match.group(1))
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


class CommentReplyBuilder:
    def compose(self, kind: DeltaCommentReplyType, comment: Comment) -> str:
        awardee = comment.author or "[deleted]"
        text = _TEMPLATES[kind].format(awardee=awardee)
        params = {"comment": comment.id, "type": kind.value, "awardee": awardee}
        return f"{text}\n\n{render_params(params)}"


class CommentReplyDetector:
    """Finds this bot's reply among a comment's direct replies."""

    def __init__(self, bot_username: str) -> None:
        self._bot = bot_username.lower()

    def detect(self, comment: Comment) -> ReplyDetectionResult:
        for reply in comment.replies:
            if (reply.author or "").lower() != self._bot:
                continue
            params = parse_params(reply.body)
            if params is None:
                # Not one of ours (e.g. an unrelated bot comment in the thread)
                continue
            try:
                kind = DeltaCommentReplyType(params.get("type"))
            except ValueError:
                log.warning("Unknown reply type %r on bot reply %s", params.get("type"), reply.id)
                return ReplyDetectionResult(has_prior_reply=True, was_successful=False, prior_reply=reply)
            return ReplyDetectionResult(
                has_prior_reply=True,
                was_successful=kind.is_success,
                prior_reply=reply,
                reply_type=kind,
            )
        return ReplyDetectionResult.none()


class CommentReplier:
    """Deletes and publishes bot replies over praw."""

    def __init__(self, reddit: praw.Reddit) -> None:
        self._reddit = reddit

    async def delete(self, reply: Comment) -> None:
        await asyncio.to_thread(self._delete_sync, reply)

    def _delete_sync(self, reply: Comment) -> None:
        try:
            self._reddit.comment(reply.id).delete()
        except REDDIT_ERRORS as e:
            raise PublishError(f"Could not delete reply {reply.id}: {type(e).__name__}: {e}") from e
        log.info("Deleted prior bot reply %s", reply.id)

    async def publish(self, comment: Comment, text: str) -> None:
        await asyncio.to_thread(self._publish_sync, comment, text)

    def _publish_sync(self, comment: Comment, text: str) -> None:
        try:
            posted = self._reddit.comment(comment.id).reply(body=text)
        except REDDIT_ERRORS as e:
            raise PublishError(f"Could not reply to comment {comment.id}: {type(e).__name__}: {e}") from e
        if posted is None:
            raise PublishError(f"Reply to comment {comment.id} was not created")
        log.info("Posted reply %s on comment %s", posted.id, comment.id)
