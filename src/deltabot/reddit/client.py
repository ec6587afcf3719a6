from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import praw
import prawcore
from praw.exceptions import PRAWException
from praw.models import Comment as PrawComment, Message

from ..config import Settings
from ..constants import MAX_PM_LENGTH
from ..errors import NotifyError, ResolutionError
from ..models import Comment

log = logging.getLogger("deltabot.reddit")

# Everything praw/prawcore can raise for a failed request or bad input
REDDIT_ERRORS = (PRAWException, prawcore.exceptions.PrawcoreException)


def build_reddit(settings: Settings) -> praw.Reddit:
    return praw.Reddit(
        client_id=settings.reddit_client_id,
        client_secret=settings.reddit_client_secret,
        username=settings.reddit_username,
        password=settings.reddit_password,
        user_agent=settings.reddit_user_agent,
    )


def author_name(thing: Any) -> Optional[str]:
    """Author name of a praw thing; None when the account is deleted."""
    author = getattr(thing, "author", None)
    return author.name if author is not None else None


def comment_from_praw(pc: Any) -> Comment:
    return Comment(
        id=pc.id,
        author=author_name(pc),
        body=pc.body or "",
        permalink=getattr(pc, "permalink", "") or "",
        parent_id=getattr(pc, "parent_id", None),
    )


class RedditService:
    """Comment lookup and PM replies over praw.

    praw is blocking, so every request runs in a worker thread.
    """

    def __init__(self, reddit: praw.Reddit, subreddit: str) -> None:
        self._reddit = reddit
        self._subreddit = subreddit

    # CommentResolver

    async def resolve_by_locator(self, locator: str) -> Comment:
        return await asyncio.to_thread(self._resolve_sync, locator)

    def _resolve_sync(self, locator: str) -> Comment:
        try:
            pc = self._reddit.comment(url=locator)
            # Lazy object: reading body forces the fetch
            _ = pc.body
        except REDDIT_ERRORS as e:
            raise ResolutionError(f"Could not load comment from {locator!r}: {type(e).__name__}: {e}") from e
        return comment_from_praw(pc)

    async def populate_context(self, comment: Comment) -> None:
        await asyncio.to_thread(self._populate_sync, comment)

    def _populate_sync(self, comment: Comment) -> None:
        try:
            pc = self._reddit.comment(comment.id)
            pc.refresh()
            pc.replies.replace_more(limit=None)
            replies = [comment_from_praw(r) for r in pc.replies]
            parent = pc.parent()
            parent_model = comment_from_praw(parent) if isinstance(parent, PrawComment) else None
        except REDDIT_ERRORS as e:
            raise ResolutionError(f"Could not load replies for comment {comment.id}: {type(e).__name__}: {e}") from e
        comment.replies = replies
        comment.parent = parent_model

    # Notifier

    async def reply_to_requester(self, message_id: str, text: str) -> None:
        await asyncio.to_thread(self._reply_pm_sync, message_id, text)

    def _reply_pm_sync(self, message_id: str, text: str) -> None:
        if len(text) > MAX_PM_LENGTH:
            text = text[: MAX_PM_LENGTH - 3] + "..."
        try:
            self._reddit.inbox.message(message_id).reply(body=text)
        except REDDIT_ERRORS as e:
            raise NotifyError(f"Could not reply to message {message_id}: {type(e).__name__}: {e}") from e

    # Inbox access for the poller

    async def moderators(self) -> set[str]:
        return await asyncio.to_thread(self._moderators_sync)

    def _moderators_sync(self) -> set[str]:
        return {m.name.lower() for m in self._reddit.subreddit(self._subreddit).moderator()}

    async def unread_messages(self) -> list[Any]:
        return await asyncio.to_thread(self._unread_sync)

    def _unread_sync(self) -> list[Any]:
        messages: list[Any] = []
        other: list[Any] = []
        for item in self._reddit.inbox.unread(limit=None):
            (messages if isinstance(item, Message) else other).append(item)
        # Comment replies and username mentions are not commands
        if other:
            self._reddit.inbox.mark_read(other)
            log.debug("Marked %s non-PM inbox item(s) read", len(other))
        return messages

    async def mark_read(self, item: Any) -> None:
        await asyncio.to_thread(self._reddit.inbox.mark_read, [item])
