from __future__ import annotations

import asyncio
import logging
import re
from typing import Optional

import praw

from ..constants import DELTA_FLAIR_CSS_CLASS, DELTA_FLAIR_SUFFIX
from ..errors import AwardError
from ..models import Comment
from .client import REDDIT_ERRORS

log = logging.getLogger("deltabot.awarder")

_COUNT_RE = re.compile(r"^\s*(\d+)\s*" + re.escape(DELTA_FLAIR_SUFFIX))


def parse_delta_count(flair_text: Optional[str]) -> int:
    if not flair_text:
        return 0
    match = _COUNT_RE.match(flair_text)
    return int(match.group(1)) if match else 0


def format_delta_flair(count: int) -> str:
    return f"{count}{DELTA_FLAIR_SUFFIX}"


class FlairDeltaAwarder:
    """Awards a delta by bumping the comment author's ``N∆`` user flair."""

    def __init__(self, reddit: praw.Reddit, subreddit: str) -> None:
        self._reddit = reddit
        self._subreddit = subreddit

    async def award(self, comment: Comment) -> None:
        await asyncio.to_thread(self._award_sync, comment)

    def _award_sync(self, comment: Comment) -> None:
        if not comment.author:
            raise AwardError(f"Comment {comment.id} has no author to award (deleted account)")
        sub = self._reddit.subreddit(self._subreddit)
        try:
            current = next(iter(sub.flair(redditor=comment.author)), None)
            count = parse_delta_count(current.get("flair_text") if current else None) + 1
            sub.flair.set(comment.author, text=format_delta_flair(count), css_class=DELTA_FLAIR_CSS_CLASS)
        except REDDIT_ERRORS as e:
            raise AwardError(f"Could not award delta to /u/{comment.author}: {type(e).__name__}: {e}") from e
        log.info("Awarded delta to /u/%s for comment %s (now %s)", comment.author, comment.id, count)
