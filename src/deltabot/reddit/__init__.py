from __future__ import annotations

from .awarder import FlairDeltaAwarder
from .client import RedditService, build_reddit
from .replies import CommentReplier, CommentReplyBuilder, CommentReplyDetector

__all__ = [
    "CommentReplier",
    "CommentReplyBuilder",
    "CommentReplyDetector",
    "FlairDeltaAwarder",
    "RedditService",
    "build_reddit",
]
