"""
Collaborator contracts for the DeltaBot override workflow.

The workflow only ever talks to these capabilities; concrete Reddit-backed
implementations live in ``deltabot.reddit`` and fakes in ``deltabot.testing``.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .models import Comment, DeltaCommentReplyType, ReplyDetectionResult


@runtime_checkable
class CommentResolver(Protocol):
    """Maps a locator (comment URL) to a remote comment."""

    @abstractmethod
    async def resolve_by_locator(self, locator: str) -> Comment:
        """Fetch the comment. Raises ResolutionError."""
        ...

    @abstractmethod
    async def populate_context(self, comment: Comment) -> None:
        """Fill in parent and replies in place. Raises ResolutionError."""
        ...


@runtime_checkable
class ReplyDetector(Protocol):
    """Looks for an existing bot reply on a comment."""

    @abstractmethod
    def detect(self, comment: Comment) -> ReplyDetectionResult:
        ...


@runtime_checkable
class AwardEngine(Protocol):
    """Awards a delta to a comment's author."""

    @abstractmethod
    async def award(self, comment: Comment) -> None:
        """Raises AwardError."""
        ...


@runtime_checkable
class ReplyComposer(Protocol):
    """Builds reply text for a reply type."""

    @abstractmethod
    def compose(self, kind: DeltaCommentReplyType, comment: Comment) -> str:
        ...


@runtime_checkable
class ReplyPublisher(Protocol):
    """Deletes and publishes bot replies."""

    @abstractmethod
    async def delete(self, reply: Comment) -> None:
        """Raises PublishError."""
        ...

    @abstractmethod
    async def publish(self, comment: Comment, text: str) -> None:
        """Raises PublishError."""
        ...


@runtime_checkable
class Notifier(Protocol):
    """Replies to the private message that issued a command."""

    @abstractmethod
    async def reply_to_requester(self, message_id: str, text: str) -> None:
        """Raises NotifyError."""
        ...


@dataclass(frozen=True)
class Collaborators:
    resolver: CommentResolver
    detector: ReplyDetector
    awarder: AwardEngine
    composer: ReplyComposer
    publisher: ReplyPublisher
    notifier: Notifier


_REQUIRED: dict[str, tuple[type, tuple[str, ...]]] = {
    "resolver": (CommentResolver, ("resolve_by_locator", "populate_context")),
    "detector": (ReplyDetector, ("detect",)),
    "awarder": (AwardEngine, ("award",)),
    "composer": (ReplyComposer, ("compose",)),
    "publisher": (ReplyPublisher, ("delete", "publish")),
    "notifier": (Notifier, ("reply_to_requester",)),
}


def validate_collaborators(collaborators: Collaborators) -> Collaborators:
    """Validate and return the collaborator set."""
    for name, (proto, methods) in _REQUIRED.items():
        obj = getattr(collaborators, name)
        for method in methods:
            if not callable(getattr(obj, method, None)):
                raise AttributeError(f"{proto.__name__} {obj!r} missing required method: {method}")
    return collaborators
