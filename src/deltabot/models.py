from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .constants import (
    ADD_FAILED_ALREADY_AWARDED_MESSAGE,
    ADD_FAILED_ERROR_MESSAGE_FORMAT,
    ADD_SUCCEEDED_MESSAGE,
)


@dataclass(frozen=True)
class PrivateMessage:
    """Normalized inbound private message."""

    id: str
    author: Optional[str]
    subject: str
    body: str


@dataclass(frozen=True)
class OverrideCommand:
    requester_id: Optional[str]
    message_id: str
    comment_locator: str

    @classmethod
    def from_message(cls, message: PrivateMessage) -> "OverrideCommand":
        # The body should be the URL to a comment
        return cls(
            requester_id=message.author,
            message_id=message.id,
            comment_locator=(message.body or "").strip(),
        )


@dataclass
class Comment:
    """A remote comment with the relations needed to look for bot replies.

    ``parent`` and ``replies`` are empty until the resolver populates them.
    """

    id: str
    author: Optional[str]
    body: str
    permalink: str = ""
    parent_id: Optional[str] = None
    parent: Optional["Comment"] = None
    replies: list["Comment"] = field(default_factory=list)

    @property
    def fullname(self) -> str:
        return f"t1_{self.id}"


class DeltaCommentReplyType(Enum):
    SUCCESS_CONFIRMATION = "SuccessConfirmation"
    FAIL_COMMENT_TOO_SHORT = "FailCommentTooShort"
    FAIL_CANNOT_AWARD_SELF = "FailCannotAwardSelf"
    FAIL_CANNOT_AWARD_OP = "FailCannotAwardOP"
    FAIL_CANNOT_AWARD_BOT = "FailCannotAwardDeltaBot"
    MODERATOR_ADDED = "ModeratorAdded"

    @property
    def is_success(self) -> bool:
        return self in (DeltaCommentReplyType.SUCCESS_CONFIRMATION, DeltaCommentReplyType.MODERATOR_ADDED)


@dataclass(frozen=True)
class ReplyDetectionResult:
    has_prior_reply: bool
    was_successful: bool
    prior_reply: Optional[Comment] = None
    reply_type: Optional[DeltaCommentReplyType] = None

    @classmethod
    def none(cls) -> "ReplyDetectionResult":
        return cls(has_prior_reply=False, was_successful=False)


class OutcomeStatus(Enum):
    ALREADY_AWARDED = "already_awarded"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class WorkflowOutcome:
    status: OutcomeStatus
    diagnostic: Optional[str] = None

    @classmethod
    def already_awarded(cls) -> "WorkflowOutcome":
        return cls(OutcomeStatus.ALREADY_AWARDED)

    @classmethod
    def succeeded(cls) -> "WorkflowOutcome":
        return cls(OutcomeStatus.SUCCEEDED)

    @classmethod
    def failed(cls, diagnostic: str) -> "WorkflowOutcome":
        return cls(OutcomeStatus.FAILED, diagnostic)

    @property
    def reply_text(self) -> str:
        """Text sent back to the requesting moderator."""
        if self.status is OutcomeStatus.ALREADY_AWARDED:
            return ADD_FAILED_ALREADY_AWARDED_MESSAGE
        if self.status is OutcomeStatus.SUCCEEDED:
            return ADD_SUCCEEDED_MESSAGE
        return ADD_FAILED_ERROR_MESSAGE_FORMAT.format(diagnostic=self.diagnostic or "")
