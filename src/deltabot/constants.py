from __future__ import annotations

from typing import Final

# Replies sent back to the requesting moderator
ADD_SUCCEEDED_MESSAGE: Final[str] = "Delta has been added."
ADD_FAILED_ALREADY_AWARDED_MESSAGE: Final[str] = (
    "I already successfully awarded a delta for this comment. I can't do 2 for the same comment."
)
ADD_FAILED_ERROR_MESSAGE_FORMAT: Final[str] = (
    "Add failed. DeltaBot is very sorry :(\n\nSend this to a DeltaBot dev:\n\n{diagnostic}"
)

# PM routing
DEFAULT_FORCE_ADD_SUBJECT: Final[str] = "force add"

# Hidden parameter block embedded at the end of every bot comment reply.
# Reddit renders an empty link as nothing, so the payload stays invisible.
REPLY_PARAMS_START: Final[str] = "[](HTTP://DB4PARAMSSTART"
REPLY_PARAMS_END: Final[str] = "DB4PARAMSEND)"

# Flair written by the awarder, e.g. "3∆"
DELTA_FLAIR_SUFFIX: Final[str] = "∆"
DELTA_FLAIR_CSS_CLASS: Final[str] = "points"

# Discord webhook content limit
MAX_ALERT_LENGTH: Final[int] = 2000

DEFAULT_INBOX_POLL_SECONDS: Final[int] = 30

# Reddit private message body limit
MAX_PM_LENGTH: Final[int] = 10000
