from __future__ import annotations


class DeltaBotError(Exception):
    """Base class for remote-state failures raised by collaborators."""


class ResolutionError(DeltaBotError):
    """Locator does not map to a comment, or its context could not be loaded."""


class AwardError(DeltaBotError):
    """The remote award attempt was rejected."""


class PublishError(DeltaBotError):
    """Deleting or publishing a comment reply failed."""


class NotifyError(DeltaBotError):
    """Sending a private-message response failed."""
