from __future__ import annotations

from .locks import CommentLocks, comment_key
from .workflow import OverrideWorkflow, describe_failure

__all__ = ["CommentLocks", "OverrideWorkflow", "comment_key", "describe_failure"]
