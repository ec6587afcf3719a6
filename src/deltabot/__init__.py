"""DeltaBot moderator override subsystem.

Modules:
- override workflow (guard, forced award, reply swap, requester notification)
- Reddit-backed collaborators (praw)
- inbox dispatch + processed-message dedupe (aiosqlite)
- failure alerting (Discord webhook)
"""
from __future__ import annotations

__version__ = "0.1.0"
