from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    resolved = getattr(logging, level.upper(), None)
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(level=resolved, format=_FORMAT)
    # praw/prawcore debug output includes request bodies
    logging.getLogger("prawcore").setLevel(max(resolved, logging.INFO))
    logging.getLogger("discord").setLevel(max(resolved, logging.WARNING))
