from __future__ import annotations

import asyncio
import logging
import signal

from .config import Settings
from .inbox import InboxPoller, PrivateMessageDispatcher
from .interfaces import Collaborators
from .override import CommentLocks, OverrideWorkflow
from .reddit import (
    CommentReplier,
    CommentReplyBuilder,
    CommentReplyDetector,
    FlairDeltaAwarder,
    RedditService,
    build_reddit,
)
from .services.failure_alerter import FailureAlerter
from .services.processed_messages_store import ProcessedMessageStore

log = logging.getLogger("deltabot.bot")


class DeltaBot:
    """Wires the Reddit collaborators, the override workflow and the inbox poller."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        reddit = build_reddit(settings)
        self.reddit_service = RedditService(reddit, settings.subreddit)
        self.workflow = OverrideWorkflow(
            Collaborators(
                resolver=self.reddit_service,
                detector=CommentReplyDetector(settings.reddit_username),
                awarder=FlairDeltaAwarder(reddit, settings.subreddit),
                composer=CommentReplyBuilder(),
                publisher=CommentReplier(reddit),
                notifier=self.reddit_service,
            ),
            locks=CommentLocks() if settings.serialize_by_comment else None,
        )
        self.processed = ProcessedMessageStore(settings.sqlite_path)
        self.alerter = FailureAlerter(settings.discord_alert_webhook_url)
        self.dispatcher = PrivateMessageDispatcher(
            workflow=self.workflow,
            processed=self.processed,
            moderators=self.reddit_service.moderators,
            force_add_subject=settings.force_add_subject,
            alerter=self.alerter,
        )
        self.poller = InboxPoller(self.reddit_service, self.dispatcher, poll_seconds=settings.inbox_poll_seconds)

    async def start(self) -> None:
        await self.processed.init()
        if not self.alerter.enabled:
            log.info("DISCORD_ALERT_WEBHOOK_URL not set; failure alerts disabled")

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self.poller.stop)
            except (NotImplementedError, RuntimeError):
                # Windows event loops
                pass

        log.info("DeltaBot running as /u/%s on r/%s", self.settings.reddit_username, self.settings.subreddit)
        try:
            await self.poller.run()
        finally:
            await self.alerter.close()
