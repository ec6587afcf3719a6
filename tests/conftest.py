from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from deltabot.interfaces import Collaborators
from deltabot.models import OverrideCommand, PrivateMessage, ReplyDetectionResult
from deltabot.override import OverrideWorkflow
from deltabot.reddit.replies import CommentReplyBuilder, CommentReplyDetector
from deltabot.testing.fakes import FakeThread

COMMENT_URL = "https://reddit.com/r/x/comments/abc/_/def"


@pytest.fixture
def thread() -> FakeThread:
    t = FakeThread()
    t.add_comment("def", author="helpful_user")
    return t


@pytest.fixture
def fake_workflow(thread: FakeThread) -> OverrideWorkflow:
    return OverrideWorkflow(
        Collaborators(
            resolver=thread,
            detector=CommentReplyDetector(thread.bot_username),
            awarder=thread,
            composer=CommentReplyBuilder(),
            publisher=thread,
            notifier=thread,
        )
    )


@pytest.fixture
def command() -> OverrideCommand:
    return OverrideCommand.from_message(
        PrivateMessage(id="pm1", author="a_mod", subject="force add", body=f" {COMMENT_URL} ")
    )


@pytest.fixture
def mocks() -> MagicMock:
    """Collaborators as mocks attached to one parent so call order is recorded."""
    m = MagicMock()
    m.attach_mock(AsyncMock(), "resolver")
    m.attach_mock(MagicMock(), "detector")
    m.attach_mock(AsyncMock(), "awarder")
    m.attach_mock(MagicMock(), "composer")
    m.attach_mock(AsyncMock(), "publisher")
    m.attach_mock(AsyncMock(), "notifier")
    m.detector.detect.return_value = ReplyDetectionResult.none()
    m.composer.compose.return_value = "mod reply"
    return m


@pytest.fixture
def mock_workflow(mocks: MagicMock) -> OverrideWorkflow:
    return OverrideWorkflow(
        Collaborators(
            resolver=mocks.resolver,
            detector=mocks.detector,
            awarder=mocks.awarder,
            composer=mocks.composer,
            publisher=mocks.publisher,
            notifier=mocks.notifier,
        )
    )
