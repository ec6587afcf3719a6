"""Tests for PM routing and inbox polling."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from deltabot.errors import ResolutionError
from deltabot.inbox import InboxPoller, PrivateMessageDispatcher
from deltabot.models import OutcomeStatus, PrivateMessage, WorkflowOutcome

URL = "https://reddit.com/r/x/comments/abc/_/def"


@pytest.fixture
def workflow():
    wf = MagicMock()
    wf.execute = AsyncMock(return_value=WorkflowOutcome.succeeded())
    return wf


@pytest.fixture
def processed():
    store = MagicMock()
    store.claim = AsyncMock(return_value=True)
    return store


@pytest.fixture
def alerter():
    a = MagicMock()
    a.send = AsyncMock()
    return a


@pytest.fixture
def dispatcher(workflow, processed, alerter):
    return PrivateMessageDispatcher(
        workflow=workflow,
        processed=processed,
        moderators=AsyncMock(return_value={"a_mod"}),
        force_add_subject="force add",
        alerter=alerter,
    )


def _pm(subject="force add", author="A_Mod", body=f"  {URL}\n", pm_id="pm1") -> PrivateMessage:
    return PrivateMessage(id=pm_id, author=author, subject=subject, body=body)


async def test_force_add_from_moderator_runs_workflow(dispatcher, workflow, processed):
    outcome = await dispatcher.dispatch(_pm())

    assert outcome.status is OutcomeStatus.SUCCEEDED
    command = workflow.execute.await_args.args[0]
    assert command.comment_locator == URL
    assert command.message_id == "pm1"
    assert command.requester_id == "A_Mod"
    processed.claim.assert_awaited_once()


async def test_subject_match_is_case_insensitive(dispatcher, workflow):
    await dispatcher.dispatch(_pm(subject="  Force Add "))
    workflow.execute.assert_awaited_once()


async def test_other_subjects_are_ignored(dispatcher, workflow, processed):
    assert await dispatcher.dispatch(_pm(subject="hello")) is None
    workflow.execute.assert_not_called()
    processed.claim.assert_not_called()


async def test_non_moderator_is_ignored(dispatcher, workflow):
    assert await dispatcher.dispatch(_pm(author="random_user")) is None
    workflow.execute.assert_not_called()


async def test_deleted_author_is_ignored(dispatcher, workflow):
    assert await dispatcher.dispatch(_pm(author=None)) is None
    workflow.execute.assert_not_called()


async def test_already_processed_message_is_skipped(dispatcher, workflow, processed):
    processed.claim.return_value = False
    assert await dispatcher.dispatch(_pm()) is None
    workflow.execute.assert_not_called()


async def test_workflow_failure_is_logged_and_alerted(dispatcher, workflow, alerter, caplog):
    workflow.execute.side_effect = ResolutionError("NotFound: gone")

    with caplog.at_level("ERROR", logger="deltabot.inbox"):
        outcome = await dispatcher.dispatch(_pm())

    assert outcome.status is OutcomeStatus.FAILED
    assert "NotFound: gone" in outcome.diagnostic
    assert any("Force add failed" in r.getMessage() for r in caplog.records)
    alerter.send.assert_awaited_once()
    title, detail = alerter.send.await_args.args
    assert URL in title
    assert "NotFound: gone" in detail


async def test_poll_once_dispatches_and_marks_read(dispatcher, workflow):
    item = SimpleNamespace(id="pm9", author=SimpleNamespace(name="a_mod"), subject="force add", body=URL)
    service = MagicMock()
    service.unread_messages = AsyncMock(return_value=[item])
    service.mark_read = AsyncMock()

    handled = await InboxPoller(service, dispatcher, poll_seconds=5).poll_once()

    assert handled == 1
    workflow.execute.assert_awaited_once()
    service.mark_read.assert_awaited_once_with(item)


async def test_poll_once_marks_read_after_failed_command(dispatcher, workflow):
    workflow.execute.side_effect = ResolutionError("NotFound")
    item = SimpleNamespace(id="pm9", author=SimpleNamespace(name="a_mod"), subject="force add", body=URL)
    service = MagicMock()
    service.unread_messages = AsyncMock(return_value=[item])
    service.mark_read = AsyncMock()

    await InboxPoller(service, dispatcher, poll_seconds=5).poll_once()

    service.mark_read.assert_awaited_once_with(item)


def test_to_message_handles_deleted_author():
    item = SimpleNamespace(id="pm2", author=None, subject=None, body=None)
    message = InboxPoller.to_message(item)
    assert message == PrivateMessage(id="pm2", author=None, subject="", body="")
