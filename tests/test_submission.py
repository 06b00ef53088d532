# tests/test_submission.py

from __future__ import annotations

import pytest

from taskflow.core.state import AppState
from taskflow.store.client import StoreTransportError
from taskflow.tasks.submission import SubmissionOrchestrator
from taskflow.tasks.task_models import Action, Col
from taskflow.tasks.validation import NOTHING_ELIGIBLE_MESSAGE

from .fakes import FakeSheetStore

TODAY = "2026-10-18"


def _orchestrator(state: AppState) -> SubmissionOrchestrator:
    return SubmissionOrchestrator(state.store, state.registry, state.drafts, state.ids, today=lambda: TODAY)


def _draft(state: AppState, task_id: str, action: Action, remarks: str = "ok", **extra: str) -> None:
    state.drafts.select(task_id)
    state.drafts.set_action(task_id, action)
    state.drafts.set_remarks(task_id, remarks)
    if "extend_date" in extra:
        state.drafts.set_extend_date(task_id, extra["extend_date"])
    if "target" in extra:
        state.drafts.set_transfer_target(task_id, extra["target"])


@pytest.mark.asyncio
async def test_nothing_eligible_is_refused_without_remote_calls(state: AppState, store: FakeSheetStore) -> None:
    await state.registry.load()
    state.drafts.select("TN-001")
    state.drafts.set_action("TN-001", Action.DONE)  # no remarks

    outcome = await _orchestrator(state).submit()

    assert not outcome.ok
    assert outcome.refused == NOTHING_ELIGIBLE_MESSAGE
    assert store.writes == []
    assert "TN-001" in state.drafts


@pytest.mark.asyncio
async def test_done_updates_row_then_clears_drafts_and_reloads(state: AppState, store: FakeSheetStore) -> None:
    await state.registry.load()
    _draft(state, "TN-002", Action.DONE, remarks="called them")

    outcome = await _orchestrator(state).submit()

    assert outcome.ok
    assert outcome.completed == ["TN-002"]
    assert len(store.writes) == 1
    w = store.writes[0]
    assert (w.action, w.row_index) == ("update", 4)
    assert w.values[Col.STATUS] == "Complete"
    assert w.values[Col.COMPLETION] == TODAY
    assert w.values[Col.REMARKS] == "called them"

    assert len(state.drafts) == 0
    # reload picked up the write: TN-002 moved to history
    assert {t.task_id for t in state.registry.history()} == {"TN-002", "TN-003"}


@pytest.mark.asyncio
async def test_batch_runs_in_registry_order(state: AppState, store: FakeSheetStore) -> None:
    await state.registry.load()
    _draft(state, "TN-002", Action.HOLD)
    _draft(state, "TN-001", Action.CANCEL)

    outcome = await _orchestrator(state).submit()

    assert outcome.completed == ["TN-001", "TN-002"]
    assert [w.row_index for w in store.writes] == [2, 4]


@pytest.mark.asyncio
async def test_extend_without_date_is_skipped_silently(state: AppState, store: FakeSheetStore) -> None:
    await state.registry.load()
    _draft(state, "TN-001", Action.EXTEND)
    _draft(state, "TN-002", Action.EXTEND, extend_date="2026-10-25")

    outcome = await _orchestrator(state).submit()

    assert outcome.ok
    assert outcome.skipped == ["TN-001"]
    assert outcome.completed == ["TN-002"]
    assert outcome.notices == []
    assert len(store.writes) == 1
    # TN-002 has slot 0 -> first extension column
    assert store.writes[0].values[Col.EXTEND_1] == "25/10/2026"


@pytest.mark.asyncio
async def test_extend_uses_task_slot(state: AppState, store: FakeSheetStore) -> None:
    await state.registry.load()
    _draft(state, "TN-001", Action.EXTEND, extend_date="2026-10-25")

    await _orchestrator(state).submit()

    values = store.writes[0].values
    assert values[Col.EXTEND_3] == "25/10/2026"  # slot 2
    assert values[Col.STATUS] == ""


@pytest.mark.asyncio
async def test_transfer_updates_then_appends_successor(state: AppState, store: FakeSheetStore) -> None:
    await state.registry.load()
    _draft(state, "TN-001", Action.TRANSFER, remarks="Ravi has the contacts", target="Ravi")

    outcome = await _orchestrator(state).submit()

    assert outcome.ok
    assert outcome.created == {"TN-001": "TN-4"}
    assert [(w.action, w.row_index) for w in store.writes] == [("update", 2), ("insert", None)]

    update, insert = store.writes
    assert update.values[Col.STATUS] == "Transfer"
    assert update.values[Col.REMARKS] == "Ravi has the contacts"

    assert insert.values[Col.TASK_ID] == "TN-4"
    assert insert.values[Col.DOER] == "Ravi"
    assert insert.values[Col.DESCRIPTION] == "Order cement"
    assert insert.values[Col.PLANNED_DATE] == "01/10/2026"
    assert insert.values[Col.STATUS] == "Pending"


@pytest.mark.asyncio
async def test_transfer_update_failure_skips_append_and_keeps_drafts(state: AppState, store: FakeSheetStore) -> None:
    await state.registry.load()
    _draft(state, "TN-001", Action.TRANSFER, target="Ravi")
    store.reject_writes[0] = "Row is protected"

    outcome = await _orchestrator(state).submit()

    assert not outcome.ok
    assert outcome.failed_at == "TN-001"
    assert outcome.reason == "Failed to update task TN-001: Row is protected"
    assert [w.action for w in store.writes] == ["update"]
    assert state.drafts.get("TN-001") is not None


@pytest.mark.asyncio
async def test_transfer_append_failure_is_reported_without_compensation(state: AppState, store: FakeSheetStore) -> None:
    await state.registry.load()
    _draft(state, "TN-001", Action.TRANSFER, target="Ravi")
    store.raise_on_writes[1] = StoreTransportError("HTTP error! status: 502")

    outcome = await _orchestrator(state).submit()

    assert outcome.failed_at == "TN-001"
    assert outcome.reason == "Failed to create transferred task for TN-001: HTTP error! status: 502"
    # the original row stays marked as transferred
    assert store.sheets["Master"][1][Col.STATUS] == "Transfer"
    assert len(state.drafts) == 1


@pytest.mark.asyncio
async def test_transfer_without_target_is_reported_and_batch_continues(state: AppState, store: FakeSheetStore) -> None:
    await state.registry.load()
    _draft(state, "TN-001", Action.TRANSFER)
    _draft(state, "TN-002", Action.DONE)

    outcome = await _orchestrator(state).submit()

    assert outcome.ok
    assert outcome.completed == ["TN-002"]
    assert len(outcome.notices) == 1
    assert "TN-001" in outcome.notices[0]
    assert [w.row_index for w in store.writes] == [4]


@pytest.mark.asyncio
async def test_write_failure_stops_remaining_batch(state: AppState, store: FakeSheetStore) -> None:
    await state.registry.load()
    _draft(state, "TN-001", Action.HOLD)
    _draft(state, "TN-002", Action.DONE)
    store.raise_on_writes[0] = StoreTransportError("connection reset")

    outcome = await _orchestrator(state).submit()

    assert outcome.failed_at == "TN-001"
    assert outcome.completed == []
    assert len(store.writes) == 1
    assert {d.task_id for d in state.drafts.all()} == {"TN-001", "TN-002"}
    assert "connection reset" in outcome.message()


@pytest.mark.asyncio
async def test_failure_mid_batch_reports_completed_prefix(state: AppState, store: FakeSheetStore) -> None:
    await state.registry.load()
    _draft(state, "TN-001", Action.HOLD)
    _draft(state, "TN-002", Action.DONE)
    store.reject_writes[1] = "quota exceeded"

    outcome = await _orchestrator(state).submit()

    assert outcome.completed == ["TN-001"]
    assert outcome.failed_at == "TN-002"
    assert "TN-001" in outcome.message()


@pytest.mark.asyncio
async def test_task_gone_from_snapshot_is_skipped(state: AppState, store: FakeSheetStore) -> None:
    await state.registry.load()
    _draft(state, "TN-001", Action.DONE)
    _draft(state, "TN-404", Action.DONE)

    outcome = await _orchestrator(state).submit()

    assert outcome.ok
    assert outcome.completed == ["TN-001"]
    assert outcome.skipped == ["TN-404"]
    assert len(store.writes) == 1
