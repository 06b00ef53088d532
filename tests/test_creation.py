# tests/test_creation.py

from __future__ import annotations

import pytest

from taskflow.core.state import AppState
from taskflow.store.client import StoreTransportError
from taskflow.tasks.creation import NOTHING_TO_CREATE_MESSAGE, create_tasks
from taskflow.tasks.roster import DoerRoster
from taskflow.tasks.task_models import Col, NewTaskForm

from .fakes import FakeSheetStore


@pytest.mark.asyncio
async def test_complete_forms_are_appended_in_one_write(state: AppState, store: FakeSheetStore) -> None:
    forms = [
        NewTaskForm(doer_name="Asha", description="Measure site", planned_date="2026-11-03"),
        NewTaskForm(doer_name="Ravi", description=""),  # incomplete
        NewTaskForm(doer_name=" Ravi ", description=" Book truck ", planned_date="2026-11-04"),
    ]

    outcome = await create_tasks(store, state.ids, forms, sheet="Master")

    assert outcome.ok
    assert outcome.task_ids == ["TN-004", "TN-005"]
    assert outcome.skipped == 1
    assert "TN-004, TN-005" in outcome.message()

    assert len(store.writes) == 1
    call = store.writes[0]
    assert call.action == "insertMultiple"
    first, second = call.values
    assert first[Col.TASK_ID] == "TN-004"
    assert first[Col.PLANNED_DATE] == "03/11/2026"
    assert first[Col.STATUS] == "Pending"
    assert second[Col.DOER] == "Ravi"
    assert second[Col.DESCRIPTION] == "Book truck"


@pytest.mark.asyncio
async def test_no_complete_form_makes_no_remote_call(state: AppState, store: FakeSheetStore) -> None:
    outcome = await create_tasks(store, state.ids, [NewTaskForm(doer_name="Asha")])

    assert outcome.error == NOTHING_TO_CREATE_MESSAGE
    assert store.writes == []
    assert store.fetch_calls == []


@pytest.mark.asyncio
async def test_rejected_append_is_reported(state: AppState, store: FakeSheetStore) -> None:
    store.reject_writes[0] = "Sheet is locked"
    form = NewTaskForm(doer_name="Asha", description="x", planned_date="2026-11-03")

    outcome = await create_tasks(store, state.ids, [form])

    assert not outcome.ok
    assert outcome.error == "Error submitting tasks: Sheet is locked"
    assert outcome.task_ids == []


@pytest.mark.asyncio
async def test_transport_failure_is_reported(state: AppState, store: FakeSheetStore) -> None:
    store.raise_on_writes[0] = StoreTransportError("HTTP error! status: 503")
    form = NewTaskForm(doer_name="Asha", description="x", planned_date="2026-11-03")

    outcome = await create_tasks(store, state.ids, [form])

    assert outcome.error == "Error submitting tasks: HTTP error! status: 503"


@pytest.mark.asyncio
async def test_roster_drops_blank_names(store: FakeSheetStore) -> None:
    roster = DoerRoster(store, "Doers")

    assert await roster.load() is True
    assert roster.names() == ["Asha", "Ravi"]
    assert roster.find("  asha ").email == "asha@example.com"
    assert roster.find("nobody") is None
    assert roster.find("") is None


@pytest.mark.asyncio
async def test_roster_load_failure() -> None:
    roster = DoerRoster(FakeSheetStore(), "Doers")

    assert await roster.load() is False
    assert roster.doers == []
    assert (roster.last_error or "").startswith("Failed to load doers:")


@pytest.mark.asyncio
async def test_autofill_only_fills_empty_contact_fields(store: FakeSheetStore) -> None:
    roster = DoerRoster(store, "Doers")
    await roster.load()

    form = roster.autofill(NewTaskForm(doer_name="Asha"))
    assert (form.phone, form.email) == ("555-0101", "asha@example.com")

    form = roster.autofill(NewTaskForm(doer_name="Asha", phone="999"))
    assert form.phone == "999"

    form = roster.autofill(NewTaskForm(doer_name="Stranger"))
    assert (form.phone, form.email) == ("", "")
