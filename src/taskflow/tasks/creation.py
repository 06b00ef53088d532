# src/taskflow/tasks/creation.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..core.ports import SheetStore
from ..store.client import StoreError
from .dates import picker_to_display
from .ids import IdAllocator
from .row_mapper import encode_row
from .task_models import NewTaskForm, RowPatch, StatusText

logger = logging.getLogger(__name__)

NOTHING_TO_CREATE_MESSAGE = "Please fill in all required fields for at least one task."


@dataclass(slots=True)
class CreationOutcome:
    task_ids: list[str] = field(default_factory=list)
    skipped: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def message(self) -> str:
        if self.error:
            return self.error
        msg = f"{len(self.task_ids)} task(s) added successfully with IDs: {', '.join(self.task_ids)}"
        if self.skipped:
            msg += f" ({self.skipped} incomplete form(s) skipped)"
        return msg


def new_task_row(form: NewTaskForm, task_id: str) -> list[str]:
    return encode_row(
        RowPatch(
            task_id=task_id,
            doer_name=form.doer_name.strip(),
            description=form.description.strip(),
            planned_date=picker_to_display(form.planned_date.strip()),
            status=StatusText.PENDING,
        )
    )


async def create_tasks(
    store: SheetStore,
    ids: IdAllocator,
    forms: list[NewTaskForm],
    *,
    sheet: str = "Master",
) -> CreationOutcome:
    """
    Append one row per complete form in a single insertMultiple write.

    Incomplete forms (missing doer, description or planned date) are skipped.
    Phone and email are collected on the form but not stored in the task sheet.
    """
    valid = [f for f in forms if f.is_complete()]
    outcome = CreationOutcome(skipped=len(forms) - len(valid))
    if not valid:
        outcome.error = NOTHING_TO_CREATE_MESSAGE
        return outcome

    task_ids = await ids.next_ids(len(valid))
    rows = [new_task_row(f, tid) for f, tid in zip(valid, task_ids)]

    try:
        result = await store.append_rows(sheet, rows)
    except StoreError as e:
        outcome.error = f"Error submitting tasks: {e}"
        logger.warning("Task creation failed: %s", e)
        return outcome

    if not result.success:
        outcome.error = f"Error submitting tasks: {result.error or 'Failed to submit tasks'}"
        logger.warning("Task creation rejected: %s", result.error)
        return outcome

    outcome.task_ids = task_ids
    logger.info("Created %d task(s): %s", len(task_ids), ", ".join(task_ids))
    return outcome
