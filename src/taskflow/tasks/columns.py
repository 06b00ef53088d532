# src/taskflow/tasks/columns.py

"""
Which cells a submitted draft writes.

| action   | status     | data                                          |
|----------|------------|-----------------------------------------------|
| Done     | Complete   | completion date = today (YYYY-MM-DD)          |
| Cancel   | Cancel     | -                                             |
| Hold     | Hold       | -                                             |
| Extend   | untouched  | extend date -> extension slot by slot_index   |
| Transfer | Transfer   | - (successor row is built separately)         |

Remarks are written for every action.
"""

from __future__ import annotations

from .dates import date_input_to_display, to_display
from .task_models import EXTEND_SLOTS, Action, Draft, RowPatch, StatusText, Task

_STATUS_FOR_ACTION: dict[Action, str | None] = {
    Action.DONE: StatusText.COMPLETE,
    Action.CANCEL: StatusText.CANCEL,
    Action.HOLD: StatusText.HOLD,
    Action.TRANSFER: StatusText.TRANSFER,
    Action.EXTEND: None,
}


def extend_slot_for(slot_index: int | None) -> int:
    """0..4 select that slot; anything else (missing, negative, too large) is slot 0."""
    if slot_index is None or not 0 <= slot_index < len(EXTEND_SLOTS):
        return 0
    return slot_index


def resolve_update(task: Task, draft: Draft, today: str) -> RowPatch:
    """Build the in-place update for `task` from its draft. `today` is YYYY-MM-DD."""
    if draft.action not in _STATUS_FOR_ACTION:
        raise ValueError(f"No write defined for action {draft.action!r} on task {task.task_id}")

    patch = RowPatch(status=_STATUS_FOR_ACTION[draft.action], remarks=draft.remarks.strip())

    if draft.action == Action.DONE:
        patch.completion_date = today
    elif draft.action == Action.EXTEND:
        patch.extend_slot = extend_slot_for(task.slot_index)
        patch.extend_date = date_input_to_display(draft.extend_date)

    return patch


def resolve_transfer_row(task: Task, target: str, new_id: str) -> RowPatch:
    """Successor row appended after a transfer."""
    return RowPatch(
        task_id=new_id,
        doer_name=target.strip(),
        description=task.description,
        planned_date=to_display(task.planned_date.strip()),
        status=StatusText.PENDING,
    )
