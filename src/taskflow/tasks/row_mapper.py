# src/taskflow/tasks/row_mapper.py

"""
Positional rows <-> typed records.

This is the only module that knows which column holds what. Everything else
works with Task / Doer / RowPatch and calls encode_row() at the boundary.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from .task_models import EXTEND_SLOTS, WRITE_WIDTH, Col, Doer, RowPatch, Task

logger = logging.getLogger(__name__)

# Row 1 is the header; store rows are 1-based.
FIRST_DATA_ROW = 2


def cell_text(row: Sequence[Any], pos: int) -> str:
    """Cell at `pos` as text; missing trailing cells and nulls become ""."""
    if pos >= len(row):
        return ""
    v = row[pos]
    if v is None:
        return ""
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


def parse_slot_index(raw: str) -> int:
    s = (raw or "").strip()
    if not s:
        return 0
    try:
        return int(s)
    except ValueError:
        pass
    try:
        f = float(s)
    except ValueError:
        return 0
    return int(f) if f.is_integer() else 0


def row_to_task(row: Sequence[Any], row_index: int) -> Task:
    return Task(
        task_id=cell_text(row, Col.TASK_ID).strip(),
        row_index=row_index,
        doer_name=cell_text(row, Col.DOER),
        description=cell_text(row, Col.DESCRIPTION),
        planned_date=cell_text(row, Col.PLANNED_DATE),
        due_date=cell_text(row, Col.DUE_DATE),
        slot_index=parse_slot_index(cell_text(row, Col.SLOT_INDEX)),
        status=cell_text(row, Col.STATUS),
        completion_marker=cell_text(row, Col.COMPLETION),
        due_bucket=cell_text(row, Col.DUE_BUCKET),
        remarks=cell_text(row, Col.REMARKS),
        extension_dates=tuple(cell_text(row, c) for c in EXTEND_SLOTS),
    )


def map_task_rows(raw_rows: Iterable[Sequence[Any]]) -> list[Task]:
    """
    Map a full sheet (header first) to tasks.

    Rows with an empty task id are structurally blank and dropped. row_index is
    taken before filtering so it keeps addressing the right sheet row.
    """
    rows = list(raw_rows or [])
    out: list[Task] = []
    for i, row in enumerate(rows[1:]):
        row = row or []
        if not cell_text(row, Col.TASK_ID).strip():
            continue
        out.append(row_to_task(row, i + FIRST_DATA_ROW))
    logger.debug("Mapped %d tasks from %d data rows", len(out), max(0, len(rows) - 1))
    return out


def map_doer_rows(raw_rows: Iterable[Sequence[Any]]) -> list[Doer]:
    """Roster sheet: name, phone, email. Header dropped, blank names dropped."""
    out: list[Doer] = []
    for row in list(raw_rows or [])[1:]:
        row = row or []
        name = cell_text(row, 0).strip()
        if not name:
            continue
        out.append(Doer(name=name, phone=cell_text(row, 1).strip(), email=cell_text(row, 2).strip()))
    return out


def encode_row(patch: RowPatch, width: int = WRITE_WIDTH) -> list[str]:
    """RowPatch -> positional values. Unset fields are "" (the store leaves them alone)."""
    values = [""] * width

    def put(pos: int, v: str | None) -> None:
        if v is None:
            return
        if pos >= width:
            raise ValueError(f"column {pos} is outside the write width {width}")
        values[pos] = v

    put(Col.TASK_ID, patch.task_id)
    put(Col.DOER, patch.doer_name)
    put(Col.DESCRIPTION, patch.description)
    put(Col.PLANNED_DATE, patch.planned_date)
    if patch.extend_date is not None:
        slot = patch.extend_slot or 0
        if not 0 <= slot < len(EXTEND_SLOTS):
            raise ValueError(f"extension slot {slot} does not exist")
        put(EXTEND_SLOTS[slot], patch.extend_date)
    put(Col.COMPLETION, patch.completion_date)
    put(Col.STATUS, patch.status)
    put(Col.REMARKS, patch.remarks)
    return values

