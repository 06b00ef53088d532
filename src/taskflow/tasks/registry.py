# src/taskflow/tasks/registry.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..core.ports import SheetStore
from ..store.client import StoreError
from .dates import to_display
from .row_mapper import map_task_rows
from .task_models import BUCKET_ALL, Task

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class StatusSummary:
    total: int
    completed: int
    pending: int
    on_hold: int
    cancelled: int
    transferred: int
    other: int


class TaskRegistry:
    """
    In-memory snapshot of the task sheet.

    load() swaps the whole list at once; a failed load keeps the previous
    snapshot (the very first failed load leaves it empty).
    Pending/History are derived from the snapshot on every call.
    """

    def __init__(self, store: SheetStore, sheet: str = "Master") -> None:
        self._store = store
        self._sheet = sheet
        self._tasks: list[Task] = []
        self.last_error: str | None = None
        self.loaded = False

    @property
    def sheet(self) -> str:
        return self._sheet

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    async def load(self) -> bool:
        try:
            rows = await self._store.fetch_rows(self._sheet)
        except StoreError as e:
            self.last_error = f"Failed to load tasks: {e}"
            logger.warning("Task load failed sheet=%s: %s (keeping %d cached)", self._sheet, e, len(self._tasks))
            return False

        self._tasks = map_task_rows(rows)
        self.last_error = None
        self.loaded = True
        logger.info("Loaded %d tasks from sheet=%s", len(self._tasks), self._sheet)
        return True

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.task_id == task_id:
                return t
        return None

    def position(self, task_id: str) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.task_id == task_id:
                return i
        return None

    def pending(self, bucket: str = BUCKET_ALL) -> list[Task]:
        b = (bucket or BUCKET_ALL).strip().lower()
        out = [t for t in self._tasks if not t.is_history]
        if b == BUCKET_ALL:
            return out
        return [t for t in out if t.due_bucket.strip().lower() == b]

    def history(self) -> list[Task]:
        return [t for t in self._tasks if t.is_history]

    def search(self, term: str, tasks: Iterable[Task] | None = None) -> list[Task]:
        pool = list(self._tasks if tasks is None else tasks)
        needle = (term or "").strip().lower()
        if not needle:
            return pool
        return [t for t in pool if any(needle in f.lower() for f in _search_fields(t))]

    def status_summary(self, tasks: Iterable[Task] | None = None) -> StatusSummary:
        pool = list(self._tasks if tasks is None else tasks)
        counts = {"completed": 0, "pending": 0, "on_hold": 0, "cancelled": 0, "transferred": 0, "other": 0}
        for t in pool:
            counts[_status_class(t.status)] += 1
        return StatusSummary(total=len(pool), **counts)


def _search_fields(t: Task) -> tuple[str, ...]:
    return (
        t.task_id,
        t.doer_name,
        t.description,
        t.planned_date,
        t.due_date,
        t.status,
        t.due_bucket,
        to_display(t.due_date),
        to_display(t.completion_marker),
    )


def _status_class(status: str) -> str:
    s = (status or "").strip().lower()
    if not s or "pending" in s:
        return "pending"
    if "complete" in s:
        return "completed"
    if "cancel" in s:
        return "cancelled"
    if "hold" in s:
        return "on_hold"
    if "transfer" in s:
        return "transferred"
    return "other"
