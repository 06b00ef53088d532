# src/taskflow/tasks/ids.py

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from typing import Any

from ..core.ports import SheetStore
from ..store.client import StoreError
from .row_mapper import cell_text
from .task_models import Col

logger = logging.getLogger(__name__)

ID_PREFIX = "TN-"
ID_RE = re.compile(r"^TN-(\d+)$")
BULK_ID_WIDTH = 3


def max_id_number(rows: Iterable[Sequence[Any]]) -> int:
    """Largest N over identity cells of the form TN-<digits>; others are ignored."""
    best = 0
    for row in rows:
        if not row:
            continue
        m = ID_RE.match(cell_text(row, Col.TASK_ID).strip())
        if m:
            best = max(best, int(m.group(1)))
    return best


def format_id(n: int, width: int = 0) -> str:
    return f"{ID_PREFIX}{n:0{width}d}" if width else f"{ID_PREFIX}{n}"


class IdAllocator:
    """
    Derives the next task ids from the current sheet contents.

    Two padding conventions are in use and must not be unified:
    - bulk creation: zero-padded to 3 digits (TN-001, TN-002, ...)
    - transfer successors: unpadded (TN-42)
    """

    def __init__(self, store: SheetStore, sheet: str = "Master") -> None:
        self._store = store
        self._sheet = sheet

    async def _current_max(self) -> int | None:
        try:
            rows = await self._store.fetch_rows(self._sheet)
        except StoreError as e:
            logger.warning("ID allocation could not read sheet=%s: %s; using fallback ids", self._sheet, e)
            return None
        return max_id_number(rows)

    async def next_ids(self, count: int) -> list[str]:
        count = max(0, int(count))
        start = await self._current_max()
        if start is None:
            return [format_id(i + 1, BULK_ID_WIDTH) for i in range(count)]
        return [format_id(start + 1 + i, BULK_ID_WIDTH) for i in range(count)]

    async def next_transfer_id(self) -> str:
        start = await self._current_max()
        return format_id((start or 0) + 1)
