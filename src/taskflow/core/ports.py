# src/taskflow/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The engine depends on this Protocol instead of the HTTP client, so the store
can be swapped for an in-memory fake in tests.
"""

from dataclasses import dataclass
from typing import Any, Literal, Protocol

RawRow = list[Any]
# One positional row as the store returns it (strings, numbers, nulls).

RowTarget = int | Literal["append"]
# 1-based row to overwrite, or "append" for a new row at the end.


@dataclass(slots=True, frozen=True)
class WriteResult:
    success: bool
    error: str | None = None


class SheetStore(Protocol):
    """
    Remote row-oriented table.

    fetch_rows raises StoreError on any failure.
    write_row / append_rows report store-side refusals via WriteResult and
    raise StoreError only when the transport itself fails.
    """

    async def fetch_rows(self, sheet: str) -> list[RawRow]: ...

    async def write_row(self, sheet: str, row_index: RowTarget, values: list[str]) -> WriteResult: ...

    async def append_rows(self, sheet: str, rows: list[list[str]]) -> WriteResult: ...
