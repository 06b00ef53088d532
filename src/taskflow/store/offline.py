# src/taskflow/store/offline.py

from __future__ import annotations

from ..core.ports import RawRow, RowTarget, WriteResult
from .client import StoreTransportError

NOT_CONFIGURED = "Store is not configured. Set TASKFLOW_STORE_URL in your .env (see config.example.py)."


class UnconfiguredStore:
    """
    Stand-in used when no store URL is set, so the console still starts.

    Every call fails with a StoreTransportError carrying a setup hint; the
    engine reports it like any other transport failure.
    """

    async def fetch_rows(self, sheet: str) -> list[RawRow]:
        raise StoreTransportError(NOT_CONFIGURED)

    async def write_row(self, sheet: str, row_index: RowTarget, values: list[str]) -> WriteResult:
        raise StoreTransportError(NOT_CONFIGURED)

    async def append_rows(self, sheet: str, rows: list[list[str]]) -> WriteResult:
        raise StoreTransportError(NOT_CONFIGURED)
