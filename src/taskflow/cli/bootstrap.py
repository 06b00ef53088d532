# src/taskflow/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the store client into the registry, roster, id allocator and drafts.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import SheetStore
from ..core.state import AppState
from ..store.client import SheetsClient
from ..store.offline import UnconfiguredStore
from ..tasks.ids import IdAllocator
from ..tasks.registry import TaskRegistry
from ..tasks.roster import DoerRoster

logger = logging.getLogger(__name__)


def _make_store(settings) -> SheetStore:
    try:
        return SheetsClient(settings.store_url, timeout_seconds=settings.http_timeout_seconds)
    except ValueError:
        logger.warning("TASKFLOW_STORE_URL is not set; running without a store.")
        return UnconfiguredStore()


def create_initial_state(*, settings=None, store: SheetStore | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Settings and store are injectable to keep tests free of env reads and HTTP.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    if store is None:
        store = _make_store(settings)

    return AppState(
        settings=settings,
        store=store,
        registry=TaskRegistry(store, settings.task_sheet),
        roster=DoerRoster(store, settings.roster_sheet),
        ids=IdAllocator(store, settings.task_sheet),
    )


async def close_state(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    aclose = getattr(state.store, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception:
        logger.debug("Store close failed.", exc_info=True)
