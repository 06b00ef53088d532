# src/taskflow/tasks/roster.py

from __future__ import annotations

import logging

from ..core.ports import SheetStore
from ..store.client import StoreError
from .row_mapper import map_doer_rows
from .task_models import Doer, NewTaskForm

logger = logging.getLogger(__name__)


class DoerRoster:
    """Read-only list of doers from the roster sheet."""

    def __init__(self, store: SheetStore, sheet: str = "Doers") -> None:
        self._store = store
        self._sheet = sheet
        self._doers: list[Doer] = []
        self.last_error: str | None = None

    @property
    def doers(self) -> list[Doer]:
        return list(self._doers)

    async def load(self) -> bool:
        try:
            rows = await self._store.fetch_rows(self._sheet)
        except StoreError as e:
            self.last_error = f"Failed to load doers: {e}"
            logger.warning("Roster load failed sheet=%s: %s", self._sheet, e)
            return False
        self._doers = map_doer_rows(rows)
        self.last_error = None
        logger.info("Loaded %d doers from sheet=%s", len(self._doers), self._sheet)
        return True

    def names(self) -> list[str]:
        return [d.name for d in self._doers]

    def find(self, name: str) -> Doer | None:
        key = (name or "").strip().lower()
        if not key:
            return None
        for d in self._doers:
            if d.name.lower() == key:
                return d
        return None

    def autofill(self, form: NewTaskForm) -> NewTaskForm:
        """Fill empty phone/email from the roster entry matching the doer name."""
        doer = self.find(form.doer_name)
        if doer is None:
            return form
        if not form.phone.strip():
            form.phone = doer.phone
        if not form.email.strip():
            form.email = doer.email
        return form
