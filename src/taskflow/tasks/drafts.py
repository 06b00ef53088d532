# src/taskflow/tasks/drafts.py

from __future__ import annotations

import logging

from .task_models import Action, Draft

logger = logging.getLogger(__name__)


class DraftStore:
    """
    Per-task unsaved edits keyed by task id.

    Drafts are created lazily on first touch. Deselecting a task drops its
    draft; clear() drops everything after a successful submission.
    """

    def __init__(self) -> None:
        self._drafts: dict[str, Draft] = {}

    def __len__(self) -> int:
        return len(self._drafts)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._drafts

    def get(self, task_id: str) -> Draft | None:
        return self._drafts.get(task_id)

    def all(self) -> list[Draft]:
        return list(self._drafts.values())

    def selected(self) -> list[Draft]:
        return [d for d in self._drafts.values() if d.is_selected]

    def _touch(self, task_id: str) -> Draft:
        d = self._drafts.get(task_id)
        if d is None:
            d = Draft(task_id=task_id)
            self._drafts[task_id] = d
        return d

    def select(self, task_id: str, selected: bool = True) -> Draft | None:
        if not selected:
            self.discard(task_id)
            return None
        d = self._touch(task_id)
        d.is_selected = True
        return d

    def discard(self, task_id: str) -> None:
        if self._drafts.pop(task_id, None) is not None:
            logger.debug("Draft discarded task_id=%s", task_id)

    def set_action(self, task_id: str, action: Action) -> Draft:
        d = self._touch(task_id)
        d.action = action
        if action == Action.DONE:
            d.extend_date = ""
        return d

    def set_extend_date(self, task_id: str, value: str) -> Draft:
        d = self._touch(task_id)
        d.extend_date = (value or "").strip()
        return d

    def set_remarks(self, task_id: str, value: str) -> Draft:
        d = self._touch(task_id)
        d.remarks = value or ""
        return d

    def set_transfer_target(self, task_id: str, value: str) -> Draft:
        d = self._touch(task_id)
        d.transfer_target = (value or "").strip()
        return d

    def clear(self) -> None:
        n = len(self._drafts)
        self._drafts.clear()
        if n:
            logger.debug("Cleared %d drafts", n)
