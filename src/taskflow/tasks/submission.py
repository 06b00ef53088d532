# src/taskflow/tasks/submission.py

from __future__ import annotations

"""
Submission of drafted task decisions.

Drafts are processed one at a time, each write awaited before the next one is
sent: rows are addressed by position, so writes must not overlap.

Per task:
- look the task up in the current registry snapshot (gone -> skipped)
- apply per-action checks (missing extend date -> skipped,
  missing transfer target -> notice, batch continues)
- update the task row
- Transfer only: allocate an id and append the successor row

The first failed write stops the batch. A transfer whose update succeeded
but whose append failed stays marked "Transfer" without a successor row;
there is no compensation step.

On full success drafts are cleared and the registry reloaded. On failure the
drafts are left as they were so the user can retry.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..core.ports import RowTarget, SheetStore
from ..store.client import StoreError
from .columns import resolve_transfer_row, resolve_update
from .dates import today_machine
from .drafts import DraftStore
from .ids import IdAllocator
from .registry import TaskRegistry
from .row_mapper import encode_row
from .task_models import Action, Draft
from .validation import NOTHING_ELIGIBLE_MESSAGE, CheckResult, check_action, eligible_drafts

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SubmissionOutcome:
    completed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    notices: list[str] = field(default_factory=list)
    created: dict[str, str] = field(default_factory=dict)  # original id -> successor id
    failed_at: str | None = None
    reason: str | None = None
    refused: str | None = None

    @property
    def ok(self) -> bool:
        return self.failed_at is None and self.refused is None

    def message(self) -> str:
        """One human-readable line (plus notices) for the console."""
        if self.refused:
            return self.refused
        lines: list[str] = []
        if self.failed_at is not None:
            lines.append(f"Error updating tasks: {self.reason}")
            if self.completed:
                lines.append(f"Already written before the failure: {', '.join(self.completed)}")
        elif self.completed:
            lines.append(f"Tasks updated successfully: {', '.join(self.completed)}")
        else:
            lines.append("No tasks were updated.")
        lines.extend(self.notices)
        return "\n".join(lines)


class _WriteFailed(Exception):
    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class SubmissionOrchestrator:
    def __init__(
        self,
        store: SheetStore,
        registry: TaskRegistry,
        drafts: DraftStore,
        ids: IdAllocator,
        *,
        today: Callable[[], str] = today_machine,
    ) -> None:
        self._store = store
        self._registry = registry
        self._drafts = drafts
        self._ids = ids
        self._today = today

    def _ordered(self, drafts: list[Draft]) -> list[Draft]:
        """Registry order; drafts for tasks no longer in the snapshot go last."""
        missing = len(self._registry.tasks)

        def key(d: Draft) -> int:
            pos = self._registry.position(d.task_id)
            return missing if pos is None else pos

        return sorted(drafts, key=key)

    async def _write(self, row_index: RowTarget, values: list[str], fail_prefix: str) -> None:
        try:
            result = await self._store.write_row(self._registry.sheet, row_index, values)
        except StoreError as e:
            raise _WriteFailed(f"{fail_prefix}: {e}") from e
        if not result.success:
            raise _WriteFailed(f"{fail_prefix}: {result.error}")

    async def _submit_one(self, draft: Draft, outcome: SubmissionOutcome) -> None:
        task = self._registry.get(draft.task_id)
        if task is None:
            logger.info("Task %s no longer in snapshot; skipped", draft.task_id)
            outcome.skipped.append(draft.task_id)
            return

        check = check_action(draft)
        if check.result == CheckResult.SKIP:
            logger.debug("Task %s skipped (action=%r)", task.task_id, draft.action.value)
            outcome.skipped.append(task.task_id)
            return
        if check.result == CheckResult.REJECT:
            outcome.notices.append(check.message)
            return

        patch = resolve_update(task, draft, self._today())
        await self._write(task.row_index, encode_row(patch), f"Failed to update task {task.task_id}")
        logger.info("Task %s row=%s -> %s", task.task_id, task.row_index, draft.action.value)

        if draft.action == Action.TRANSFER:
            new_id = await self._ids.next_transfer_id()
            row = encode_row(resolve_transfer_row(task, draft.transfer_target, new_id))
            await self._write("append", row, f"Failed to create transferred task for {task.task_id}")
            outcome.created[task.task_id] = new_id
            logger.info("Task %s transferred to %s as %s", task.task_id, draft.transfer_target, new_id)

        outcome.completed.append(task.task_id)

    async def submit(self) -> SubmissionOutcome:
        outcome = SubmissionOutcome()

        batch = eligible_drafts(self._drafts.all())
        if not batch:
            outcome.refused = NOTHING_ELIGIBLE_MESSAGE
            return outcome

        logger.info("Submitting %d task update(s)", len(batch))
        for draft in self._ordered(batch):
            try:
                await self._submit_one(draft, outcome)
            except _WriteFailed as e:
                outcome.failed_at = draft.task_id
                outcome.reason = e.reason
                logger.warning("Submission stopped at task %s: %s", draft.task_id, e.reason)
                return outcome

        self._drafts.clear()
        if not await self._registry.load():
            outcome.notices.append(self._registry.last_error or "Failed to reload tasks.")
        return outcome
