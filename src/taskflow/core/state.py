# src/taskflow/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..tasks.drafts import DraftStore
from ..tasks.ids import IdAllocator
from ..tasks.registry import TaskRegistry
from ..tasks.roster import DoerRoster
from ..tasks.submission import SubmissionOrchestrator
from ..tasks.task_models import BUCKET_ALL
from .ports import SheetStore


@dataclass
class AppState:
    """Everything the console and commands operate on. Built once in cli/bootstrap.py."""

    settings: object

    store: SheetStore
    registry: TaskRegistry
    roster: DoerRoster
    ids: IdAllocator
    drafts: DraftStore = field(default_factory=DraftStore)

    bucket_filter: str = BUCKET_ALL

    def submitter(self) -> SubmissionOrchestrator:
        return SubmissionOrchestrator(self.store, self.registry, self.drafts, self.ids)
