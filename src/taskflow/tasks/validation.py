# src/taskflow/tasks/validation.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .task_models import Action, Draft

NOTHING_ELIGIBLE_MESSAGE = "Please select tasks and add remarks before submitting."


class CheckResult(str, Enum):
    OK = "ok"
    SKIP = "skip"  # dropped from the batch without a message
    REJECT = "reject"  # dropped with a user-visible message; batch continues


@dataclass(slots=True, frozen=True)
class ActionCheck:
    result: CheckResult
    message: str = ""


def is_eligible(draft: Draft) -> bool:
    """Selected and carrying non-blank remarks, whatever the action."""
    return bool(draft.is_selected and draft.remarks.strip())


def eligible_drafts(drafts: Iterable[Draft]) -> list[Draft]:
    return [d for d in drafts if is_eligible(d)]


def check_action(draft: Draft) -> ActionCheck:
    """Per-action requirements, applied at submission time only."""
    if draft.action == Action.NONE:
        return ActionCheck(CheckResult.SKIP)
    if draft.action == Action.EXTEND and not draft.extend_date.strip():
        return ActionCheck(CheckResult.SKIP)
    if draft.action == Action.TRANSFER and not draft.transfer_target.strip():
        return ActionCheck(
            CheckResult.REJECT,
            f"Please select a doer to transfer task {draft.task_id} to.",
        )
    return ActionCheck(CheckResult.OK)
