# src/taskflow/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum


class Col(IntEnum):
    """Fixed 0-based column positions of the task sheet."""

    TASK_ID = 0
    DOER = 1
    DESCRIPTION = 2
    PLANNED_DATE = 3
    EXTEND_1 = 4
    EXTEND_2 = 5
    EXTEND_3 = 6
    EXTEND_4 = 7
    EXTEND_5 = 8
    DUE_DATE = 9
    SLOT_INDEX = 10
    COMPLETION = 11
    STATUS = 12
    REMARKS = 13
    DUE_BUCKET = 14  # computed by the sheet, never written


EXTEND_SLOTS: tuple[Col, ...] = (
    Col.EXTEND_1,
    Col.EXTEND_2,
    Col.EXTEND_3,
    Col.EXTEND_4,
    Col.EXTEND_5,
)

# Widest position any write touches.
WRITE_WIDTH = int(Col.REMARKS) + 1


class Action(StrEnum):
    """What the user wants to do with a task."""

    NONE = ""
    DONE = "Done"
    HOLD = "Hold"
    EXTEND = "Extend"
    CANCEL = "Cancel"
    TRANSFER = "Transfer"

    @classmethod
    def parse(cls, raw: str | None) -> Action:
        """Case-insensitive lookup; unknown values map to NONE."""
        s = (raw or "").strip().lower()
        for a in cls:
            if a.value.lower() == s:
                return a
        return cls.NONE


class StatusText(StrEnum):
    """Status values this app writes into the sheet."""

    PENDING = "Pending"
    COMPLETE = "Complete"
    CANCEL = "Cancel"
    HOLD = "Hold"
    TRANSFER = "Transfer"


BUCKET_ALL = "all"
BUCKETS: tuple[str, ...] = ("today", "overdue", "upcoming")


@dataclass(slots=True, frozen=True)
class Task:
    task_id: str
    row_index: int

    doer_name: str
    description: str
    planned_date: str
    due_date: str

    slot_index: int
    status: str
    completion_marker: str
    due_bucket: str
    remarks: str

    extension_dates: tuple[str, ...] = ()

    @property
    def is_history(self) -> bool:
        return bool(self.completion_marker.strip())


@dataclass(slots=True)
class Draft:
    """Unsaved edit for a single task. Lives in memory only."""

    task_id: str
    is_selected: bool = False
    action: Action = Action.NONE
    extend_date: str = ""
    remarks: str = ""
    transfer_target: str = ""


@dataclass(slots=True, frozen=True)
class Doer:
    name: str
    phone: str = ""
    email: str = ""


@dataclass(slots=True)
class NewTaskForm:
    doer_name: str = ""
    phone: str = ""
    email: str = ""
    planned_date: str = ""  # machine form, as a date picker emits it
    description: str = ""

    def is_complete(self) -> bool:
        return bool(
            self.doer_name.strip() and self.description.strip() and self.planned_date.strip()
        )


@dataclass(slots=True)
class RowPatch:
    """
    Named view of a store row write.

    None means "leave the cell unspecified" and is encoded as an empty string.
    """

    task_id: str | None = None
    doer_name: str | None = None
    description: str | None = None
    planned_date: str | None = None
    extend_slot: int | None = None
    extend_date: str | None = None
    completion_date: str | None = None
    status: str | None = None
    remarks: str | None = None
