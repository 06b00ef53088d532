# tests/conftest.py

from __future__ import annotations

import time
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskflow.cli.bootstrap import create_initial_state
from taskflow.core.state import AppState

from .fakes import HEADER, FakeSheetStore, task_row


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="taskflow-test",
        log_level="DEBUG",
        store_url="",
        task_sheet="Master",
        roster_sheet="Doers",
        http_timeout_seconds=5.0,
        console_enabled=False,
        data_dir=tmp_path / "data",
    )


@pytest.fixture()
def store() -> FakeSheetStore:
    """
    Small task sheet:
    - TN-001 pending, slot 2, overdue
    - blank row (row 3) that must be ignored
    - TN-002 pending, today
    - TN-003 completed (history)
    plus a roster with two doers.
    """
    return FakeSheetStore(
        sheets={
            "Master": [
                list(HEADER),
                task_row("TN-001", "Asha", "Order cement", "2026-10-01", slot="2", due="2026-10-05", bucket="overdue"),
                ["", "", "", ""],
                task_row("TN-002", "Ravi", "Call supplier", "05/10/2026", due="2026-10-18", bucket="today"),
                task_row("TN-003", "Asha", "File report", "2026-09-01", completed="2026-09-20", status="Complete"),
            ],
            "Doers": [
                ["Name", "Phone", "Email"],
                ["Asha", "555-0101", "asha@example.com"],
                ["", "555-0000", "nobody@example.com"],
                ["Ravi", "555-0102", ""],
            ],
        }
    )


@pytest.fixture()
def state(settings: SimpleNamespace, store: FakeSheetStore) -> AppState:
    """AppState wired to the in-memory store (nothing loaded yet)."""
    return create_initial_state(settings=settings, store=store)


@pytest.fixture()
def kolkata_tz(monkeypatch: pytest.MonkeyPatch):
    """Pin local time to UTC+05:30 so UTC-midnight conversions are deterministic."""
    monkeypatch.setenv("TZ", "Asia/Kolkata")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
