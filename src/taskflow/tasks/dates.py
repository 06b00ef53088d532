# src/taskflow/tasks/dates.py

"""
Date helpers for sheet values.

Two representations are in play:
- machine form YYYY-MM-DD (date pickers, completion dates)
- display form DD/MM/YYYY (what people type into the sheet)

Nothing here raises on bad input: unparseable strings pass through unchanged.
The due bucket (today/overdue/upcoming) is computed by the sheet and is never
derived here.
"""

from __future__ import annotations

import re
from datetime import date, datetime

DISPLAY_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
MACHINE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")


def today_machine(now: datetime | None = None) -> str:
    """Today in machine form, on the local calendar (aware `now` is converted first)."""
    if now is None:
        return date.today().isoformat()
    if now.tzinfo is not None:
        now = now.astimezone()
    return now.date().isoformat()


def _parse_iso(raw: str) -> datetime | None:
    """ISO date or datetime; aware values are moved to local time."""
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed


def to_display(s: str) -> str:
    """Any parseable date -> DD/MM/YYYY. Already-display and junk input are returned as is."""
    if not s:
        return ""
    raw = s.strip()
    if DISPLAY_RE.match(raw):
        return s
    parsed = _parse_iso(raw)
    if parsed is None:
        return s
    return parsed.strftime("%d/%m/%Y")


def to_machine(s: str) -> str:
    """DD/MM/YYYY -> YYYY-MM-DD by literal reassembly; anything else unchanged."""
    m = DISPLAY_RE.match((s or "").strip())
    if not m:
        return s
    day, month, year = m.groups()
    return f"{year}-{month}-{day}"


def date_input_to_display(s: str) -> str:
    """User-entered date for a write: display form kept, picker form reassembled."""
    raw = (s or "").strip()
    if DISPLAY_RE.match(raw):
        return raw
    return picker_to_display(raw)


def picker_to_display(s: str) -> str:
    """
    Date-picker value (YYYY-MM-DD) -> DD/MM/YYYY.

    Split on "-" and reassemble literally; no calendar validation.
    """
    if not s:
        return ""
    parts = s.strip().split("-")
    if len(parts) != 3:
        return s
    year, month, day = parts
    return f"{day}/{month}/{year}"


def normalize_for_comparison(s: str) -> str:
    """
    YYYY-MM-DD from either representation.

    ISO datetimes are taken on the local calendar, then cut to their date part.
    Unparseable input passes through, so comparisons against it fall back to
    plain string ordering.
    """
    raw = (s or "").strip()
    m = DISPLAY_RE.match(raw)
    if m:
        day, month, year = m.groups()
        return f"{year}-{month}-{day}"
    m = MACHINE_RE.match(raw)
    if m:
        if len(raw) > 10:
            parsed = _parse_iso(raw)
            if parsed is not None:
                return parsed.date().isoformat()
        return "-".join(m.groups())
    return s


def compare_to_today(s: str, today: str | None = None) -> str:
    """Highlight class for a due date: "overdue", "today", "upcoming" or "" when empty."""
    if not (s or "").strip():
        return ""
    ref = today or today_machine()
    value = normalize_for_comparison(s)
    if value < ref:
        return "overdue"
    if value == ref:
        return "today"
    return "upcoming"
