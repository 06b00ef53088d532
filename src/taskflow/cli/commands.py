# src/taskflow/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import cast

from ..core.state import AppState
from ..tasks.creation import create_tasks
from ..tasks.dates import compare_to_today, date_input_to_display, to_display
from ..tasks.task_models import BUCKET_ALL, BUCKETS, Action, NewTaskForm, Task
from ..tasks.validation import is_eligible

CommandEmitter = Callable[[str], None]
CommandResult = str | Awaitable[str]
CommandHandler2 = Callable[[AppState, list[str]], CommandResult]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], CommandResult]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console (/help, /pending, /submit, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Handlers may be plain functions or coroutines.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            result = cast(CommandHandler3, handler)(state, args, emit)
        else:
            result = cast(CommandHandler2, handler)(state, args)

        if inspect.isawaitable(result):
            return await result
        return result

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _say(emit: CommandEmitter | None, text: str) -> None:
    if emit:
        with contextlib.suppress(Exception):
            emit(text)


def _task_line(state: AppState, t: Task) -> str:
    draft = state.drafts.get(t.task_id)
    mark = "[x]" if draft and draft.is_selected else "[ ]"
    due = to_display(t.due_date) or "No date"
    flag = compare_to_today(t.due_date)
    flag_s = f" ({flag})" if flag and not t.is_history else ""
    status = t.status or ("Completed" if t.is_history else "Pending")
    line = f"{mark} {t.task_id} | {t.doer_name} | {t.description} | planned {to_display(t.planned_date) or '-'} | due {due}{flag_s} | {status}"
    if t.is_history:
        line += f" | done {to_display(t.completion_marker)}"
    return line


def _known_task(state: AppState, args: list[str], usage: str) -> tuple[str | None, str | None]:
    """Return (task_id, error)."""
    if not args:
        return None, usage
    task_id = args[0].strip()
    if state.registry.get(task_id) is None:
        return None, f"Unknown task id: {task_id}. Use /pending to list tasks."
    return task_id, None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_load(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    _say(emit, "Loading tasks...")
    ok = await state.registry.load()
    if not ok:
        return state.registry.last_error or "Failed to load tasks."
    await state.roster.load()
    pending = len(state.registry.pending())
    history = len(state.registry.history())
    return f"Loaded {pending + history} tasks: {pending} pending, {history} in history."


def cmd_pending(state: AppState, args: list[str]) -> str:
    """
    /pending            -> pending tasks, current bucket filter
    /pending <bucket>   -> set filter: all | today | overdue | upcoming
    """
    if args:
        b = args[0].lower()
        if b != BUCKET_ALL and b not in BUCKETS:
            return f"Unknown filter: {b}. Use one of: {BUCKET_ALL}, {', '.join(BUCKETS)}."
        state.bucket_filter = b

    tasks = state.registry.pending(state.bucket_filter)
    if not tasks:
        if state.bucket_filter == BUCKET_ALL:
            return "No pending tasks found."
        return f"No {state.bucket_filter} pending tasks found."

    title = "Pending tasks"
    if state.bucket_filter != BUCKET_ALL:
        title += f" (filtered by: {state.bucket_filter})"
    return "\n".join([f"{title}: {len(tasks)}", *(_task_line(state, t) for t in tasks)])


def cmd_history(state: AppState, args: list[str]) -> str:
    tasks = state.registry.history()
    if not tasks:
        return "No completed tasks found."
    return "\n".join([f"Completed tasks: {len(tasks)}", *(_task_line(state, t) for t in tasks)])


def cmd_search(state: AppState, args: list[str]) -> str:
    term = " ".join(args)
    found = state.registry.search(term)
    if not found:
        return f"No tasks match '{term}'."
    return "\n".join([f"{len(found)} match(es):", *(_task_line(state, t) for t in found)])


def cmd_select(state: AppState, args: list[str]) -> str:
    task_id, err = _known_task(state, args, "Usage: /select <task id>")
    if err:
        return err
    state.drafts.select(task_id)
    return f"Selected {task_id}."


def cmd_deselect(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /deselect <task id>"
    state.drafts.select(args[0].strip(), False)
    return f"Deselected {args[0].strip()} (draft discarded)."


def cmd_action(state: AppState, args: list[str]) -> str:
    task_id, err = _known_task(state, args, "Usage: /action <task id> <Done|Hold|Extend|Cancel|Transfer>")
    if err:
        return err
    action = Action.parse(args[1] if len(args) > 1 else "")
    if action == Action.NONE:
        return "Usage: /action <task id> <Done|Hold|Extend|Cancel|Transfer>"
    state.drafts.set_action(task_id, action)
    return f"{task_id}: action set to {action.value}."


def cmd_extend(state: AppState, args: list[str]) -> str:
    task_id, err = _known_task(state, args, "Usage: /extend <task id> <YYYY-MM-DD>")
    if err:
        return err
    if len(args) < 2:
        return "Usage: /extend <task id> <YYYY-MM-DD>"
    state.drafts.set_action(task_id, Action.EXTEND)
    state.drafts.set_extend_date(task_id, args[1])
    return f"{task_id}: extend to {date_input_to_display(args[1])}."


def cmd_remarks(state: AppState, args: list[str]) -> str:
    task_id, err = _known_task(state, args, "Usage: /remarks <task id> <text>")
    if err:
        return err
    state.drafts.set_remarks(task_id, " ".join(args[1:]))
    return f"{task_id}: remarks saved."


def cmd_transfer(state: AppState, args: list[str]) -> str:
    task_id, err = _known_task(state, args, "Usage: /transfer <task id> <doer name>")
    if err:
        return err
    target = " ".join(args[1:]).strip()
    state.drafts.set_action(task_id, Action.TRANSFER)
    state.drafts.set_transfer_target(task_id, target)
    if not target:
        return f"{task_id}: action set to Transfer. Pick a doer with /transfer {task_id} <name>."
    if state.roster.doers and state.roster.find(target) is None:
        return f"{task_id}: transfer to {target} (not in the doer list)."
    return f"{task_id}: transfer to {target}."


def cmd_drafts(state: AppState, args: list[str]) -> str:
    drafts = state.drafts.all()
    if not drafts:
        return "No drafts."
    lines = ["Drafts:"]
    for d in drafts:
        ready = "ready" if is_eligible(d) else "needs selection + remarks"
        extra = ""
        if d.action == Action.EXTEND:
            extra = f" -> {date_input_to_display(d.extend_date) or '?'}"
        elif d.action == Action.TRANSFER:
            extra = f" -> {d.transfer_target or '?'}"
        lines.append(f"  {d.task_id}: {d.action.value or '(no action)'}{extra} | remarks: {d.remarks.strip() or '-'} | {ready}")
    return "\n".join(lines)


async def cmd_submit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    _say(emit, "Updating...")
    outcome = await state.submitter().submit()
    return outcome.message()


def cmd_doers(state: AppState, args: list[str]) -> str:
    doers = state.roster.doers
    if not doers:
        return state.roster.last_error or "No doers loaded. Use /load."
    return "\n".join(["Doers:", *(f"  {d.name} | {d.phone or '-'} | {d.email or '-'}" for d in doers)])


async def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add <doer> | <YYYY-MM-DD> | <description>
    Several tasks can be added at once by separating them with ';'.
    """
    raw = " ".join(args)
    if not raw.strip():
        return "Usage: /add <doer> | <YYYY-MM-DD> | <description> [; <doer> | ...]"

    forms: list[NewTaskForm] = []
    for chunk in raw.split(";"):
        parts = [p.strip() for p in chunk.split("|")]
        parts += [""] * (3 - len(parts))
        forms.append(state.roster.autofill(NewTaskForm(doer_name=parts[0], planned_date=parts[1], description=parts[2])))

    _say(emit, f"Submitting {len(forms)} task(s)...")
    outcome = await create_tasks(state.store, state.ids, forms, sheet=state.registry.sheet)
    if outcome.ok:
        await state.registry.load()
    return outcome.message()


def cmd_stats(state: AppState, args: list[str]) -> str:
    s = state.registry.status_summary()
    return (
        "Status:\n"
        f"  Total: {s.total}\n"
        f"  Completed: {s.completed}\n"
        f"  Pending: {s.pending}\n"
        f"  On hold: {s.on_hold}\n"
        f"  Cancelled: {s.cancelled}\n"
        f"  Transferred: {s.transferred}\n"
        f"  Other: {s.other}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("load", cmd_load, help_text="Fetch tasks and doers from the sheet.", aliases=["refresh"])
registry.register("pending", cmd_pending, help_text="List pending tasks: /pending [all|today|overdue|upcoming].")
registry.register("history", cmd_history, help_text="List completed tasks.")
registry.register("search", cmd_search, help_text="Search tasks: /search <text>.")
registry.register("select", cmd_select, help_text="Select a task for update: /select <id>.")
registry.register("deselect", cmd_deselect, help_text="Drop a task's draft: /deselect <id>.")
registry.register("action", cmd_action, help_text="Set action: /action <id> <Done|Hold|Extend|Cancel|Transfer>.")
registry.register("extend", cmd_extend, help_text="Extend a task: /extend <id> <YYYY-MM-DD>.")
registry.register("remarks", cmd_remarks, help_text="Set remarks (required): /remarks <id> <text>.")
registry.register("transfer", cmd_transfer, help_text="Transfer a task: /transfer <id> <doer>.")
registry.register("drafts", cmd_drafts, help_text="Show unsaved drafts.")
registry.register("submit", cmd_submit, help_text="Write selected drafts to the sheet.")
registry.register("doers", cmd_doers, help_text="List doers from the roster sheet.")
registry.register("add", cmd_add, help_text="Add tasks: /add <doer> | <YYYY-MM-DD> | <description> [; ...].")
registry.register("stats", cmd_stats, help_text="Status counts for all loaded tasks.")
