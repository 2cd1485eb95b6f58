# src/organizer/cli/commands.py

from __future__ import annotations

import functools
import logging
import shlex
from collections.abc import Callable

from dateutil import parser as date_parser

from ..auth.session import AuthError, sign_in, sign_out, sign_up
from ..calendar.date_keys import parse_calendar_date, today
from ..calendar.month_grid import clamp_day, shift_month
from ..core.state import AppState, View
from ..files.file_models import FolderRecord
from ..files.file_store import FileStoreError
from ..notes.note_store import NoteError
from ..tasks.task_api import add_task, edit_task, remove_task
from ..tasks.task_models import Frequency, TaskValidationError
from ..views.calendar_view import (
    describe_task,
    render_all_tasks,
    render_day,
    render_folder,
    render_month,
    render_notes,
)

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /task, ...)."""

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

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like '/command args "quoted arg"'.
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError:
            parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args)
        except (TaskValidationError, FileStoreError, NoteError, AuthError) as e:
            # Boundary validation errors are user mistakes, not crashes.
            logger.debug("/%s rejected: %s", name, e)
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


def requires_user(handler: CommandHandler) -> CommandHandler:
    @functools.wraps(handler)
    def wrapper(state: AppState, args: list[str]) -> str:
        if state.user is None:
            return "Please sign in first: /signin <email> <password> (or /signup)."
        return handler(state, args)

    return wrapper


def _take_options(
    args: list[str],
    valued: set[str],
    flags: frozenset[str] | set[str] = frozenset(),
) -> tuple[list[str], dict[str, str], set[str]]:
    """
    Split "--name value" options and bare "--flag" switches from positionals.
    Raises TaskValidationError on unknown or incomplete options.
    """
    positional: list[str] = []
    opts: dict[str, str] = {}
    seen_flags: set[str] = set()
    it = iter(args)
    for arg in it:
        if not arg.startswith("--"):
            positional.append(arg)
            continue
        name = arg[2:].lower()
        if name in flags:
            seen_flags.add(name)
        elif name in valued:
            value = next(it, None)
            if value is None:
                raise TaskValidationError(f"Option --{name} needs a value.")
            opts[name] = value
        else:
            raise TaskValidationError(f"Unknown option: {arg}")
    return positional, opts, seen_flags


def _parse_user_date(raw: str):
    """Strict YYYY-MM-DD first, then a lenient parse (e.g. '12 March 2025')."""
    exact = parse_calendar_date(raw)
    if exact is not None:
        return exact
    try:
        return date_parser.parse(raw, dayfirst=True).date()
    except (ValueError, OverflowError):
        return None


def _parse_index(raw: str | None, what: str = "task") -> int:
    try:
        return int(str(raw).lstrip("#"))
    except (TypeError, ValueError):
        raise TaskValidationError(f"Expected a {what} number, got {raw!r}.") from None


# ---- general ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_signin(state: AppState, args: list[str]) -> str:
    if len(args) != 2:
        return "Usage: /signin <email> <password>"
    user = sign_in(state, args[0], args[1])
    return f"Signed in as {user.user_id}.\n\n{render_month(state)}"


def cmd_signup(state: AppState, args: list[str]) -> str:
    if len(args) != 3:
        return "Usage: /signup <email> <password> <confirm-password>"
    user = sign_up(state, args[0], args[1], args[2])
    return f"Account created for {user.user_id} (this session only).\n\n{render_month(state)}"


@requires_user
def cmd_signout(state: AppState, args: list[str]) -> str:
    sign_out(state)
    return "Signed out. Local tasks, notes and files were cleared."


@requires_user
def cmd_view(state: AppState, args: list[str]) -> str:
    if args:
        try:
            state.view = View(args[0].lower())
        except ValueError:
            return "Usage: /view calendar|files|tasks|notes"
    if state.view is View.FILES:
        return render_folder(state)
    if state.view is View.ALL_TASKS:
        return render_all_tasks(state)
    if state.view is View.NOTES:
        return render_notes(state)
    return render_month(state)


# ---- calendar ----


@requires_user
def cmd_cal(state: AppState, args: list[str]) -> str:
    """
    /cal          -> current month
    /cal 2025-04  -> jump to a month
    """
    state.view = View.CALENDAR
    if args:
        try:
            year_s, month_s = args[0].split("-", 1)
            year, month = int(year_s), int(month_s)
            state.selected_date = clamp_day(year, month, state.selected_date.day)
        except ValueError:
            return "Usage: /cal [YYYY-MM]"
    return render_month(state)


def _move_month(state: AppState, offset: int) -> str:
    year, month = shift_month(state.selected_date.year, state.selected_date.month, offset)
    state.selected_date = clamp_day(year, month, state.selected_date.day)
    state.view = View.CALENDAR
    return render_month(state)


@requires_user
def cmd_prev(state: AppState, args: list[str]) -> str:
    return _move_month(state, -1)


@requires_user
def cmd_next(state: AppState, args: list[str]) -> str:
    return _move_month(state, 1)


@requires_user
def cmd_today(state: AppState, args: list[str]) -> str:
    state.selected_date = today(state.tz)
    state.view = View.CALENDAR
    return render_month(state)


@requires_user
def cmd_goto(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /goto <date>"
    day = _parse_user_date(" ".join(args))
    if day is None:
        return f"Invalid date: {' '.join(args)}"
    state.selected_date = day
    state.view = View.CALENDAR
    return render_month(state)


@requires_user
def cmd_day(state: AppState, args: list[str]) -> str:
    if not args:
        return render_day(state, state.selected_date)
    day = _parse_user_date(" ".join(args))
    if day is None:
        return f"Invalid date: {' '.join(args)}"
    return render_day(state, day)


# ---- tasks ----

_TASK_USAGE = (
    "Usage:\n"
    '  /task add "text" YYYY-MM-DD [--time HH:MM] [--freq once|daily|weekly|monthly|yearly] [--until YYYY-MM-DD]\n'
    '  /task edit N [--text "..."] [--date YYYY-MM-DD] [--time HH:MM | --no-time] [--freq F] [--until D | --no-until]\n'
    "  /task rm N\n"
    "  /task list"
)


def _parse_freq(raw: str | None) -> Frequency | None:
    if raw is None:
        return None
    try:
        return Frequency(raw.strip().lower())
    except ValueError:
        raise TaskValidationError(f"Unknown frequency {raw!r}; use once|daily|weekly|monthly|yearly.") from None


@requires_user
def cmd_task(state: AppState, args: list[str]) -> str:
    if not args:
        return _TASK_USAGE
    sub, rest = args[0].lower(), args[1:]

    if sub in ("list", "ls"):
        state.view = View.ALL_TASKS
        return render_all_tasks(state)

    if sub == "add":
        pos, opts, _ = _take_options(rest, {"time", "freq", "until"})
        if len(pos) != 2:
            return _TASK_USAGE
        text, date_s = pos
        index = add_task(
            state,
            text=text,
            date=date_s,
            time=opts.get("time"),
            frequency=_parse_freq(opts.get("freq")) or Frequency.ONCE,
            end_date=opts.get("until"),
        )
        return f"Added #{index}: {describe_task(state.tasks[index])}"

    if sub == "edit":
        pos, opts, flags = _take_options(rest, {"text", "date", "time", "freq", "until"}, {"no-time", "no-until"})
        if len(pos) != 1:
            return _TASK_USAGE
        index = _parse_index(pos[0])
        task = edit_task(
            state,
            index,
            text=opts.get("text"),
            date=opts.get("date"),
            time=opts.get("time"),
            frequency=_parse_freq(opts.get("freq")),
            end_date=opts.get("until"),
            clear_time="no-time" in flags,
            clear_end_date="no-until" in flags,
        )
        return f"Updated #{index}: {describe_task(task)}"

    if sub in ("rm", "del", "delete"):
        if len(rest) != 1:
            return _TASK_USAGE
        index = _parse_index(rest[0])
        removed = remove_task(state, index)
        return f"Deleted #{index}: {removed.text}"

    return _TASK_USAGE


# ---- files ----


@requires_user
def cmd_files(state: AppState, args: list[str]) -> str:
    state.view = View.FILES
    return render_folder(state)


@requires_user
def cmd_cd(state: AppState, args: list[str]) -> str:
    """
    /cd <folder-id>  -> open a folder
    /cd ..           -> parent folder
    /cd /            -> back to root
    """
    if not args or args[0] == "/":
        state.current_folder = None
    elif args[0] == "..":
        folder = state.files.get_folder(state.current_folder)
        state.current_folder = folder.parent_id if folder else None
    else:
        state.files.get_folder(args[0])
        state.current_folder = args[0]
    state.view = View.FILES
    return render_folder(state)


@requires_user
def cmd_mkdir(state: AppState, args: list[str]) -> str:
    folder = state.files.create_folder(" ".join(args), state.current_folder)
    state.persist_files()
    return f"Created folder {folder.name} ({folder.id})."


@requires_user
def cmd_upload(state: AppState, args: list[str]) -> str:
    pos, opts, _ = _take_options(args, {"title", "date"})
    if not pos:
        return "Usage: /upload <path> [<path> ...] [--title NAME] [--date YYYY-MM-DD]"
    added = state.files.upload(pos, state.current_folder, title=opts.get("title", ""), date=opts.get("date"))
    state.persist_files()
    return "Uploaded: " + ", ".join(f"{r.name} ({r.id})" for r in added)


@requires_user
def cmd_rm(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /rm <file-or-folder-id>"
    item = state.files.get(args[0])
    if item is None:
        return f"No such file or folder: {args[0]}"
    removed = state.files.remove(item.id)
    if state.current_folder in removed:
        state.current_folder = item.parent_id
    state.persist_files()
    kind = "folder" if isinstance(item, FolderRecord) else "file"
    return f"Deleted {kind} {item.name} ({len(removed)} item(s))."


# ---- notes ----

_NOTE_USAGE = (
    "Usage:\n"
    '  /note add "text"\n'
    '  /note edit ID "new text"\n'
    "  /note toggle ID\n"
    "  /note rm ID"
)


@requires_user
def cmd_notes(state: AppState, args: list[str]) -> str:
    state.view = View.NOTES
    return render_notes(state)


@requires_user
def cmd_note(state: AppState, args: list[str]) -> str:
    if not args:
        return _NOTE_USAGE
    sub, rest = args[0].lower(), args[1:]

    if sub == "add":
        note = state.notes.add(" ".join(rest))
        state.persist_notes()
        return f"Added {state.notes.label(note.id)} ({note.id})."

    if not rest:
        return _NOTE_USAGE
    note_id = _parse_index(rest[0], "note id")

    if sub == "edit":
        state.notes.update(note_id, " ".join(rest[1:]))
        state.persist_notes()
        return f"Updated {state.notes.label(note_id)}."
    if sub == "toggle":
        opened = state.notes.toggle(note_id)
        return f"{state.notes.label(note_id)} {'opened' if opened else 'closed'}."
    if sub in ("rm", "del", "delete"):
        label = state.notes.label(note_id)
        state.notes.delete(note_id)
        state.persist_notes()
        return f"Deleted {label}."

    return _NOTE_USAGE


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("signin", cmd_signin, help_text="Sign in: /signin <email> <password>.", aliases=["login"])
registry.register("signup", cmd_signup, help_text="Sign up: /signup <email> <password> <confirm>.")
registry.register("signout", cmd_signout, help_text="Sign out and clear local data.", aliases=["logout"])
registry.register("view", cmd_view, help_text="Switch view: /view calendar|files|tasks|notes.")
registry.register("cal", cmd_cal, help_text="Show the calendar: /cal [YYYY-MM].", aliases=["calendar"])
registry.register("prev", cmd_prev, help_text="Previous month.")
registry.register("next", cmd_next, help_text="Next month.")
registry.register("today", cmd_today, help_text="Go to today.")
registry.register("goto", cmd_goto, help_text="Go to a date: /goto <date>.")
registry.register("day", cmd_day, help_text="Tasks on a day: /day [date].")
registry.register("task", cmd_task, help_text="Tasks: /task add | edit | rm | list.", aliases=["tasks"])
registry.register("files", cmd_files, help_text="List the current folder.")
registry.register("cd", cmd_cd, help_text="Open a folder: /cd <id> | .. | /.")
registry.register("mkdir", cmd_mkdir, help_text="Create a folder here: /mkdir <name>.")
registry.register("upload", cmd_upload, help_text="Upload files here: /upload <path> [--title NAME].")
registry.register("rm", cmd_rm, help_text="Delete a file or folder (with its contents): /rm <id>.")
registry.register("notes", cmd_notes, help_text="List notes.")
registry.register("note", cmd_note, help_text="Notes: /note add | edit | toggle | rm.")
