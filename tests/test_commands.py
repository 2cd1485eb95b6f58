# tests/test_commands.py

from __future__ import annotations

import datetime as dt
from pathlib import Path

from organizer.cli.commands import CommandRegistry, registry
from organizer.connectors.console_connector import handle_line
from organizer.core.state import View


def test_command_registry_routes_commands_and_aliases(state) -> None:
    reg = CommandRegistry()
    seen: list[list[str]] = []

    def echo(state, args):
        seen.append(args)
        return "echo:" + ",".join(args)

    reg.register("echo", echo, "echo", aliases=["say"])

    assert reg.handle(state, '/echo x "y z"') == "echo:x,y z"
    assert reg.handle(state, "/SAY") == "echo:"
    assert seen == [["x", "y z"], []]


def test_command_registry_unknown_and_non_command(state) -> None:
    assert registry.handle(state, "hello") is None
    assert "Unknown command" in (registry.handle(state, "/nope") or "")
    assert "Commands start with" in handle_line(state, "hello")


def test_commands_are_gated_behind_sign_in(state) -> None:
    assert "Please sign in" in (registry.handle(state, "/cal") or "")
    assert "Invalid email or password." == registry.handle(state, "/signin user@example.com nope")

    reply = registry.handle(state, "/signin user@example.com password123") or ""
    assert reply.startswith("Signed in as user@example.com.")
    assert "April 2025" in reply


def test_month_end_task_shows_on_each_month_end(signed_in_state) -> None:
    st = signed_in_state
    reply = registry.handle(st, '/task add "Pay rent" 2024-01-31 --freq monthly --until 2024-04-30') or ""
    assert reply.startswith("Added #0: Pay rent")

    for day in ("2024-01-31", "2024-02-29", "2024-03-31", "2024-04-30"):
        assert "#0 Pay rent" in (registry.handle(st, f"/day {day}") or "")
    assert "(none)" in (registry.handle(st, "/day 2024-03-30") or "")


def test_task_edit_and_remove(signed_in_state) -> None:
    st = signed_in_state
    registry.handle(st, '/task add "Gym" 2025-04-01 --time 07:30 --freq weekly --until 2025-04-30')

    reply = registry.handle(st, "/task edit 0 --freq once") or ""
    assert reply.startswith("Updated #0")
    assert st.tasks[0].end_date is None

    assert "No task #3." == registry.handle(st, "/task rm 3")
    assert "Unknown frequency" in (registry.handle(st, '/task add "x" 2025-04-01 --freq hourly') or "")
    assert "Task text is required." == registry.handle(st, '/task add "" 2025-04-01')

    assert (registry.handle(st, "/task rm 0") or "").startswith("Deleted #0: Gym")
    assert st.tasks == []


def test_calendar_navigation(signed_in_state) -> None:
    st = signed_in_state
    st.selected_date = dt.date(2025, 1, 31)

    assert "December 2024" in (registry.handle(st, "/prev") or "")
    assert st.selected_date == dt.date(2024, 12, 31)

    registry.handle(st, "/next")
    registry.handle(st, "/next")
    assert st.selected_date == dt.date(2025, 2, 28)

    assert "Invalid date" in (registry.handle(st, "/goto not-a-date") or "")
    assert st.selected_date == dt.date(2025, 2, 28)

    assert "July 2026" in (registry.handle(st, "/goto 2026-07-04") or "")
    assert "March 2025" in (registry.handle(st, "/cal 2025-03") or "")
    assert registry.handle(st, "/cal 2025-13") == "Usage: /cal [YYYY-MM]"


def test_files_commands(tmp_path: Path, signed_in_state, blobs) -> None:
    st = signed_in_state
    src = tmp_path / "plan.txt"
    src.write_text("plan", "utf-8")

    assert (registry.handle(st, "/mkdir Projects") or "").startswith("Created folder Projects")
    folder = st.files.children(None)[0]

    assert "Files in /Projects" in (registry.handle(st, f"/cd {folder.id}") or "")
    assert "Uploaded: Plan.txt" in (registry.handle(st, f"/upload {src} --title Plan") or "")
    assert st.view is View.FILES

    registry.handle(st, "/cd /")
    reply = registry.handle(st, f"/rm {folder.id}") or ""
    assert reply == "Deleted folder Projects (2 item(s))."
    assert len(blobs.released) == 1
    assert "No such folder" in (registry.handle(st, f"/cd {folder.id}") or "")


def test_notes_commands(signed_in_state) -> None:
    st = signed_in_state
    assert (registry.handle(st, '/note add "first thought"') or "").startswith("Added Note 1")
    note = st.notes.notes[0]

    assert "first thought" in (registry.handle(st, "/notes") or "")
    assert registry.handle(st, f"/note toggle {note.id}") == "Note 1 closed."
    assert "first thought" not in (registry.handle(st, "/view notes") or "")
    assert registry.handle(st, f"/note rm {note.id}") == "Deleted Note 1."
    assert "Note content is empty." == registry.handle(st, "/note add")


def test_signout_command(signed_in_state) -> None:
    st = signed_in_state
    registry.handle(st, '/task add "x" 2025-04-01')
    assert (registry.handle(st, "/signout") or "").startswith("Signed out.")
    assert st.user is None
    assert st.tasks == []


def test_open_ended_task_keeps_the_calendar_working(signed_in_state) -> None:
    st = signed_in_state
    reply = registry.handle(st, '/task add "x" 9999-12-31 --freq yearly --until 9999-12-31') or ""
    assert reply.startswith("Added #0")

    assert "December 9999" in handle_line(st, "/goto 9999-12-31")
    assert "#0 x" in handle_line(st, "/day 9999-12-31")
    assert "December 9999" in handle_line(st, "/next")
    assert st.selected_date == dt.date(9999, 12, 31)


def test_prev_from_the_first_month_stays_put(signed_in_state) -> None:
    st = signed_in_state
    st.selected_date = dt.date(1, 1, 15)
    assert "January 1" in handle_line(st, "/prev")
    assert st.selected_date == dt.date(1, 1, 15)


def test_toggle_unknown_note_is_rejected(signed_in_state, storage) -> None:
    assert registry.handle(signed_in_state, "/note toggle 12345") == "No such note: 12345"
    assert storage.load("openNoteIds") is None
