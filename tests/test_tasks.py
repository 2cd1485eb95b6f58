# tests/test_tasks.py

from __future__ import annotations

import datetime as dt
import json

import pytest

from organizer.tasks.task_api import add_task, edit_task, list_tasks, remove_task
from organizer.tasks.task_models import Frequency, Task, TaskValidationError
from organizer.tasks.task_store import TaskStore


def test_create_requires_text_and_date() -> None:
    with pytest.raises(TaskValidationError):
        Task.create(text="   ", start="2025-04-01")
    with pytest.raises(TaskValidationError):
        Task.create(text="gym", start=None)
    with pytest.raises(TaskValidationError):
        Task.create(text="gym", start="someday")


def test_once_never_keeps_an_end_date() -> None:
    task = Task.create(text="gym", start="2025-04-01", frequency="once", end_date="2025-05-01")
    assert task.end_date is None

    weekly = Task.create(text="gym", start="2025-04-01", frequency="weekly", end_date="2025-05-01")
    assert weekly.with_frequency(Frequency.ONCE).end_date is None


def test_record_format() -> None:
    task = Task.create(
        text=" Gym ",
        start="2025-04-01",
        start_time="07:30",
        frequency="weekly",
        end_date="2025-06-30",
    )
    assert task.start_moment == dt.datetime(2025, 4, 1, 7, 30)
    assert task.to_record() == {
        "text": "Gym",
        "date": "2025-04-01T07:30",
        "frequency": "weekly",
        "endDate": "2025-06-30",
    }
    assert Task.from_record(task.to_record()) == task


def test_from_record_tolerates_bad_data() -> None:
    odd = Task.from_record({"text": "x", "date": "2025-04-01", "frequency": "fortnightly", "endDate": ""})
    assert odd is not None and odd.frequency is Frequency.ONCE

    assert Task.from_record({"text": "x", "date": ""}) is None
    assert Task.from_record({"text": "", "date": "2025-04-01"}) is None
    assert Task.from_record("not a dict") is None


def test_store_drops_invalid_records(storage) -> None:
    storage.save(
        "tasks",
        json.dumps(
            [
                {"text": "ok", "date": "2025-04-01", "frequency": "daily", "endDate": "2025-04-03"},
                {"text": "", "date": "2025-04-01"},
                17,
            ]
        ),
    )
    tasks = TaskStore(storage).load()
    assert [t.text for t in tasks] == ["ok"]


def test_store_treats_corrupt_json_as_empty(storage) -> None:
    storage.save("tasks", "{not json")
    assert TaskStore(storage).load() == []


def test_add_edit_remove_persist_while_signed_in(signed_in_state, storage) -> None:
    st = signed_in_state

    i = add_task(st, text="Pay rent", date="2024-01-31", frequency="monthly", end_date="2024-04-30")
    assert i == 0
    saved = json.loads(storage.load("tasks"))
    assert saved[0]["endDate"] == "2024-04-30"

    edit_task(st, 0, frequency=Frequency.ONCE)
    assert st.tasks[0].end_date is None
    assert json.loads(storage.load("tasks"))[0]["endDate"] == ""

    edit_task(st, 0, text="Pay rent (flat)", time="09:00")
    assert st.tasks[0].text == "Pay rent (flat)"
    assert st.tasks[0].start_time == dt.time(9, 0)

    removed = remove_task(st, 0)
    assert removed.text == "Pay rent (flat)"
    assert json.loads(storage.load("tasks")) == []


def test_invalid_input_leaves_tasks_untouched(signed_in_state) -> None:
    st = signed_in_state
    add_task(st, text="a", date="2025-04-01")
    with pytest.raises(TaskValidationError):
        add_task(st, text="", date="2025-04-01")
    with pytest.raises(TaskValidationError):
        edit_task(st, 5, text="nope")
    with pytest.raises(TaskValidationError):
        remove_task(st, -1)
    assert [t.text for _, t in list_tasks(st)] == ["a"]


def test_nothing_is_saved_while_signed_out(state, storage) -> None:
    add_task(state, text="draft", date="2025-04-01")
    assert len(state.tasks) == 1
    assert storage.load("tasks") is None


def test_edit_rebuilds_calendar_index(signed_in_state) -> None:
    st = signed_in_state
    add_task(st, text="swim", date="2025-04-01")
    assert "2025-04-01" in st.calendar_index()

    edit_task(st, 0, date="2025-04-02")
    index = st.calendar_index()
    assert "2025-04-01" not in index
    assert [e.task.text for e in index["2025-04-02"]] == ["swim"]
