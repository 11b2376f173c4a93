# tests/test_console.py

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from todo_app.client.cache import QueryCache
from todo_app.client.categories import category_label, parse_category
from todo_app.client.console import HELP_TEXT, TodoConsole
from todo_app.client.mutations import TodoMutations
from todo_app.client.notifications import Notifier
from todo_app.client.views import render_table
from todo_app.todo.schemas import TodoItem

from .fakes import FakeTodoApi


def _item(id: int, title: str, done: bool = False, category: str | None = None) -> TodoItem:
    return TodoItem(
        id=id,
        title=title,
        is_completed=done,
        category_id=category,
        created_at=datetime(2026, 10, 19, 8, 0, id, tzinfo=timezone.utc),
    )


def test_category_lookup() -> None:
    assert category_label("1") == "Work"
    assert category_label("3") == "Other"
    assert category_label("9") == ""
    assert category_label(None) == ""
    assert parse_category("personal") == "2"
    assert parse_category("2") == "2"
    assert parse_category("Errands") is None


def test_render_table_rows() -> None:
    table = render_table(
        [_item(1, "Buy milk", category="2"), _item(2, "Ship report", done=True, category="1")],
        in_flight={2},
    )
    lines = table.splitlines()

    assert [cell.strip() for cell in lines[0].split("|")] == ["#", "Task", "Category", "Status"]
    assert "Buy milk" in lines[2] and "Personal" in lines[2] and "Pending" in lines[2]
    assert lines[3].startswith("2*") and "Work" in lines[3] and "Completed" in lines[3]


def test_render_empty_table() -> None:
    assert render_table([]) == "No tasks yet."


@pytest.fixture()
def console() -> TodoConsole:
    notifier = Notifier()
    return TodoConsole(TodoMutations(FakeTodoApi(), QueryCache(), notifier), notifier)


async def test_console_add_toggle_delete(console) -> None:
    out = await console.handle("/add Buy milk #work")
    assert "Task added" in out
    assert "Buy milk" in out and "Work" in out and "Pending" in out

    out = await console.handle("/done 1")
    assert "Completed" in out

    out = await console.handle("/undo 1")
    assert "Pending" in out

    out = await console.handle("/del 1")
    assert out.endswith("No tasks yet.")


async def test_console_unknown_category_stays_in_text(console) -> None:
    out = await console.handle("/add Tag #misc")

    assert "Tag #misc" in out


async def test_console_bad_row_number(console) -> None:
    await console.handle("/list")

    out = await console.handle("/done 5")

    assert "No task #5" in out


async def test_console_help_and_quit(console) -> None:
    assert await console.handle("/what") == HELP_TEXT
    assert await console.handle("/quit") is None
