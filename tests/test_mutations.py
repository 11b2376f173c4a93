# tests/test_mutations.py

from __future__ import annotations

import asyncio

import pytest

from todo_app.client.cache import QueryCache
from todo_app.client.mutations import GENERIC_FAILURE, LIST_KEY, TodoMutations
from todo_app.client.notifications import Notifier
from todo_app.client.views import TodoForm
from todo_app.todo.errors import InternalError, NotFoundError

from .fakes import FakeTodoApi


@pytest.fixture()
def api() -> FakeTodoApi:
    return FakeTodoApi()


@pytest.fixture()
def cache() -> QueryCache:
    return QueryCache()


@pytest.fixture()
def notifier() -> Notifier:
    return Notifier()


@pytest.fixture()
def mutations(api, cache, notifier) -> TodoMutations:
    return TodoMutations(api, cache, notifier)


async def test_create_clears_form_and_invalidates_list(mutations, api, cache, notifier) -> None:
    assert await mutations.items() == []
    form = TodoForm(text="Buy milk", category_id="1")

    record = await mutations.create(form)

    assert record is not None and record.title == "Buy milk"
    assert form.text == "" and form.category_id is None
    assert not cache.has(LIST_KEY)
    assert [n.level for n in notifier.drain()] == ["success"]
    # the list is refetched after invalidation
    assert [i.title for i in await mutations.items()] == ["Buy milk"]
    assert [name for name, _ in api.calls].count("get_items") == 2


async def test_create_rejects_blank_form_without_calling_api(mutations, api, notifier) -> None:
    form = TodoForm(text="   ")

    assert await mutations.create(form) is None

    assert api.calls == []
    assert notifier.drain()[0].level == "error"


async def test_create_failure_keeps_form(mutations, api, cache, notifier) -> None:
    assert await mutations.items() == []
    api.fail_with = InternalError("Failed to create ToDo: connection reset")
    form = TodoForm(text="Buy milk")

    assert await mutations.create(form) is None

    assert form.text == "Buy milk"
    # a failed mutation leaves the cached list in place
    assert cache.has(LIST_KEY)
    notes = notifier.drain()
    assert [(n.level, n.message) for n in notes] == [("error", GENERIC_FAILURE)]


async def test_not_found_message_is_shown_verbatim(mutations, notifier) -> None:
    assert await mutations.delete(42) is False

    assert notifier.drain()[0].message == "No todo deleted"
    assert not mutations.is_pending(42)


async def test_toggle_invalidates_and_clears_in_flight(mutations, api, cache) -> None:
    record = await mutations.create(TodoForm(text="Walk dog"))
    await mutations.items()
    assert cache.has(LIST_KEY)

    assert await mutations.toggle(record.id, True) is True

    assert api.rows[record.id].is_completed is True
    assert not cache.has(LIST_KEY)
    assert mutations.in_flight == set()
    assert [i.is_completed for i in await mutations.items()] == [True]


async def test_in_flight_row_refuses_duplicate_submission(mutations, api) -> None:
    first = await mutations.create(TodoForm(text="one"))
    second = await mutations.create(TodoForm(text="two"))
    api.gate = asyncio.Event()

    pending = asyncio.create_task(mutations.toggle(first.id, True))
    await asyncio.sleep(0)
    assert mutations.is_pending(first.id)

    # same row: refused without a network call
    assert await mutations.delete(first.id) is False
    # another row: not blocked
    other = asyncio.create_task(mutations.toggle(second.id, True))
    await asyncio.sleep(0)
    assert mutations.in_flight == {first.id, second.id}

    api.gate.set()
    assert await pending is True
    assert await other is True
    assert mutations.in_flight == set()
    assert [name for name, _ in api.calls].count("delete_item") == 0


async def test_failure_is_not_retried(mutations, api, notifier) -> None:
    record = await mutations.create(TodoForm(text="x"))
    notifier.drain()
    api.fail_with = NotFoundError("No todo updated")

    assert await mutations.toggle(record.id, True) is False

    assert [name for name, _ in api.calls].count("update_completion") == 1
    assert notifier.drain()[0].message == "No todo updated"
    assert not mutations.is_pending(record.id)


async def test_cache_fetch_does_not_store_failures() -> None:
    cache = QueryCache()

    async def boom():
        raise InternalError("down")

    with pytest.raises(InternalError):
        await cache.fetch("k", boom)
    assert not cache.has("k")

    async def loader():
        return [1]

    assert await cache.fetch("k", loader) == [1]
    cache.invalidate("k")
    assert cache.get("k") is None
