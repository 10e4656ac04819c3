"""Tests for tasknest/tasks.py — task store and category resolution."""

import json

import pytest

from tasknest.errors import ValidationError
from tasknest.models import DELETED_CATEGORY_COLOR, UNCATEGORIZED_COLOR, Category, Task
from tasknest.storage import TASKS_KEY, WriteBehind
from tasknest.tasks import TaskStore, find_task, resolve_category

from .fakes import FakeStore

CATEGORIES = [Category(id="1", name="General", color="#bdc3c7")]


async def _loaded(store: FakeStore) -> tuple[TaskStore, WriteBehind]:
    writer = WriteBehind(store)
    tasks = TaskStore(writer)
    await tasks.load()
    return tasks, writer


def test_find_task():
    tasks = [Task(id="a", title="A"), Task(id="b", title="B")]
    assert find_task(tasks, "a").title == "A"
    assert find_task(tasks, "c") is None


@pytest.mark.asyncio
async def test_load_missing_key_is_empty():
    tasks, _ = await _loaded(FakeStore())
    assert tasks.tasks == []


@pytest.mark.asyncio
async def test_load_corrupt_value_is_empty():
    tasks, _ = await _loaded(FakeStore(data={TASKS_KEY: "not json"}))
    assert tasks.tasks == []


@pytest.mark.asyncio
async def test_add_prepends_and_trims():
    tasks, _ = await _loaded(FakeStore())
    first = tasks.add("  first ", None)
    second = tasks.add("second", "1")
    assert [t.title for t in tasks.tasks] == ["second", "first"]
    assert first.title == "first"
    assert first.completed is False
    assert second.category == "1"
    assert first.id != second.id


@pytest.mark.asyncio
async def test_add_empty_title_rejected_without_mutation():
    store = FakeStore()
    tasks, writer = await _loaded(store)
    with pytest.raises(ValidationError):
        tasks.add("   ", None)
    await writer.flush()
    assert tasks.tasks == []
    assert store.writes == []


@pytest.mark.asyncio
async def test_add_accepts_unknown_category_id():
    tasks, _ = await _loaded(FakeStore())
    task = tasks.add("x", "does-not-exist")
    assert task.category == "does-not-exist"


@pytest.mark.asyncio
async def test_toggle_twice_restores_original():
    tasks, _ = await _loaded(FakeStore())
    task = tasks.add("x")
    assert tasks.toggle_completed(task.id).completed is True
    assert tasks.toggle_completed(task.id).completed is False


@pytest.mark.asyncio
async def test_missing_ids_are_noops():
    tasks, writer = await _loaded(FakeStore())
    tasks.add("x")
    await writer.flush()
    snapshot = tasks.tasks
    assert tasks.toggle_completed("nope") is None
    assert tasks.reassign_category("nope", "1") is None
    assert tasks.remove("nope") is False
    assert tasks.tasks == snapshot
    assert writer.pending() == 0


@pytest.mark.asyncio
async def test_reassign_and_remove():
    tasks, _ = await _loaded(FakeStore())
    a = tasks.add("a")
    b = tasks.add("b")
    tasks.reassign_category(a.id, "ghost")
    assert tasks.find(a.id).category == "ghost"
    assert tasks.remove(b.id) is True
    assert [t.id for t in tasks.tasks] == [a.id]


@pytest.mark.asyncio
async def test_mutations_are_persisted_in_order():
    store = FakeStore()
    tasks, writer = await _loaded(store)
    a = tasks.add("a", "1")
    tasks.toggle_completed(a.id)
    await writer.flush()
    saved = json.loads(store.data[TASKS_KEY])
    assert saved == [{"id": a.id, "title": "a", "completed": True, "category": "1"}]


@pytest.mark.asyncio
async def test_apply_cascade():
    tasks, _ = await _loaded(FakeStore())
    a = tasks.add("a", "1")
    b = tasks.add("b", "2")
    tasks.apply_cascade("1")
    assert tasks.find(a.id).category is None
    assert tasks.find(b.id).category == "2"


def test_resolve_category_uncategorized():
    c = resolve_category(None, CATEGORIES)
    assert c.id is None
    assert c.name == "Uncategorized"
    assert c.color == UNCATEGORIZED_COLOR


def test_resolve_category_found():
    assert resolve_category("1", CATEGORIES) is CATEGORIES[0]


def test_resolve_category_dangling_never_raises():
    c = resolve_category("gone", CATEGORIES)
    assert c.id == "gone"
    assert c.name == "Deleted Category"
    assert c.color == DELETED_CATEGORY_COLOR


def test_resolve_category_localized_labels():
    assert resolve_category(None, CATEGORIES, "tr").name == "Kategorisiz"
    assert resolve_category("gone", CATEGORIES, "tr").name == "Silinmiş Kategori"
    # Partial table falls back to the base locale.
    assert resolve_category("gone", CATEGORIES, "fr").name == "Deleted Category"
