"""Tests for cli/tasknest.py, driven through Textual's pilot."""

import pytest
from textual.widgets import Input

from cli.tasknest import TasknestApp
from tasknest.models import COLOR_PALETTE
from tasknest.state import AppState
from tasknest.storage import CATEGORIES_KEY, TASKS_KEY

from .fakes import FakeEnvironment, FakeStore


async def _wait_ready(pilot) -> None:
    while not pilot.app.app_state.ready:
        await pilot.pause()
    await pilot.pause()


async def _submit(pilot, selector: str, value: str) -> None:
    field = pilot.app.query_one(selector, Input)
    field.focus()
    field.value = value
    await pilot.press("enter")
    await pilot.pause()
    pilot.app.query_one("#tasks-table").focus()
    await pilot.pause()


@pytest.mark.asyncio
@pytest.mark.parametrize("key", ["q", "ctrl+q"])
async def test_every_quit_key_flushes_pending_writes(key):
    store = FakeStore(delays={TASKS_KEY: [0.5]})
    app = TasknestApp(AppState(store, FakeEnvironment()))
    async with app.run_test() as pilot:
        await _wait_ready(pilot)
        app.app_state.add_task("last thing")
        await pilot.press(key)
    assert TASKS_KEY in store.data
    assert "last thing" in store.data[TASKS_KEY]


@pytest.mark.asyncio
async def test_new_category_uses_picked_color():
    store = FakeStore()
    app = TasknestApp(AppState(store, FakeEnvironment()))
    async with app.run_test() as pilot:
        await _wait_ready(pilot)
        await pilot.press("k", "k")
        await _submit(pilot, "#category-input", "Home")

        home = app.app_state.categories.categories[-1]
        assert home.name == "Home"
        assert home.color == COLOR_PALETTE[2]
        # The picker goes back to the first color after each add.
        assert app._new_category_color == COLOR_PALETTE[0]
        await app.app_state.flush()
    assert "Home" in store.data[CATEGORIES_KEY]


@pytest.mark.asyncio
async def test_new_task_category_is_picked_independently_of_filter():
    app = TasknestApp(AppState(FakeStore(), FakeEnvironment()))
    async with app.run_test() as pilot:
        await _wait_ready(pilot)
        home = app.app_state.add_category("Home", "#e74c3c")
        await pilot.pause()

        # General (id "1") comes first, then Home.
        await pilot.press("g", "g")
        assert app._new_task_category == home.id
        assert app.app_state.filter == "all"

        await _submit(pilot, "#task-input", "water plants")
        task = app.app_state.tasks.tasks[0]
        assert task.title == "water plants"
        assert task.category == home.id
        # Back to uncategorized for the next task.
        assert app._new_task_category is None

        await _submit(pilot, "#task-input", "call mom")
        assert app.app_state.tasks.tasks[0].category is None


@pytest.mark.asyncio
async def test_deleted_target_category_falls_back_to_uncategorized():
    app = TasknestApp(AppState(FakeStore(), FakeEnvironment()))
    async with app.run_test() as pilot:
        await _wait_ready(pilot)
        await pilot.press("g")
        assert app._new_task_category == "1"

        app.app_state.remove_category("1")
        await pilot.pause()
        assert app._new_task_category is None

        await _submit(pilot, "#task-input", "errand")
        assert app.app_state.tasks.tasks[0].category is None
