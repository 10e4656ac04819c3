"""Application state: stores, settings and the selected filter, wired together.

AppState.load() is the startup barrier. Nothing may render task text before
it returns, because the locale and both collections are only known after it.
"""

from __future__ import annotations

import logging
from typing import Callable

from tasknest.categories import CategoryStore
from tasknest.models import Category, Task
from tasknest.settings import HostEnvironment, SettingsState, SystemEnvironment
from tasknest.storage import KeyValueStore, WriteBehind
from tasknest.tasks import TaskStore, resolve_category
from tasknest.view import FILTER_ALL, counts_by_filter, filtered_tasks

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class AppState:
    def __init__(
        self,
        store: KeyValueStore,
        environment: SystemEnvironment | None = None,
    ) -> None:
        self.writer = WriteBehind(store)
        self.settings = SettingsState(self.writer, environment or HostEnvironment())
        self.tasks = TaskStore(self.writer)
        self.categories = CategoryStore(self.writer, self.tasks)
        self.filter = FILTER_ALL
        self.ready = False
        self._listeners: list[Listener] = []

    async def load(self) -> None:
        # Settings first: the seeded category name depends on the locale.
        await self.settings.initialize()
        await self.categories.load(self.settings.active_locale)
        await self.tasks.load()
        self.ready = True
        logger.info(
            "State ready tasks=%d categories=%d", len(self.tasks), len(self.categories)
        )
        self._notify()

    async def flush(self) -> None:
        await self.writer.flush()

    # ---- observers ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    # ---- tasks ----

    def add_task(self, title: str, category_id: str | None = None) -> Task:
        task = self.tasks.add(title, category_id)
        self._notify()
        return task

    def remove_task(self, task_id: str) -> None:
        if self.tasks.remove(task_id):
            self._notify()

    def toggle_task(self, task_id: str) -> None:
        if self.tasks.toggle_completed(task_id) is not None:
            self._notify()

    def reassign_task(self, task_id: str, category_id: str | None) -> None:
        if self.tasks.reassign_category(task_id, category_id) is not None:
            self._notify()

    # ---- categories ----

    def add_category(self, name: str, color: str) -> Category:
        category = self.categories.add(name, color)
        self._notify()
        return category

    def remove_category(self, category_id: str) -> None:
        """Delete a category; callers confirm with the user first."""
        if self.categories.remove(category_id):
            self._notify()

    def category_for(self, task: Task) -> Category:
        return resolve_category(
            task.category, self.categories.categories, self.settings.active_locale
        )

    # ---- view ----

    def select_filter(self, filter_value: str) -> None:
        self.filter = filter_value
        self._notify()

    def visible_tasks(self) -> list[Task]:
        return filtered_tasks(self.tasks.tasks, self.filter)

    def counts(self) -> dict[str, int]:
        return counts_by_filter(self.tasks.tasks, self.categories.categories)

    # ---- settings ----

    def set_theme_preference(self, preference: str) -> None:
        self.settings.set_theme_preference(preference)
        self._notify()

    def set_language_preference(self, preference: str) -> None:
        self.settings.set_language_preference(preference)
        self._notify()
