"""Task collection: loading, mutations and category lookup for display."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Sequence

from tasknest.cascade import uncategorize
from tasknest.errors import StorageReadError, ValidationError
from tasknest.i18n import BASE_LOCALE, translate
from tasknest.models import (
    DELETED_CATEGORY_COLOR,
    UNCATEGORIZED_COLOR,
    Category,
    Task,
    dump_tasks,
    generate_id,
    parse_tasks,
)
from tasknest.storage import TASKS_KEY, WriteBehind

logger = logging.getLogger(__name__)


def find_task(tasks: Sequence[Task], task_id: str) -> Task | None:
    """Find a task by ID."""
    for t in tasks:
        if t.id == task_id:
            return t
    return None


def resolve_category(
    category_id: str | None,
    categories: Sequence[Category],
    locale: str = BASE_LOCALE,
) -> Category:
    """Category to display for a task. Never raises.

    - None -> the "Uncategorized" sentinel
    - a current category id -> that category
    - any other id -> a "Deleted Category" placeholder carrying the id
    """
    if category_id is None:
        return Category(id=None, name=translate("uncategorized", locale), color=UNCATEGORIZED_COLOR)
    for c in categories:
        if c.id == category_id:
            return c
    return Category(
        id=category_id,
        name=translate("deleted_category", locale),
        color=DELETED_CATEGORY_COLOR,
    )


class TaskStore:
    """
    Ordered task collection, newest first.

    Every mutation updates memory synchronously and schedules a write of the
    whole collection. Category ids are never checked against the category
    store; dangling ids are handled by resolve_category().
    """

    def __init__(self, writer: WriteBehind) -> None:
        self._writer = writer
        self._tasks: list[Task] = []

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    async def load(self) -> None:
        try:
            text = await self._writer.store.get(TASKS_KEY)
            self._tasks = [] if text is None else parse_tasks(TASKS_KEY, text)
        except (StorageReadError, OSError) as e:
            logger.warning("Task load failed, starting empty: %s", e)
            self._tasks = []
        logger.info("TaskStore loaded total=%d", len(self._tasks))

    def find(self, task_id: str) -> Task | None:
        return find_task(self._tasks, task_id)

    def add(self, title: str, category_id: str | None = None) -> Task:
        """Create a task at the top of the list. Raises ValidationError on empty title."""
        title = title.strip()
        if not title:
            raise ValidationError("Task title cannot be empty")
        task = Task(
            id=generate_id(t.id for t in self._tasks),
            title=title,
            completed=False,
            category=category_id,
        )
        self._tasks.insert(0, task)
        self._save()
        return task

    def remove(self, task_id: str) -> bool:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                del self._tasks[i]
                self._save()
                return True
        return False

    def toggle_completed(self, task_id: str) -> Task | None:
        return self._update(task_id, lambda t: replace(t, completed=not t.completed))

    def reassign_category(self, task_id: str, category_id: str | None) -> Task | None:
        return self._update(task_id, lambda t: replace(t, category=category_id))

    def apply_cascade(self, category_id: str) -> None:
        """Null out every reference to a deleted category."""
        updated = uncategorize(self._tasks, category_id)
        changed = sum(1 for old, new in zip(self._tasks, updated) if old is not new)
        self._tasks = updated
        if changed:
            logger.info("Uncategorized %d task(s) from category=%s", changed, category_id)
            self._save()

    def _update(self, task_id: str, fn: Callable[[Task], Task]) -> Task | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                self._tasks[i] = fn(t)
                self._save()
                return self._tasks[i]
        return None

    def _save(self) -> None:
        self._writer.schedule(TASKS_KEY, dump_tasks(self._tasks))
