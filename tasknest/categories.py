"""Category collection: first-run seeding, add, and cascading remove."""

from __future__ import annotations

import logging

from tasknest.errors import StorageReadError, ValidationError
from tasknest.i18n import BASE_LOCALE, translate
from tasknest.models import (
    DEFAULT_CATEGORY_COLOR,
    DEFAULT_CATEGORY_ID,
    Category,
    dump_categories,
    generate_id,
    parse_categories,
)
from tasknest.storage import CATEGORIES_KEY, WriteBehind
from tasknest.tasks import TaskStore

logger = logging.getLogger(__name__)


def default_categories(locale: str = BASE_LOCALE) -> list[Category]:
    return [
        Category(
            id=DEFAULT_CATEGORY_ID,
            name=translate("default_category", locale),
            color=DEFAULT_CATEGORY_COLOR,
        )
    ]


class CategoryStore:
    """
    Ordered category collection, in insertion order.

    Removing a category rewrites the linked TaskStore before either
    collection is persisted, so no task is ever seen pointing at a category
    that was just removed.
    """

    def __init__(self, writer: WriteBehind, task_store: TaskStore) -> None:
        self._writer = writer
        self._task_store = task_store
        self._categories: list[Category] = []

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    async def load(self, locale: str = BASE_LOCALE) -> None:
        """Load from the store. A missing key means first run: seed the default."""
        try:
            text = await self._writer.store.get(CATEGORIES_KEY)
        except (StorageReadError, OSError) as e:
            logger.warning("Category load failed, using default: %s", e)
            self._categories = default_categories(locale)
            return

        if text is None:
            self._categories = default_categories(locale)
            logger.info("First run: seeded default category")
            self._save()
            return

        try:
            self._categories = parse_categories(CATEGORIES_KEY, text)
        except StorageReadError as e:
            logger.warning("Category load failed, using default: %s", e)
            self._categories = default_categories(locale)
        logger.info("CategoryStore loaded total=%d", len(self._categories))

    def find(self, category_id: str) -> Category | None:
        for c in self._categories:
            if c.id == category_id:
                return c
        return None

    def add(self, name: str, color: str) -> Category:
        """Append a category. Raises ValidationError on empty name."""
        name = name.strip()
        if not name:
            raise ValidationError("Category name cannot be empty")
        category = Category(
            id=generate_id(c.id for c in self._categories if c.id is not None),
            name=name,
            color=color,
        )
        self._categories.append(category)
        self._save()
        return category

    def remove(self, category_id: str) -> bool:
        """Remove a category and uncategorize its tasks. No-op if absent."""
        remaining = [c for c in self._categories if c.id != category_id]
        if len(remaining) == len(self._categories):
            return False
        self._categories = remaining
        self._task_store.apply_cascade(category_id)
        self._save()
        logger.info("Removed category=%s", category_id)
        return True

    def _save(self) -> None:
        self._writer.schedule(CATEGORIES_KEY, dump_categories(self._categories))
