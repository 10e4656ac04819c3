"""Typed dataclasses for the Tasknest data model.

All models use from_dict/to_dict for JSON serialization.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Iterable

from tasknest.fileio import decode_records, encode_records

logger = logging.getLogger(__name__)

# Offered when adding a category; not enforced.
COLOR_PALETTE = [
    "#e74c3c", "#f1c40f", "#2ecc71", "#3498db", "#9b59b6",
    "#e67e22", "#1abc9c", "#34495e", "#bdc3c7",
]

UNCATEGORIZED_COLOR = "#bdc3c7"
DELETED_CATEGORY_COLOR = "#7f8c8d"

DEFAULT_CATEGORY_ID = "1"
DEFAULT_CATEGORY_COLOR = "#bdc3c7"

# "category_null" is the uncategorized filter, so no category may use this id.
RESERVED_CATEGORY_ID = "null"


# ── Ids ───────────────────────────────────────────────────────


_last_id = 0


def generate_id(taken: Iterable[str] = ()) -> str:
    """Return a time-based id, strictly increasing within this process.

    Ids listed in *taken* are skipped, so ids loaded from disk never collide
    with freshly generated ones.
    """
    global _last_id
    taken = set(taken)
    candidate = max(time.time_ns() // 1000, _last_id + 1)
    while str(candidate) in taken:
        candidate += 1
    _last_id = candidate
    return str(candidate)


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


# ── Task ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    completed: bool = False
    category: str | None = None  # None means uncategorized

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Task:
        category = d.get("category")
        return cls(
            id=_text(d.get("id")),
            title=_text(d.get("title")),
            completed=d.get("completed") is True,
            category=None if category is None else str(category),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "category": self.category,
        }


# ── Category ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Category:
    id: str | None
    name: str
    color: str

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Category:
        return cls(
            id=_text(d.get("id")),
            name=_text(d.get("name")),
            color=str(d.get("color", DEFAULT_CATEGORY_COLOR)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "color": self.color}


# ── Collections ───────────────────────────────────────────────


def dump_tasks(tasks: Iterable[Task]) -> str:
    return encode_records([t.to_dict() for t in tasks])


def parse_tasks(key: str, text: str) -> list[Task]:
    """Decode a task collection. Raises StorageReadError if corrupt.

    Records without an id or with a blank title are skipped.
    """
    tasks = []
    for d in decode_records(key, text):
        task = Task.from_dict(d)
        if not task.id or not task.title:
            logger.warning("Skipping invalid task record key=%s id=%r", key, task.id)
            continue
        tasks.append(task)
    return tasks


def dump_categories(categories: Iterable[Category]) -> str:
    return encode_records([c.to_dict() for c in categories])


def parse_categories(key: str, text: str) -> list[Category]:
    """Decode a category collection. Raises StorageReadError if corrupt.

    Records without an id, with a blank name, or using the reserved id are
    skipped.
    """
    categories = []
    for d in decode_records(key, text):
        category = Category.from_dict(d)
        if not category.id or not category.name or category.id == RESERVED_CATEGORY_ID:
            logger.warning("Skipping invalid category record key=%s id=%r", key, category.id)
            continue
        categories.append(category)
    return categories
