"""Category deletion cascade."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from tasknest.models import Task


def uncategorize(tasks: Iterable[Task], category_id: str) -> list[Task]:
    """Return a new list where tasks in *category_id* have no category.

    Order is preserved and every other task is returned as-is.
    """
    return [
        replace(t, category=None) if t.category == category_id else t
        for t in tasks
    ]
