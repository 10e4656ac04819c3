"""Derived view model: per-filter counts and the filtered task list.

Everything here is pure; call it again after any change.
"""

from __future__ import annotations

from typing import Sequence

from tasknest.models import Category, Task

FILTER_ALL = "all"
FILTER_COMPLETED = "completed"
FILTER_INCOMPLETE = "incomplete"
FILTER_UNCATEGORIZED = "category_null"
CATEGORY_PREFIX = "category_"


def category_filter(category_id: str) -> str:
    return CATEGORY_PREFIX + category_id


def counts_by_filter(tasks: Sequence[Task], categories: Sequence[Category]) -> dict[str, int]:
    """Task counts for every filter the UI can offer.

    Only current categories get a bucket, so tasks pointing at a deleted
    category are counted in all/completed/incomplete and nowhere else.
    """
    counts = {
        FILTER_ALL: len(tasks),
        FILTER_COMPLETED: 0,
        FILTER_INCOMPLETE: 0,
        FILTER_UNCATEGORIZED: 0,
    }
    for c in categories:
        counts[category_filter(c.id)] = 0

    for t in tasks:
        if t.completed:
            counts[FILTER_COMPLETED] += 1
        else:
            counts[FILTER_INCOMPLETE] += 1
        key = FILTER_UNCATEGORIZED if t.category is None else category_filter(t.category)
        if key in counts:
            counts[key] += 1
    return counts


def filtered_tasks(tasks: Sequence[Task], filter_value: str) -> list[Task]:
    """Tasks matching *filter_value*, in collection order.

    Unrecognized values behave like 'all'. A category filter for an id that
    no task carries simply yields an empty list.
    """
    if filter_value == FILTER_COMPLETED:
        return [t for t in tasks if t.completed]
    if filter_value == FILTER_INCOMPLETE:
        return [t for t in tasks if not t.completed]
    if filter_value == FILTER_UNCATEGORIZED:
        return [t for t in tasks if t.category is None]
    if filter_value.startswith(CATEGORY_PREFIX):
        category_id = filter_value[len(CATEGORY_PREFIX):]
        return [t for t in tasks if t.category == category_id]
    return list(tasks)
