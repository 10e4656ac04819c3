"""Tests for tasknest/cascade.py — category deletion cascade."""

from tasknest.cascade import uncategorize
from tasknest.models import Task


def _tasks():
    return [
        Task(id="1", title="a", category="x"),
        Task(id="2", title="b", category="y", completed=True),
        Task(id="3", title="c", category=None),
        Task(id="4", title="d", category="x", completed=True),
    ]


def test_uncategorize_nulls_only_matching_tasks():
    before = _tasks()
    after = uncategorize(before, "x")
    assert [t.category for t in after] == [None, "y", None, None]


def test_uncategorize_leaves_other_fields_and_order():
    before = _tasks()
    after = uncategorize(before, "x")
    assert [t.id for t in after] == ["1", "2", "3", "4"]
    assert [t.completed for t in after] == [t.completed for t in before]
    assert [t.title for t in after] == [t.title for t in before]
    # Untouched tasks are the same objects.
    assert after[1] is before[1]
    assert after[2] is before[2]


def test_uncategorize_does_not_mutate_input():
    before = _tasks()
    uncategorize(before, "x")
    assert before[0].category == "x"


def test_uncategorize_unknown_category_is_identity():
    before = _tasks()
    assert uncategorize(before, "nope") == before
