"""Tests for merge-patch semantics used by every update operation."""

from uuid import uuid4

import pytest

from src.taskboard.models import Task
from src.taskboard.services.merge_patch import apply_merge_patch, is_blank

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
def test_blank_values(value):
    assert is_blank(value)


@pytest.mark.parametrize("value", ["x", " x ", 0, False, []])
def test_non_blank_values(value):
    assert not is_blank(value)


def _task(**fields) -> Task:
    return Task(project_id=uuid4(), title="Write docs", description="Draft", **fields)


def test_supplied_values_overwrite():
    task = _task()
    changed = apply_merge_patch(task, {"title": "Ship docs", "priority": "high"})
    assert task.title == "Ship docs"
    assert task.priority == "high"
    assert changed == ["title", "priority"]


def test_blank_values_are_ignored():
    task = _task()
    changed = apply_merge_patch(task, {"title": "", "description": None, "status": "  "})
    assert task.title == "Write docs"
    assert task.description == "Draft"
    assert task.status == "pending"
    assert changed == []


def test_absent_fields_are_untouched():
    task = _task(priority="low")
    apply_merge_patch(task, {"status": "completed"})
    assert task.priority == "low"
    assert task.status == "completed"
