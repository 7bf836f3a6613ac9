"""Merge-patch helper shared by the update operations."""

from typing import Any

from sqlmodel import SQLModel


def is_blank(value: Any) -> bool:
    """Absent, null and empty-string values never overwrite stored data."""
    return value is None or (isinstance(value, str) and not value.strip())


def apply_merge_patch(entity: SQLModel, patch: dict[str, Any]) -> list[str]:
    """Copy non-blank values from ``patch`` onto ``entity``.

    Returns the names of the fields that were written.
    """
    changed = []
    for name, value in patch.items():
        if is_blank(value):
            continue
        setattr(entity, name, value)
        changed.append(name)
    return changed
