"""Timestamp helpers shared by the table models and the services that mutate them."""

from datetime import UTC, datetime
from typing import Protocol


def utc_now() -> datetime:
    """Current time in UTC without tzinfo; every timestamp column is naive UTC."""
    return datetime.now(UTC).replace(tzinfo=None)


class Touchable(Protocol):
    updated_at: datetime


def touch(entity: Touchable) -> None:
    """Stamp a user, project or task as modified now."""
    entity.updated_at = utc_now()
