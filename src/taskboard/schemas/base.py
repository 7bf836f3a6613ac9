"""Shared pydantic configuration for API payloads."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes to camelCase; accepts camelCase or snake_case input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class MergePatchModel(CamelModel):
    """Update payload where an empty string means "leave unchanged".

    Blank strings become None before field validation, so enum and datetime
    fields accept ``""`` the same way free-text fields do.
    """

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


def to_naive_utc(value: datetime | None) -> datetime | None:
    """Normalize client datetimes to naive UTC, matching the TIMESTAMP columns."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)
