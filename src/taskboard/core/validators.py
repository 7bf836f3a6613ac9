"""Input validators shared by services."""

from uuid import UUID

from src.taskboard.core.exceptions import ValidationError


def parse_object_id(value: str | UUID, label: str) -> UUID:
    """Parse a resource id, raising ValidationError if it is malformed.

    Examples:
        >>> parse_object_id("0b6f3c4e-8d4a-4c1e-9f5b-2a7d1e3c9b10", "project")
        UUID('0b6f3c4e-8d4a-4c1e-9f5b-2a7d1e3c9b10')
        >>> parse_object_id("abc", "project")
        Traceback (most recent call last):
        ...
        src.taskboard.core.exceptions.ValidationError: Invalid project ID format
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (ValueError, AttributeError, TypeError) as e:
        raise ValidationError(f"Invalid {label} ID format") from e
