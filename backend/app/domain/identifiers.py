"""Entity identifier helpers (UUID strings)."""

import uuid

from app.domain.exceptions import InvalidInputError


def new_id() -> str:
    return str(uuid.uuid4())


def is_valid_id(value: str | None) -> bool:
    """True when *value* parses as a UUID."""
    if not value:
        return False
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def ensure_valid_id(value: str | None, label: str) -> str:
    """Return *value* unchanged, or raise InvalidInputError naming *label*."""
    if not is_valid_id(value):
        raise InvalidInputError(f"Invalid {label}: {value}")
    return str(value)
