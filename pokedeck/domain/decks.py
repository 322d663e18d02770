"""Domain helpers for deck names and card id lists."""
from __future__ import annotations

from typing import Any

DECK_SIZE = 10

# Largest value a signed 64-bit INTEGER column can bind.
MAX_ID = 2**63 - 1


def normalize_deck_name(value: Any) -> str | None:
    """Return the trimmed name, or None when it is not a non-empty string."""
    if not isinstance(value, str):
        return None
    name = value.strip()
    return name or None


def is_valid_id(value: Any) -> bool:
    """Ids are positive integers storable in the database; bools are rejected even though they subclass int."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 < value <= MAX_ID


def parse_id(raw: Any) -> int | None:
    """Parse a path segment into an id, or None when it is not a storable positive integer."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if is_valid_id(value) else None


def is_valid_card_id(value: Any) -> bool:
    return is_valid_id(value)


def has_deck_size(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and len(value) == DECK_SIZE
