"""Item and template identifiers.

The host store formats identifiers as braced, upper-case GUIDs
(``{7210C857-D27B-4325-A6FA-1346E8ECA366}``). Identifiers are parsed
once into :class:`uuid.UUID` so comparisons never depend on case or
brace style.
"""

from __future__ import annotations

import re
import uuid

type ItemId = uuid.UUID

_GUID_PATTERN = re.compile(
    r"^\{?[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\}?$"
)


def parse_id(text: str) -> ItemId:
    """Parse a GUID with or without braces.

    Raises:
        ValueError: If *text* is not a GUID.
    """
    stripped = text.strip()
    if not _GUID_PATTERN.match(stripped):
        msg = f"Not a valid item ID: {text!r}"
        raise ValueError(msg)
    return uuid.UUID(stripped.strip("{}"))


def is_id(text: str) -> bool:
    """Check whether *text* looks like an item ID."""
    return _GUID_PATTERN.match(text.strip()) is not None


def format_id(item_id: ItemId) -> str:
    """Render *item_id* the way the host store displays it."""
    return "{" + str(item_id).upper() + "}"


def new_id() -> ItemId:
    """Generate a fresh random item ID."""
    return uuid.uuid4()
