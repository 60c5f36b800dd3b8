"""Typed field access over raw string values.

Every raw field stores a string. A :class:`FieldType` decodes that
string into a Python value and encodes it back, following the host's
storage conventions. :class:`FieldProperty` binds a field (by ID, with a
name fallback) to an attribute on a domain object, so reads go through
the decoder and writes go through the wrapper's change-notification
contract.

Fallback policy when the item has no such field:

- checkbox reads as ``False``
- integer reads as ``None``
- text reads as ``""``

Writing to a missing field raises :class:`FieldNotFoundError`.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Self, TypeVar, overload

from licwatch.domain.ids import ItemId, is_id, parse_id

if TYPE_CHECKING:
    from licwatch.domain.host import ItemStore, RawItem
    from licwatch.domain.wrapper import ItemWrapper

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


# ---------------------------------------------------------------------------
# Field types
# ---------------------------------------------------------------------------


class FieldType(ABC, Generic[_T]):
    """Codec between a raw field string and a typed value."""

    name: str = ""

    @abstractmethod
    def decode(self, raw: str | None) -> _T:
        """Decode a raw value. ``None`` means the field does not exist."""
        ...

    @abstractmethod
    def encode(self, value: _T) -> str:
        """Encode a typed value for storage."""
        ...

    def normalize(self, value: _T) -> _T:
        """Return *value* as it would read back after being stored."""
        return self.decode(self.encode(value))


class CheckboxFieldType(FieldType[bool]):
    """``"1"`` is checked; anything else (including a missing field) is not."""

    name = "checkbox"

    def decode(self, raw: str | None) -> bool:
        return raw == "1"

    def encode(self, value: bool) -> str:
        return "1" if value else ""


class IntegerFieldType(FieldType[int | None]):
    """Invariant-culture integer text. Empty or unparsable reads as ``None``."""

    name = "integer"

    def decode(self, raw: str | None) -> int | None:
        if raw is None:
            return None
        text = raw.strip()
        if not _INTEGER_PATTERN.match(text):
            return None
        return int(text)

    def encode(self, value: int | None) -> str:
        return "" if value is None else str(int(value))


class TextFieldType(FieldType[str]):
    """Plain text. A missing field reads as the empty string."""

    name = "text"

    def decode(self, raw: str | None) -> str:
        return raw or ""

    def encode(self, value: str | None) -> str:
        return value or ""


CHECKBOX = CheckboxFieldType()
INTEGER = IntegerFieldType()
TEXT = TextFieldType()


# ---------------------------------------------------------------------------
# Link fields
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LinkField:
    """A general link value.

    Stored by the host as an XML fragment::

        <link linktype="internal" id="{GUID}" url="/about" text="About" />

    ``linktype`` is ``internal``, ``media`` or ``external``.
    """

    link_type: str = ""
    target_id: ItemId | None = None
    url: str = ""
    text: str = ""

    @property
    def is_internal(self) -> bool:
        return self.link_type == "internal"

    @property
    def is_media_link(self) -> bool:
        return self.link_type == "media"

    def target_item(self, store: ItemStore) -> RawItem | None:
        """Fetch the linked item from *store*, or None if it is gone."""
        if self.target_id is None:
            return None
        return store.get_item_by_id(self.target_id)

    @classmethod
    def parse(cls, raw: str | None) -> Self:
        """Parse a stored link value. Empty or malformed values give an empty link."""
        if not raw or not raw.strip():
            return cls()
        try:
            element = ET.fromstring(raw)
        except ET.ParseError:
            logger.debug("Unparsable link field value: %r", raw)
            return cls()

        raw_id = element.get("id", "")
        return cls(
            link_type=element.get("linktype", "").lower(),
            target_id=parse_id(raw_id) if raw_id and is_id(raw_id) else None,
            url=element.get("url", ""),
            text=element.get("text", ""),
        )


# ---------------------------------------------------------------------------
# Typed properties
# ---------------------------------------------------------------------------


class FieldProperty(Generic[_T]):
    """Descriptor exposing one raw field as a typed attribute.

    The field is looked up by ID first and by name when the ID misses.
    The field *name* is the payload of the changing/changed notifications.
    """

    def __init__(
        self,
        field_id: str,
        field_name: str,
        field_type: FieldType[_T],
        *,
        doc: str | None = None,
    ) -> None:
        self.field_id = parse_id(field_id)
        self.field_name = field_name
        self.field_type = field_type
        self.attr_name = ""
        self.__doc__ = doc

    def __set_name__(self, owner: type, name: str) -> None:
        self.attr_name = name

    @overload
    def __get__(self, obj: None, objtype: type | None = None) -> Self: ...

    @overload
    def __get__(self, obj: ItemWrapper, objtype: type | None = None) -> _T: ...

    def __get__(self, obj: ItemWrapper | None, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        field = obj.get_field(self.field_id, self.field_name)
        return self.field_type.decode(field.value if field is not None else None)

    def __set__(self, obj: ItemWrapper, value: _T) -> None:
        obj._set_field_value(self.field_id, self.field_name, value, self.field_type)


def field_properties(cls: type) -> dict[str, FieldProperty[Any]]:
    """Return every :class:`FieldProperty` on *cls*, keyed by attribute name."""
    found: dict[str, FieldProperty[Any]] = {}
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, FieldProperty):
                found[name] = attr
    return found
