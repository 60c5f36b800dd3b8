"""Identity and equality of wrapped items.

A wrapper is identified by the (ID, version, language) triple of the
raw item it wraps, not by the in-memory raw item instance. Two raw items
fetched separately for the same version of the same item in the same
language produce equal wrappers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from licwatch.domain.host import RawItem
    from licwatch.domain.ids import ItemId


class ItemIdentity(NamedTuple):
    """The identity triple of a raw item."""

    id: ItemId
    version: int
    language: str


def identity_of(item: RawItem) -> ItemIdentity:
    """Return the identity triple of *item*."""
    return ItemIdentity(item.id, item.version, item.language)
