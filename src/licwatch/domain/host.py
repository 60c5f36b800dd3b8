"""Boundary contract with the external content store.

The domain layer never owns raw items. It reads them through these
protocols, which the host-store adapter implements. Every method is a
single synchronous call from the domain's point of view; absence is
reported as ``None``, failures propagate unchanged.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from licwatch.domain.ids import ItemId


class RawField(Protocol):
    """A single field value on a raw item."""

    @property
    def id(self) -> ItemId: ...

    @property
    def name(self) -> str: ...

    value: str


class RawItem(Protocol):
    """A generic, template-typed node in the content tree."""

    @property
    def id(self) -> ItemId: ...

    @property
    def version(self) -> int: ...

    @property
    def language(self) -> str: ...

    @property
    def template_id(self) -> ItemId: ...

    @property
    def template_name(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def path(self) -> str:
        """Full path from the tree root, e.g. ``/sitecore/system``."""
        ...

    @property
    def parent(self) -> RawItem | None: ...

    @property
    def has_children(self) -> bool: ...

    @property
    def children(self) -> Sequence[RawItem]:
        """Direct children in the store's sort order."""
        ...

    @property
    def store(self) -> ItemStore:
        """The store (database) this item was read from."""
        ...

    def get_descendants(self) -> Sequence[RawItem]:
        """All descendants, flattened by the host in a single call."""
        ...

    def get_field(self, key: ItemId | str) -> RawField | None:
        """Look up a field by ID or by name."""
        ...


class ItemLink(Protocol):
    """One entry of the link index: an inbound reference."""

    def get_source_item(self) -> RawItem | None: ...


class LinkIndex(Protocol):
    """Inbound-reference index maintained by the host."""

    def get_referrers(self, item: RawItem) -> Sequence[ItemLink]: ...


class ItemStore(Protocol):
    """A named content database."""

    @property
    def name(self) -> str: ...

    @property
    def link_index(self) -> LinkIndex: ...

    def get_item_by_id(self, item_id: ItemId) -> RawItem | None: ...

    def get_item_by_path(self, path: str) -> RawItem | None: ...

    def item_url(self, item: RawItem) -> str:
        """Canonical public URL for *item*."""
        ...
