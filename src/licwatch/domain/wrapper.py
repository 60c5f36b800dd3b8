"""Item wrappers — typed, navigable views over raw store items.

:class:`ItemWrapper` wraps exactly one raw item for its lifetime and
resolves every related item (parent, children, descendants, referrers)
through a :class:`~licwatch.domain.registry.TypeRegistry`, so traversal
always yields the most specific domain type available.

Traversal results follow one convention throughout:

- ``None`` means *nothing exists* (no children, no descendants, no
  referrers, or none of the requested type).
- A list is never empty.

Wrappers are cheap and ephemeral. They are built on demand for each call
and never cached, so every read reflects the store's current state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, TypeVar

from licwatch.domain.errors import DomainObjectBindingError, FieldNotFoundError
from licwatch.domain.fields import LinkField, field_properties
from licwatch.domain.identity import ItemIdentity, identity_of
from licwatch.domain.ids import format_id

if TYPE_CHECKING:
    from licwatch.domain.fields import FieldType
    from licwatch.domain.host import RawField, RawItem
    from licwatch.domain.ids import ItemId
    from licwatch.domain.registry import TypeRegistry

logger = logging.getLogger(__name__)

_W = TypeVar("_W", bound="ItemWrapper")
_T = TypeVar("_T")

# Observer signature: (wrapper, field_name) -> None
type PropertyObserver = Callable[[ItemWrapper, str], None]


def _non_empty(wrappers: list[_W]) -> list[_W] | None:
    return wrappers or None


class ItemWrapper:
    """Typed wrapper around a raw item.

    Args:
        item: The raw item to wrap. Required.
        registry: Registry used to resolve related items. Defaults to the
            process-wide registry holding the shipped domain model.

    Attributes:
        on_changing: Observers called before a field value changes.
        on_changed: Observers called after a field value changed.
    """

    def __init__(self, item: RawItem, *, registry: TypeRegistry | None = None) -> None:
        if item is None:
            msg = f"No item was passed to create a new {type(self).__name__!r} object"
            raise ValueError(msg)
        if registry is None:
            from licwatch.domain.registry import default_registry

            registry = default_registry()
        self._item = item
        self._registry = registry
        self.on_changing: list[PropertyObserver] = []
        self.on_changed: list[PropertyObserver] = []

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def item(self) -> RawItem:
        """The wrapped raw item."""
        return self._item

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    @property
    def identity(self) -> ItemIdentity:
        return identity_of(self._item)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ItemWrapper):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {format_id(self._item.id)} {self._item.path}>"

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def parent(self) -> ItemWrapper | None:
        """Typed wrapper for the parent item, or None at the root."""
        raw_parent = self._item.parent
        if raw_parent is None:
            return None
        return self._wrap(raw_parent)

    def children(self) -> list[ItemWrapper] | None:
        """Typed wrappers for the direct children, in store order.

        Returns None when the item has no children.
        """
        if not self._item.has_children:
            return None
        return _non_empty(self._wrap_all(self._item.children))

    def children_of_type(self, kind: type[_W]) -> list[_W] | None:
        """Children that are a *kind*. None if there are none."""
        return self._filter(self.children(), kind)

    def first_ancestor_of_type(self, kind: type[_W]) -> _W | None:
        """Walk up the tree and return the nearest ancestor that is a *kind*.

        Returns None when the root is reached without a match.
        """
        visited = {self.identity}
        ancestor = self.parent()
        while ancestor is not None and ancestor.identity not in visited:
            if isinstance(ancestor, kind):
                return ancestor
            visited.add(ancestor.identity)
            ancestor = ancestor.parent()
        return None

    def descendants(self) -> list[ItemWrapper] | None:
        """Typed wrappers for all descendants, flattened by the store.

        Only use this where the subtree is known to be small: the store
        materializes every descendant in one call. Returns None when the
        item has no descendants.
        """
        return _non_empty(self._wrap_all(self._item.get_descendants() or ()))

    def descendants_of_type(self, kind: type[_W]) -> list[_W] | None:
        """Descendants that are a *kind*. None if there are none."""
        return self._filter(self.descendants(), kind)

    def referrers(self) -> list[ItemWrapper] | None:
        """Typed wrappers for every item that links to this one.

        Requires the host's link index. Returns None when nothing links here.
        """
        links = self._item.store.link_index.get_referrers(self._item)
        if not links:
            return None
        return _non_empty(self._wrap_all(link.get_source_item() for link in links))

    def referrers_of_type(self, kind: type[_W]) -> list[_W] | None:
        """Referrers that are a *kind*. None if there are none."""
        return self._filter(self.referrers(), kind)

    # ------------------------------------------------------------------
    # Field access
    # ------------------------------------------------------------------

    def get_field(self, field_id: ItemId, field_name: str) -> RawField | None:
        """Look up a field by ID, falling back to its name."""
        field = self._item.get_field(field_id)
        if field is None:
            field = self._item.get_field(field_name)
        return field

    def get_link_field(self, field_id: ItemId, field_name: str) -> LinkField | None:
        """Look up a general link field and parse its value."""
        field = self.get_field(field_id, field_name)
        if field is None:
            return None
        return LinkField.parse(field.value)

    def _set_field_value(
        self,
        field_id: ItemId,
        field_name: str,
        value: _T,
        field_type: FieldType[_T],
    ) -> None:
        """Write *value* to a field, notifying observers around the mutation.

        A value equal to the current one is a no-op: nothing is written and
        no observer is called. Otherwise every ``on_changing`` observer
        runs, then the field is written, then every ``on_changed`` observer
        runs. *field_name* is the notification payload.
        """
        field = self.get_field(field_id, field_name)
        if field is None:
            msg = f"Item {self._item.path} has no field {field_name!r}"
            raise FieldNotFoundError(msg)

        if field_type.decode(field.value) == field_type.normalize(value):
            return

        self._raise_property_changing(field_name)
        field.value = field_type.encode(value)
        logger.debug("Field %s changed on %s", field_name, self._item.path)
        self._raise_property_changed(field_name)

    def _raise_property_changing(self, field_name: str) -> None:
        for observer in list(self.on_changing):
            observer(self, field_name)

    def _raise_property_changed(self, field_name: str) -> None:
        for observer in list(self.on_changed):
            observer(self, field_name)

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------

    def url(self) -> str:
        """Canonical URL of this item. Override for a different link strategy."""
        return self._item.store.item_url(self._item)

    def resolve_link(self, link: LinkField) -> str | None:
        """Resolve a link field to a URL.

        Internal and media links resolve to the target item's URL (None if
        the target no longer exists). External links pass through as-is.
        """
        if link.is_internal or link.is_media_link:
            return self.resolve_item_url(link.target_item(self._item.store))
        return link.url

    def resolve_item_url(self, item: RawItem | None) -> str | None:
        """URL of *item*, resolved through the registry. None for no item."""
        if item is None:
            return None
        target = self._wrap(item)
        return target.url() if target is not None else None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _wrap(self, item: RawItem | None) -> ItemWrapper | None:
        return self._registry.resolve(item)

    def _wrap_all(self, items: Iterable[RawItem | None]) -> list[ItemWrapper]:
        wrapped: list[ItemWrapper] = []
        for raw in items:
            wrapper = self._wrap(raw)
            if wrapper is not None:
                wrapped.append(wrapper)
        return wrapped

    @staticmethod
    def _filter(wrappers: list[ItemWrapper] | None, kind: type[_W]) -> list[_W] | None:
        if wrappers is None:
            return None
        return _non_empty([w for w in wrappers if isinstance(w, kind)])


class ContributingTemplate(ItemWrapper):
    """Marker base for capabilities contributed by a shared base template.

    Domain objects inherit from a contributing template class when their
    template inherits the matching base template. Contributing template
    classes are never instantiated on their own.
    """


class DomainObject(ItemWrapper):
    """Base class for all domain objects.

    A domain object can only be built over an item whose template is
    registered for this class (or a subclass of it). Anything else is a
    configuration defect and raises :class:`DomainObjectBindingError`.
    """

    def __init__(self, item: RawItem, *, registry: TypeRegistry | None = None) -> None:
        super().__init__(item, registry=registry)
        mapped = self._registry.primary_type_for(item.template_id)
        if mapped is None:
            msg = (
                f"Tried to create a {type(self).__name__!r}, but there is no domain "
                f"object specified for template {item.template_name!r}"
            )
            raise DomainObjectBindingError(msg)
        if not issubclass(mapped, type(self)):
            msg = (
                f"Tried to create a {type(self).__name__!r}, but the template "
                f"{item.template_name!r} is not valid for that type"
            )
            raise DomainObjectBindingError(msg)

    def field_values(self) -> dict[str, Any]:
        """Every typed property of this object, keyed by attribute name."""
        return {name: getattr(self, name) for name in field_properties(type(self))}
