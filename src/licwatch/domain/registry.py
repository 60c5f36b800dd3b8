"""Type registry — template IDs to domain types.

Two tables drive typed wrapping:

- **primary**: each template ID maps to exactly one concrete wrapper
  type, and a type is the primary mapping of at most one template.
- **contributing**: a base template's ID maps to a capability class (a
  :class:`~licwatch.domain.wrapper.ContributingTemplate` subclass).
  A concrete type "has" the capability when it declares that class.

Registration builds an explicit factory closure per template ID and
collects the capability tags each concrete type declares. Resolution is
then a lookup-and-invoke; the table is frozen after start-up.

The process-wide registry is populated at import time with the shipped
domain model (see :func:`licwatch.domain.models.register_models`).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from licwatch.domain.errors import RegistryError
from licwatch.domain.host import RawItem
from licwatch.domain.ids import ItemId, format_id
from licwatch.domain.wrapper import ContributingTemplate, ItemWrapper

logger = logging.getLogger(__name__)

type WrapperFactory = Callable[[RawItem], ItemWrapper]


@dataclass(frozen=True)
class TypeDescriptor:
    """A primary mapping with its factory and declared capability tags."""

    template_id: ItemId
    wrapper_type: type[ItemWrapper]
    factory: WrapperFactory
    capabilities: frozenset[type[ContributingTemplate]]


def _declared_capabilities(wrapper_type: type[ItemWrapper]) -> frozenset[type[ContributingTemplate]]:
    return frozenset(
        base
        for base in wrapper_type.__mro__[1:]
        if issubclass(base, ContributingTemplate) and base is not ContributingTemplate
    )


class TypeRegistry:
    """Closed table of template-to-type mappings.

    Usage::

        registry = TypeRegistry()
        registry.register(Settings.TEMPLATE_ID, Settings)
        registry.freeze()
        wrapper = registry.resolve(raw_item)
    """

    def __init__(self) -> None:
        self._primary: dict[ItemId, TypeDescriptor] = {}
        self._by_type: dict[type[ItemWrapper], TypeDescriptor] = {}
        self._contributing: dict[ItemId, type[ContributingTemplate]] = {}
        self._frozen = False

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, template_id: ItemId, wrapper_type: type[ItemWrapper]) -> TypeDescriptor:
        """Map *template_id* to *wrapper_type* as its primary domain type."""
        self._check_open()
        if not (isinstance(wrapper_type, type) and issubclass(wrapper_type, ItemWrapper)):
            msg = f"{wrapper_type!r} must extend ItemWrapper"
            raise TypeError(msg)
        if issubclass(wrapper_type, ContributingTemplate):
            msg = f"{wrapper_type.__name__} is a contributing template and cannot be a primary type"
            raise RegistryError(msg)
        if template_id in self._primary:
            existing = self._primary[template_id].wrapper_type.__name__
            msg = f"Template {format_id(template_id)} is already mapped to {existing}"
            raise RegistryError(msg)
        if wrapper_type in self._by_type:
            existing_id = format_id(self._by_type[wrapper_type].template_id)
            msg = f"{wrapper_type.__name__} is already the primary type of template {existing_id}"
            raise RegistryError(msg)

        descriptor = TypeDescriptor(
            template_id=template_id,
            wrapper_type=wrapper_type,
            factory=self._make_factory(wrapper_type),
            capabilities=_declared_capabilities(wrapper_type),
        )
        self._primary[template_id] = descriptor
        self._by_type[wrapper_type] = descriptor
        logger.debug("Registered %s for template %s", wrapper_type.__name__, format_id(template_id))
        return descriptor

    def register_contributing(
        self,
        template_id: ItemId,
        capability: type[ContributingTemplate],
    ) -> None:
        """Map a base template's ID to its capability class."""
        self._check_open()
        if not (isinstance(capability, type) and issubclass(capability, ContributingTemplate)):
            msg = f"{capability!r} must extend ContributingTemplate"
            raise TypeError(msg)
        if template_id in self._contributing:
            msg = f"Contributing template {format_id(template_id)} is already registered"
            raise RegistryError(msg)
        self._contributing[template_id] = capability

    def freeze(self) -> None:
        """Close the table. Later registrations raise :class:`RegistryError`."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, item: RawItem | None) -> ItemWrapper | None:
        """Wrap *item* in its registered domain type.

        Unregistered templates fall back to a plain :class:`ItemWrapper`.
        Returns None when *item* is None.
        """
        if item is None:
            return None
        descriptor = self._primary.get(item.template_id)
        if descriptor is None:
            return ItemWrapper(item, registry=self)
        return descriptor.factory(item)

    def descriptor_for(self, template_id: ItemId) -> TypeDescriptor | None:
        return self._primary.get(template_id)

    def primary_type_for(self, template_id: ItemId) -> type[ItemWrapper] | None:
        """The concrete type registered for *template_id*, if any."""
        descriptor = self._primary.get(template_id)
        return descriptor.wrapper_type if descriptor is not None else None

    def template_id_for(self, wrapper_type: type[ItemWrapper]) -> ItemId | None:
        descriptor = self._by_type.get(wrapper_type)
        return descriptor.template_id if descriptor is not None else None

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    def type_has_capability(
        self,
        wrapper_type: type[ItemWrapper],
        contributing_template_id: ItemId,
    ) -> bool:
        """Whether *wrapper_type* declares the capability of a base template."""
        capability = self._contributing.get(contributing_template_id)
        descriptor = self._by_type.get(wrapper_type)
        if capability is None or descriptor is None:
            return False
        return capability in descriptor.capabilities

    def valid_template_ids_for(self, kind: type[ItemWrapper]) -> list[ItemId]:
        """Template IDs whose items can be wrapped as a *kind*.

        Includes primary templates mapped to *kind* or a subtype, plus
        contributing templates whose capability is *kind* or a subtype.
        """
        primary = [
            template_id
            for template_id, descriptor in self._primary.items()
            if issubclass(descriptor.wrapper_type, kind)
        ]
        contributing = [
            template_id
            for template_id, capability in self._contributing.items()
            if issubclass(capability, kind)
        ]
        return primary + contributing

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._primary

    def __len__(self) -> int:
        return len(self._primary)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _check_open(self) -> None:
        if self._frozen:
            msg = "Type registry is frozen; register domain types at start-up"
            raise RegistryError(msg)

    def _make_factory(self, wrapper_type: type[ItemWrapper]) -> WrapperFactory:
        def factory(item: RawItem) -> ItemWrapper:
            return wrapper_type(item, registry=self)

        return factory


# ---------------------------------------------------------------------------
# Process-wide registry
# ---------------------------------------------------------------------------


def build_registry() -> TypeRegistry:
    """Build and freeze a registry holding the shipped domain model."""
    from licwatch.domain.models import register_models

    registry = TypeRegistry()
    register_models(registry)
    registry.freeze()
    return registry


_DEFAULT_REGISTRY = build_registry()


def default_registry() -> TypeRegistry:
    """The registry built at import time."""
    return _DEFAULT_REGISTRY
