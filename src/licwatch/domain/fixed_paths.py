"""Fixed paths — well-known items resolved by ID with path verification.

A fixed path names an item that exists by convention (a module folder,
its settings item). The item ID is authoritative, but items get moved:

- ID found at the canonical path: use it.
- ID found elsewhere: prefer whatever now lives at the canonical path,
  otherwise keep the moved item.
- ID not found: fall back to the canonical path.
- Neither found: None.

Every call goes to the store; nothing is cached, so a resolved item is
always fresh.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from licwatch.domain.ids import ItemId, format_id, parse_id
from licwatch.domain.models import Settings
from licwatch.domain.registry import TypeRegistry, default_registry
from licwatch.domain.wrapper import ItemWrapper

if TYPE_CHECKING:
    from licwatch.domain.host import ItemStore, RawItem

logger = logging.getLogger(__name__)


def resolve_fixed_item(store: ItemStore, item_id: ItemId, path: str) -> RawItem | None:
    """Find a well-known item by *item_id*, verified against its canonical *path*."""
    item = store.get_item_by_id(item_id)
    if item is None:
        return store.get_item_by_path(path)
    if item.path == path:
        return item

    moved_to = item.path
    at_path = store.get_item_by_path(path)
    if at_path is not None:
        logger.debug("Fixed item %s was moved to %s; using %s", format_id(item_id), moved_to, path)
        return at_path
    logger.debug("Fixed item %s was moved to %s", format_id(item_id), moved_to)
    return item


@dataclass(frozen=True)
class FixedPath:
    """A well-known location in the content tree.

    Attributes:
        item_id: Authoritative ID of the item.
        path: Canonical full path.
        wrapper_type: Domain type the item is expected to have.
        databases: Databases in which the item is expected to exist.
    """

    item_id: ItemId
    path: str
    wrapper_type: type[ItemWrapper] = ItemWrapper
    databases: tuple[str, ...] = ("master",)

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    def resolve_item(self, store: ItemStore) -> RawItem | None:
        """The raw item at this location, or None."""
        return resolve_fixed_item(store, self.item_id, self.path)

    def get(self, store: ItemStore, *, registry: TypeRegistry | None = None) -> ItemWrapper | None:
        """The item at this location, wrapped through the registry, or None.

        An item whose template does not match a typed location raises
        :class:`~licwatch.domain.errors.DomainObjectBindingError`.
        """
        item = self.resolve_item(store)
        if item is None:
            return None
        registry = registry or default_registry()
        wrapper = registry.resolve(item)
        if not isinstance(wrapper, self.wrapper_type):
            # Constructing the declared type reports the binding error.
            return self.wrapper_type(item, registry=registry)
        return wrapper


# ---------------------------------------------------------------------------
# Fixed paths of the license expiration module
# ---------------------------------------------------------------------------

SYSTEM = FixedPath(
    item_id=parse_id("{13D6D6C6-C50B-4BBD-B331-2B04F1A58F21}"),
    path="/sitecore/system",
)

MODULES = FixedPath(
    item_id=parse_id("{08477468-D438-43D4-9D6A-6D84A611971C}"),
    path="/sitecore/system/Modules",
)

LICENSE_MODULE = FixedPath(
    item_id=parse_id("{9DD99268-544A-4B55-9915-2C1677983D97}"),
    path="/sitecore/system/Modules/Sitecore License Expiration Module",
)

SETTINGS = FixedPath(
    item_id=parse_id("{AAE814A9-6EB3-4F96-8F04-BD9A4B7094FB}"),
    path="/sitecore/system/Modules/Sitecore License Expiration Module/Settings",
    wrapper_type=Settings,
)

FIXED_PATHS: tuple[FixedPath, ...] = (SYSTEM, MODULES, LICENSE_MODULE, SETTINGS)


def get_system(store: ItemStore) -> ItemWrapper | None:
    """The ``/sitecore/system`` item."""
    return SYSTEM.get(store)


def get_modules(store: ItemStore) -> ItemWrapper | None:
    """The ``/sitecore/system/Modules`` folder."""
    return MODULES.get(store)


def get_license_module(store: ItemStore) -> ItemWrapper | None:
    """The license expiration module folder."""
    return LICENSE_MODULE.get(store)


def get_settings(store: ItemStore) -> Settings | None:
    """The module's :class:`Settings` item."""
    settings = SETTINGS.get(store)
    assert settings is None or isinstance(settings, Settings)
    return settings
