"""Relative fixed paths — expected structure below a resolved item.

A relative fixed path describes a subtree by convention: which named
children must exist below an item and which domain type each must have.
Because such a subtree can be copied anywhere, it can only be checked at
runtime. Validation never raises; it collects one message per defect so
a single pass reports everything.

Subclasses declare their structure::

    class ModuleRelativePath(RelativeFixedPath):
        expected_type = ItemWrapper
        child_paths = {"Settings": SettingsRelativePath}
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from licwatch.domain.models import Settings
from licwatch.domain.registry import default_registry
from licwatch.domain.wrapper import ItemWrapper

if TYPE_CHECKING:
    from licwatch.domain.host import RawItem
    from licwatch.domain.registry import TypeRegistry


class RelativeFixedPath:
    """Base class for fixed paths that are used relative to another item.

    Attributes:
        expected_type: Domain type the item itself must have.
        child_paths: Required children, by item name, with the relative
            path class that validates each child's own subtree.
    """

    expected_type: ClassVar[type[ItemWrapper]] = ItemWrapper
    child_paths: ClassVar[dict[str, type[RelativeFixedPath]]] = {}

    def __init__(self, item: RawItem, *, registry: TypeRegistry | None = None) -> None:
        self.item = item
        self._registry = registry or default_registry()

    def child(self, name: str) -> RelativeFixedPath | None:
        """The relative path for the required child *name*, or None if it is missing."""
        path_cls = self.child_paths[name]
        raw_child = self._find_child(name)
        if raw_child is None:
            return None
        return path_cls(raw_child, registry=self._registry)

    def validation_messages(self) -> list[str] | None:
        """Messages for each failed check, or None if the subtree is valid."""
        messages: list[str] = []
        self._validate_type(messages, self.item, self.expected_type)
        for name in self.child_paths:
            self._validate_child(messages, name, self.child(name))
        return messages or None

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _validate_child(
        self,
        messages: list[str],
        child_name: str,
        child_path: RelativeFixedPath | None,
    ) -> None:
        if child_path is not None:
            messages.extend(child_path.validation_messages() or [])
        else:
            messages.append(
                f"Could not find a child item '{child_name}' for relative fixed path "
                f"item '{self.item.path}'."
            )

    def _validate_type(
        self,
        messages: list[str],
        item: RawItem,
        kind: type[ItemWrapper],
    ) -> None:
        if not isinstance(self._registry.resolve(item), kind):
            messages.append(
                f"The item {item.path} was expected to be a {kind.__name__}, "
                f"but it was a {item.template_name}"
            )

    def _find_child(self, name: str) -> RawItem | None:
        if not self.item.has_children:
            return None
        wanted = name.casefold()
        for raw_child in self.item.children:
            if raw_child.name.casefold() == wanted:
                return raw_child
        return None


# ---------------------------------------------------------------------------
# Relative fixed paths of the license expiration module
# ---------------------------------------------------------------------------


class SettingsRelativePath(RelativeFixedPath):
    """A ``Settings`` item."""

    expected_type = Settings


class LicenseModuleRelativePath(RelativeFixedPath):
    """A license expiration module folder with its ``Settings`` child."""

    child_paths = {"Settings": SettingsRelativePath}

    @property
    def settings(self) -> SettingsRelativePath | None:
        child = self.child("Settings")
        assert child is None or isinstance(child, SettingsRelativePath)
        return child
