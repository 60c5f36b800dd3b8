"""Domain exceptions.

These signal configuration defects in the domain model, never ordinary
absence. Absence (no item, no field, no children) is always ``None``.
"""

from __future__ import annotations


class RegistryError(ValueError):
    """A template-to-type registration conflicts with the existing table."""


class DomainObjectBindingError(TypeError):
    """A domain object was constructed over an item of the wrong template."""


class FieldNotFoundError(KeyError):
    """A typed property was written but the item has no such field."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""
