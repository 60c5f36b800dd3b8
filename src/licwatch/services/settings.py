"""SettingsService — read and edit the module's settings item.

Edits go through the typed properties of
:class:`~licwatch.domain.models.Settings`, so the change notifications
fire and values are normalized the same way the domain model reads them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from licwatch.domain.errors import FieldNotFoundError
from licwatch.domain.fields import CHECKBOX, INTEGER, field_properties
from licwatch.domain.models import Settings
from licwatch.services.base import BaseService
from licwatch.services.contracts import SettingsData, dump_validated
from licwatch.services.result import ServiceResult

if TYPE_CHECKING:
    from licwatch.domain.fields import FieldProperty
    from licwatch.domain.wrapper import ItemWrapper

logger = logging.getLogger(__name__)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


def parse_property_value(prop: FieldProperty[Any], raw: str) -> Any:
    """Convert CLI text into the value type of *prop*.

    Raises:
        ValueError: If *raw* is not valid for the property's type.
    """
    if prop.field_type is CHECKBOX:
        lowered = raw.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        msg = f"Expected a boolean for {prop.attr_name}, got {raw!r}"
        raise ValueError(msg)
    if prop.field_type is INTEGER:
        if raw.strip() == "":
            return None
        try:
            return int(raw)
        except ValueError:
            msg = f"Expected an integer for {prop.attr_name}, got {raw!r}"
            raise ValueError(msg) from None
    return raw


def resolve_property(name: str) -> FieldProperty[Any] | None:
    """Find a settings property by attribute name or field name."""
    props = field_properties(Settings)
    key = name.replace("-", "_")
    if key in props:
        return props[key]
    for prop in props.values():
        if prop.field_name.casefold() == name.casefold():
            return prop
    return None


class SettingsService(BaseService):
    """Shows and edits the license module settings."""

    def show(self, *, database: str | None = None) -> ServiceResult:
        op = "settings_show"
        db_name = database or self._host.settings.database_name
        settings = self._settings_or_failure(op, db_name)
        if isinstance(settings, ServiceResult):
            return settings
        data = dump_validated(
            SettingsData,
            {"database": db_name, "path": settings.item.path, **settings.field_values()},
        )
        return ServiceResult(ok=True, op=op, data=data)

    def set(self, prop_name: str, raw_value: str, *, database: str | None = None) -> ServiceResult:
        """Set one settings property from its text form.

        Reports the field names that actually changed; setting the current
        value changes nothing and dispatches no event.
        """
        op = "settings_set"
        db_name = database or self._host.settings.database_name
        prop = resolve_property(prop_name)
        if prop is None:
            known = ", ".join(sorted(field_properties(Settings)))
            return ServiceResult.failure(
                op, "UNKNOWN_PROPERTY", f"Unknown settings property {prop_name!r} (known: {known})"
            )
        try:
            value = parse_property_value(prop, raw_value)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_VALUE", str(exc))

        settings = self._settings_or_failure(op, db_name)
        if isinstance(settings, ServiceResult):
            return settings

        fields_changed: list[str] = []

        def record(_: ItemWrapper, field_name: str) -> None:
            fields_changed.append(field_name)

        settings.on_changed.append(record)
        try:
            setattr(settings, prop.attr_name, value)
        except FieldNotFoundError as exc:
            return ServiceResult.failure(op, "FIELD_NOT_FOUND", str(exc))

        warnings: list[str] = []
        if fields_changed:
            logger.info("Settings changed in %s: %s", db_name, ", ".join(fields_changed))
            self._dispatch_event(
                "post_settings_change",
                {"database": db_name, "fields_changed": fields_changed},
                warnings,
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "database": db_name,
                "property": prop.attr_name,
                "value": getattr(settings, prop.attr_name),
                "fields_changed": fields_changed,
            },
            warnings=warnings,
        )
