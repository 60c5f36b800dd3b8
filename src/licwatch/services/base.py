"""BaseService — abstract foundation for all licwatch services.

Every service receives a :class:`Host` at construction time. The Host
provides the content stores and the plugin manager.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Any

from licwatch.domain.fixed_paths import get_settings
from licwatch.services.result import ServiceResult

if TYPE_CHECKING:
    from licwatch.domain.models import Settings
    from licwatch.infrastructure.host import Host

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class NotificationService(BaseService):
            def run(self, url: str) -> ServiceResult:
                settings = self._settings_or_failure("notify", "master")
                ...
    """

    def __init__(self, host: Host) -> None:
        self._host = host

    def _load_settings(self, database: str | None = None) -> Settings | None:
        """The module's settings item in *database*, or None if it is missing."""
        return get_settings(self._host.database(database))

    def _settings_or_failure(self, op: str, database: str) -> Settings | ServiceResult:
        """The settings item in *database*, or a failed result explaining why not.

        Only an unconfigured database name or a missing settings item is a
        failure; errors reading the store propagate.
        """
        known = self._host.databases
        if database not in known:
            return ServiceResult.failure(
                op,
                "UNKNOWN_DATABASE",
                f"Unknown database {database!r} (configured: {', '.join(known)})",
            )
        settings = self._load_settings(database)
        if settings is None:
            return ServiceResult.failure(
                op, "SETTINGS_NOT_FOUND", f"No license module settings in database {database!r}"
            )
        return settings

    def _license_expiration(self) -> date | None:
        """Ask the plugins when the license expires."""
        result: date | None = self._host.plugin_manager.hook.license_expiration()
        return result

    def _days_to_warn(self, settings: Settings) -> int:
        configured = settings.default_number_of_days_to_warn
        if configured is None:
            return self._host.settings.notify.default_days_to_warn
        return configured

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Dispatch a lifecycle hook. Plugin failures are warnings, never errors."""
        hook = getattr(self._host.plugin_manager.hook, hook_name)
        try:
            hook(**payload)
        except Exception:
            logger.debug("Event dispatch failed for %s", hook_name, exc_info=True)
            warnings.append(f"Event dispatch failed for {hook_name}")
