"""Host — the content stores, engine and plugins behind every service.

The Host is the single dependency injected into every service. It owns
the SQLAlchemy engine, hands out one :class:`SqlItemStore` per named
database, and lazily builds the plugin manager with the built-in plugins
registered.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from licwatch.infrastructure.database.engine import init_database
from licwatch.infrastructure.store import SqlItemStore

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from licwatch.config.settings import LicwatchSettings
    from licwatch.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class Host:
    """Repository encapsulating the content store and plugin access.

    Constructed once at CLI startup from :class:`LicwatchSettings` and
    stored in the :class:`~licwatch.commands._context.AppContext`.
    Services receive the Host via their :class:`BaseService` constructor.

    Args:
        settings: Resolved settings.
        engine: Existing engine to use instead of opening ``store_path``.
    """

    def __init__(self, settings: LicwatchSettings, *, engine: Engine | None = None) -> None:
        self._settings = settings
        self._engine: Engine = engine or init_database(settings.store_path)
        self._stores: dict[str, SqlItemStore] = {}
        self._plugin_manager: PluginManager | None = None

    @property
    def settings(self) -> LicwatchSettings:
        """The resolved settings for this host."""
        return self._settings

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def store_path(self) -> Path:
        return self._settings.store_path

    @property
    def databases(self) -> list[str]:
        """Names of the configured databases."""
        return list(self._settings.store.databases)

    def database(self, name: str | None = None) -> SqlItemStore:
        """The store for database *name* (default: the selected database).

        Raises:
            ValueError: If *name* is not a configured database.
        """
        resolved = name or self._settings.database_name
        if resolved not in self._settings.store.databases:
            known = ", ".join(self._settings.store.databases)
            msg = f"Unknown database {resolved!r} (configured: {known})"
            raise ValueError(msg)
        store = self._stores.get(resolved)
        if store is None:
            store = SqlItemStore(self._engine, resolved, site_url=self._settings.store.site_url)
            self._stores[resolved] = store
        return store

    @property
    def plugin_manager(self) -> PluginManager:
        """The plugin manager, built on first access."""
        if self._plugin_manager is None:
            self._plugin_manager = self._init_plugins()
        return self._plugin_manager

    def _init_plugins(self) -> PluginManager:
        """Discover entry-point plugins and register the built-in ones.

        Built-ins are registered first so installed plugins, called in
        reverse registration order, take precedence for first-result hooks.
        """
        from licwatch.plugins.manager import PluginManager

        pm = PluginManager()
        pm.register_builtins(self._settings)
        pm.discover_and_load()
        return pm

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self._engine.dispose()
