"""Plugin discovery, registration and hook dispatch.

Plugins come from two places:

- built-ins, registered by :meth:`PluginManager.register_builtins` from the
  resolved settings (license date from ``[license]``, SMTP from ``[mail]``);
- installed distributions exposing a ``licwatch.plugins`` entry point.

pluggy calls implementations in reverse registration order, so anything
registered after the built-ins answers the first-result hooks first.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

import pluggy

from licwatch.plugins.hookspecs import LicwatchHookSpec

if TYPE_CHECKING:
    from licwatch.config.settings import LicwatchSettings

PROJECT_NAME = "licwatch"
ENTRY_POINT_GROUP = "licwatch.plugins"

LICENSE_BUILTIN = "license-builtin"
SMTP_BUILTIN = "smtp-builtin"

logger = logging.getLogger(__name__)


class PluginManager:
    """Thin wrapper over :class:`pluggy.PluginManager` with licwatch's hook specs."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(LicwatchHookSpec)
        self._loaded = False

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_builtins(self, settings: LicwatchSettings) -> None:
        """Register the license and mail plugins configured by *settings*."""
        from licwatch.plugins.builtins.license import ConfiguredLicensePlugin
        from licwatch.plugins.builtins.smtp import SmtpMailPlugin

        self.register_plugin(ConfiguredLicensePlugin(settings.license), name=LICENSE_BUILTIN)
        self.register_plugin(SmtpMailPlugin(settings.mail), name=SMTP_BUILTIN)

    def discover_and_load(self) -> list[str]:
        """Load every ``licwatch.plugins`` entry point.

        Returns the names of all registered plugins afterwards.
        """
        count = self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        if count:
            logger.debug("Loaded %d plugin(s) from entry points", count)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance under *name* (default: its class name)."""
        plugin_name = name or type(plugin).__name__
        self._pm.register(plugin, name=plugin_name)
        logger.debug("Registered plugin: %s", plugin_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        """Whether entry points have been loaded."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [self._plugin_name(p) for p in self._pm.get_plugins()]

    def implementers(self, hook_name: str) -> list[str]:
        """Names of the plugins implementing *hook_name*, in call order."""
        caller = getattr(self._pm.hook, hook_name)
        return [self._plugin_name(impl.plugin) for impl in reversed(caller.get_hookimpls())]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _plugin_name(self, plugin: object) -> str:
        return self._pm.get_name(plugin) or type(plugin).__name__

    def _normalize_plugin_instances(self) -> None:
        """Swap plugin classes registered by an entry point for instances.

        A class registered as a plugin would be called with ``self`` unbound.
        Classes that cannot be built without arguments are dropped with a
        warning.
        """
        for plugin in self.get_plugins():
            if not inspect.isclass(plugin) or not self._has_hook_impls(plugin):
                continue
            plugin_name = self._plugin_name(plugin)
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning("Could not instantiate plugin %s", plugin_name, exc_info=True)
                continue
            self._pm.register(instance, name=plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Whether *cls* has a public method marked with ``@hookimpl``.

        ``HookimplMarker("licwatch")`` tags each marked function with a
        ``licwatch_impl`` attribute.
        """
        return any(
            callable(member) and getattr(member, f"{PROJECT_NAME}_impl", None)
            for name, member in inspect.getmembers(cls)
            if not name.startswith("_")
        )
