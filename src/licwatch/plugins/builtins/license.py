"""Built-in license source reading ``[license] expiration`` from config.

Hosts that know their license (a license file, an API) register their own
``license_expiration`` implementation; pluggy calls later registrations
first, so an installed plugin wins over this one.
"""

from __future__ import annotations

from datetime import date

import pluggy

from licwatch.config.models import LicenseConfig

hookimpl = pluggy.HookimplMarker("licwatch")


class ConfiguredLicensePlugin:
    """Answers ``license_expiration`` from configuration."""

    def __init__(self, config: LicenseConfig | None = None) -> None:
        self._config = config or LicenseConfig()

    @hookimpl
    def license_expiration(self) -> date | None:
        return self._config.expiration
