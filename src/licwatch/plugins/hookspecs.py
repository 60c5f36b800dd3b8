"""Pluggy hook specifications for licwatch host integration.

The host supplies what the item model cannot know on its own: when the
license expires and how mail is delivered. One lifecycle event reports
settings changes made through the domain model.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from licwatch.services.contracts import MailMessage

hookspec = pluggy.HookspecMarker("licwatch")


class LicwatchHookSpec:
    """Hook specifications for the licwatch plugin system."""

    @hookspec(firstresult=True)
    def license_expiration(self) -> date | None:
        """Return the date the host's license expires, or None if unknown."""

    @hookspec(firstresult=True)
    def send_mail(self, message: MailMessage) -> bool | None:
        """Deliver *message*. Return True once delivered; None to pass."""

    @hookspec
    def post_settings_change(
        self,
        database: str,
        fields_changed: list[str],
    ) -> None:
        """Called after settings fields were changed through the domain model."""
