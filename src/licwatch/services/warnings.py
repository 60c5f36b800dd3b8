"""EditorWarningService — the content editor's license warning."""

from __future__ import annotations

from datetime import date

from licwatch.services._helpers import fill_placeholders, within_warning_window
from licwatch.services.base import BaseService
from licwatch.services.contracts import ContentEditorWarnings
from licwatch.services.result import ServiceResult


class EditorWarningService(BaseService):
    """Adds the expiration warning to a content editor warnings collection.

    The warning is added when the settings say to always warn, or when
    the license is inside its warning window.
    """

    def process(
        self,
        args: ContentEditorWarnings,
        *,
        url: str | None = None,
        today: date | None = None,
    ) -> ServiceResult:
        op = "warnings"
        database = self._host.settings.notify.settings_database
        settings = self._settings_or_failure(op, database)
        if isinstance(settings, ServiceResult):
            return settings

        expiration = self._license_expiration()
        if expiration is None:
            return ServiceResult.failure(
                op,
                "LICENSE_UNKNOWN",
                "License expiration date is unknown; set [license] expiration",
            )

        today = today or date.today()
        within = within_warning_window(today, expiration, self._days_to_warn(settings))
        if settings.always_warn or within:
            args.add(
                title=settings.warning_title,
                text=fill_placeholders(
                    settings.warning_subtitle,
                    expiration,
                    url or self._host.settings.store.site_url,
                ),
                icon=self._host.settings.notify.warning_icon,
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "item": args.item_path,
                "expiration": expiration.isoformat(),
                "within_window": within,
                "warnings": [w.model_dump() for w in args.warnings],
            },
        )
