"""NotificationService — mail the license expiration notice.

Meant to be run on a schedule (``licwatch notify`` from cron). Reads the
module settings from the settings database, and when the license is inside
its warning window, hands a :class:`MailMessage` to the ``send_mail``
plugin hook.
"""

from __future__ import annotations

import logging
from datetime import date

from licwatch.services._helpers import fill_placeholders, within_warning_window
from licwatch.services.base import BaseService
from licwatch.services.contracts import MailMessage, NotifyResultData, dump_validated
from licwatch.services.result import ServiceResult

logger = logging.getLogger(__name__)


class NotificationService(BaseService):
    """Sends the expiration notification mail for one site."""

    def run(self, url: str, *, today: date | None = None) -> ServiceResult:
        """Check the warning window and mail the notice when it is open.

        Args:
            url: Site URL substituted for ``[url]`` in subject and body.
            today: Reference date (defaults to the current date).
        """
        op = "notify"
        database = self._host.settings.notify.settings_database
        logger.info("License expiration check runs for site: %s", url)

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
        days = self._days_to_warn(settings)
        within = within_warning_window(today, expiration, days)
        warnings: list[str] = []
        sent = False
        message: MailMessage | None = None

        if within and not settings.disable_mail:
            message = MailMessage(
                sender=settings.mail_from,
                recipient=settings.mail_to,
                subject=fill_placeholders(settings.mail_subject, expiration, url),
                body=fill_placeholders(settings.mail_content, expiration, url),
                html=True,
            )
            sent = self._deliver(message, warnings)

        data = dump_validated(
            NotifyResultData,
            {
                "expiration": expiration.isoformat(),
                "days_to_warn": days,
                "within_window": within,
                "sent": sent,
                "recipient": message.recipient if message else None,
                "subject": message.subject if message else None,
            },
        )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def _deliver(self, message: MailMessage, warnings: list[str]) -> bool:
        """Send *message* through the plugins. Failures become warnings."""
        try:
            delivered = self._host.plugin_manager.hook.send_mail(message=message)
        except Exception as exc:
            logger.error("License expiration mail failed", exc_info=True)
            warnings.append(f"Mail delivery failed: {exc}")
            return False
        if not delivered:
            tried = self._host.plugin_manager.implementers("send_mail")
            logger.warning("Mail not delivered; transports tried: %s", ", ".join(tried) or "none")
            warnings.append("No mail transport delivered the message")
            return False
        return True
