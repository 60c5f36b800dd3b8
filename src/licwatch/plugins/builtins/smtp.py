"""Built-in SMTP mail transport.

Delivers :class:`~licwatch.services.contracts.MailMessage` objects through
the SMTP relay configured in ``[mail]``. Connection and protocol errors
propagate to the caller, which reports them as warnings.
"""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from typing import TYPE_CHECKING

import pluggy

from licwatch.config.models import MailConfig

if TYPE_CHECKING:
    from licwatch.services.contracts import MailMessage

hookimpl = pluggy.HookimplMarker("licwatch")

logger = logging.getLogger(__name__)


def build_email(message: MailMessage) -> EmailMessage:
    """Render *message* as a MIME message."""
    email = EmailMessage()
    email["From"] = message.sender
    email["To"] = message.recipient
    email["Subject"] = message.subject
    if message.html:
        email.set_content(message.body, subtype="html")
    else:
        email.set_content(message.body)
    return email


class SmtpMailPlugin:
    """SMTP transport for the ``send_mail`` hook."""

    def __init__(self, config: MailConfig | None = None) -> None:
        self._config = config or MailConfig()

    @hookimpl
    def send_mail(self, message: MailMessage) -> bool | None:
        """Send *message*. Returns None when SMTP delivery is disabled."""
        if not self._config.enabled:
            logger.debug("SMTP delivery disabled; not sending %r", message.subject)
            return None

        cfg = self._config
        with smtplib.SMTP(cfg.host, cfg.port, timeout=cfg.timeout) as smtp:
            if cfg.use_tls:
                smtp.starttls()
            if cfg.username:
                smtp.login(cfg.username, cfg.password or "")
            smtp.send_message(build_email(message))

        logger.info("Sent license expiration mail to %s", message.recipient)
        return True
