"""Typed payload contracts for service and plugin boundaries.

:class:`MailMessage` is what the ``send_mail`` hook receives.
:class:`ContentEditorWarnings` is the host-supplied collection that the
editor warning service appends to.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="json")


class MailMessage(BaseModel):
    """An outgoing notification mail."""

    model_config = ConfigDict(frozen=True)

    sender: str
    recipient: str
    subject: str
    body: str
    html: bool = True


class ContentEditorWarning(BaseModel):
    """A warning shown above an item in the content editor."""

    model_config = ConfigDict(frozen=True)

    title: str
    text: str
    icon: str


class ContentEditorWarnings(BaseModel):
    """Pipeline arguments: the item being edited and its warnings so far."""

    item_path: str | None = None
    warnings: list[ContentEditorWarning] = Field(default_factory=list)

    def add(self, title: str, text: str, icon: str) -> ContentEditorWarning:
        """Append a warning and return it."""
        warning = ContentEditorWarning(title=title, text=text, icon=icon)
        self.warnings.append(warning)
        return warning


class SettingsData(BaseModel):
    """Payload contract for ``SettingsService.show``."""

    model_config = ConfigDict(extra="forbid")

    database: str
    path: str
    always_warn: bool
    default_number_of_days_to_warn: int | None
    warning_title: str
    warning_subtitle: str
    disable_mail: bool
    mail_from: str
    mail_to: str
    mail_subject: str
    mail_content: str


class NotifyResultData(BaseModel):
    """Payload contract for ``NotificationService.run``."""

    expiration: str | None
    days_to_warn: int
    within_window: bool
    sent: bool
    recipient: str | None = None
    subject: str | None = None
