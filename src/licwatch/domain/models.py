"""Domain objects for the license expiration module.

Each class wraps items of one template. Attributes are
:class:`~licwatch.domain.fields.FieldProperty` descriptors; their
setters follow the change-notification contract of
:class:`~licwatch.domain.wrapper.ItemWrapper`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from licwatch.domain.fields import CHECKBOX, INTEGER, TEXT, FieldProperty
from licwatch.domain.ids import ItemId, parse_id
from licwatch.domain.wrapper import DomainObject

if TYPE_CHECKING:
    from licwatch.domain.registry import TypeRegistry


class Settings(DomainObject):
    """Typed wrapper for items with template ``Settings``."""

    TEMPLATE_NAME: ClassVar[str] = "Settings"
    TEMPLATE_ID: ClassVar[ItemId] = parse_id("{7210C857-D27B-4325-A6FA-1346E8ECA366}")

    # --- General Settings ---

    FIELD_ALWAYS_WARN: ClassVar[str] = "AlwaysWarn"
    FIELD_DEFAULT_NUMBER_OF_DAYS_TO_WARN: ClassVar[str] = "DefaultNumberOfDaysToWarn"
    FIELD_WARNING_TITLE: ClassVar[str] = "WarningTitle"
    FIELD_WARNING_SUBTITLE: ClassVar[str] = "WarningSubtitle"

    always_warn = FieldProperty(
        "{FA20D73D-64BC-4F6F-B477-4FB2C6CBC5F1}",
        FIELD_ALWAYS_WARN,
        CHECKBOX,
        doc="If checked, a content editor warning is always shown on a content item.",
    )
    default_number_of_days_to_warn = FieldProperty(
        "{49216158-E8A5-4DA3-90C0-F8C62580C923}",
        FIELD_DEFAULT_NUMBER_OF_DAYS_TO_WARN,
        INTEGER,
        doc=(
            "When the warning is not always shown, it is shown only this many "
            "days before the license expires."
        ),
    )
    warning_title = FieldProperty(
        "{62211C79-9B02-4CF3-BACC-BAA8CC237D74}",
        FIELD_WARNING_TITLE,
        TEXT,
    )
    warning_subtitle = FieldProperty(
        "{65D9DD46-6F9A-4381-8CC4-B4711A6AF196}",
        FIELD_WARNING_SUBTITLE,
        TEXT,
    )

    # --- Mail Settings ---

    FIELD_DISABLE_MAIL: ClassVar[str] = "DisableMail"
    FIELD_MAIL_FROM: ClassVar[str] = "MailFrom"
    FIELD_MAIL_TO: ClassVar[str] = "MailTo"
    FIELD_MAIL_SUBJECT: ClassVar[str] = "MailSubject"
    FIELD_MAIL_CONTENT: ClassVar[str] = "MailContent"

    disable_mail = FieldProperty(
        "{5D9296BA-6580-409D-B8CE-B7C9B9D462FA}",
        FIELD_DISABLE_MAIL,
        CHECKBOX,
    )
    mail_from = FieldProperty(
        "{A4E0A6F0-D3D0-4DD4-9C87-7A74495FECD5}",
        FIELD_MAIL_FROM,
        TEXT,
        doc="Sender address of the expiration notification mail.",
    )
    mail_to = FieldProperty(
        "{ACBEF3E1-BBBA-426F-B253-AB0C51BAA6AD}",
        FIELD_MAIL_TO,
        TEXT,
        doc="Recipient address of the expiration notification mail.",
    )
    mail_subject = FieldProperty(
        "{897B87E3-EC65-48E0-A3B3-7A8E0EEB7047}",
        FIELD_MAIL_SUBJECT,
        TEXT,
        doc="Subject of the expiration notification mail.",
    )
    mail_content = FieldProperty(
        "{191856C0-1BBC-441D-BC4C-ADC7BCA70D3C}",
        FIELD_MAIL_CONTENT,
        TEXT,
        doc="HTML body of the expiration notification mail.",
    )


# ---------------------------------------------------------------------------
# Registry population
# ---------------------------------------------------------------------------


def _builtin_model_map() -> dict[ItemId, type[DomainObject]]:
    """Return the built-in template-to-type mappings."""
    return {
        Settings.TEMPLATE_ID: Settings,
    }


def register_models(registry: TypeRegistry) -> None:
    """Register every built-in domain object on *registry*."""
    for template_id, model_cls in _builtin_model_map().items():
        registry.register(template_id, model_cls)
