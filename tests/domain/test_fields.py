"""Tests for field types, typed properties and change notification."""

from __future__ import annotations

import pytest

from licwatch.domain.errors import FieldNotFoundError
from licwatch.domain.fields import CHECKBOX, INTEGER, TEXT, LinkField, field_properties
from licwatch.domain.ids import format_id, new_id
from licwatch.domain.models import Settings
from licwatch.domain.wrapper import ItemWrapper
from licwatch.infrastructure.store import SqlItemStore
from tests.conftest import settings_item

# ---------------------------------------------------------------------------
# Field types
# ---------------------------------------------------------------------------


class TestCheckbox:
    @pytest.mark.parametrize(("raw", "expected"), [("1", True), ("", False), ("0", False), (None, False)])
    def test_decode(self, raw: str | None, expected: bool) -> None:
        assert CHECKBOX.decode(raw) is expected

    def test_encode(self) -> None:
        assert CHECKBOX.encode(True) == "1"
        assert CHECKBOX.encode(False) == ""


class TestInteger:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("14", 14), (" -3 ", -3), ("+7", 7), ("", None), ("abc", None), ("1.5", None), (None, None)],
    )
    def test_decode(self, raw: str | None, expected: int | None) -> None:
        assert INTEGER.decode(raw) == expected

    def test_encode(self) -> None:
        assert INTEGER.encode(30) == "30"
        assert INTEGER.encode(None) == ""


class TestText:
    def test_missing_field_reads_empty(self) -> None:
        assert TEXT.decode(None) == ""

    def test_encode_none(self) -> None:
        assert TEXT.encode(None) == ""  # type: ignore[arg-type]


class TestLinkField:
    def test_parse_internal(self) -> None:
        target = new_id()
        link = LinkField.parse(
            f'<link linktype="Internal" id="{format_id(target)}" url="/about" text="About" />'
        )
        assert link.is_internal
        assert link.target_id == target
        assert link.text == "About"

    @pytest.mark.parametrize("raw", [None, "", "   ", "<link", "not xml at all <"])
    def test_empty_or_malformed_gives_empty_link(self, raw: str | None) -> None:
        assert LinkField.parse(raw) == LinkField()

    def test_invalid_id_is_dropped(self) -> None:
        link = LinkField.parse('<link linktype="internal" id="nope" />')
        assert link.target_id is None


# ---------------------------------------------------------------------------
# Typed properties
# ---------------------------------------------------------------------------


class TestTypedProperties:
    def test_seeded_values(self, seeded_store: SqlItemStore) -> None:
        settings = Settings(settings_item(seeded_store))
        assert settings.always_warn is False
        assert settings.default_number_of_days_to_warn == 30
        assert settings.mail_subject == "Sitecore license expires on [date]"

    def test_field_properties_lists_every_attribute(self) -> None:
        props = field_properties(Settings)
        assert set(props) == {
            "always_warn",
            "default_number_of_days_to_warn",
            "warning_title",
            "warning_subtitle",
            "disable_mail",
            "mail_from",
            "mail_to",
            "mail_subject",
            "mail_content",
        }
        assert props["mail_to"].field_name == "MailTo"

    def test_missing_fields_fall_back(self, store: SqlItemStore) -> None:
        bare = store.add_item("Settings", Settings.TEMPLATE_ID, template_name="Settings")
        settings = Settings(bare)
        assert settings.always_warn is False
        assert settings.default_number_of_days_to_warn is None
        assert settings.warning_title == ""

    def test_lookup_falls_back_to_field_name(self, store: SqlItemStore) -> None:
        item = store.add_item(
            "Settings",
            Settings.TEMPLATE_ID,
            template_name="Settings",
            field_values={"mailto": (new_id(), "ops@example.com")},
        )
        assert Settings(item).mail_to == "ops@example.com"

    def test_write_goes_to_the_store(self, seeded_store: SqlItemStore) -> None:
        item = settings_item(seeded_store)
        Settings(item).always_warn = True
        field = item.get_field(Settings.always_warn.field_id)
        assert field is not None
        assert field.value == "1"
        assert Settings(settings_item(seeded_store)).always_warn is True

    def test_write_to_missing_field_raises(self, store: SqlItemStore) -> None:
        bare = store.add_item("Settings", Settings.TEMPLATE_ID, template_name="Settings")
        with pytest.raises(FieldNotFoundError, match="MailTo"):
            Settings(bare).mail_to = "ops@example.com"

    def test_field_values(self, seeded_store: SqlItemStore) -> None:
        values = Settings(settings_item(seeded_store)).field_values()
        assert values["default_number_of_days_to_warn"] == 30
        assert values["disable_mail"] is False


# ---------------------------------------------------------------------------
# Change notification
# ---------------------------------------------------------------------------


class TestChangeNotification:
    def test_changing_then_changed_with_field_name(self, seeded_store: SqlItemStore) -> None:
        settings = Settings(settings_item(seeded_store))
        events: list[tuple[str, str, bool]] = []
        settings.on_changing.append(
            lambda w, name: events.append(("changing", name, w.always_warn))
        )
        settings.on_changed.append(lambda w, name: events.append(("changed", name, w.always_warn)))

        settings.always_warn = True

        assert events == [
            ("changing", "AlwaysWarn", False),
            ("changed", "AlwaysWarn", True),
        ]

    def test_observer_receives_the_wrapper(self, seeded_store: SqlItemStore) -> None:
        settings = Settings(settings_item(seeded_store))
        seen: list[ItemWrapper] = []
        settings.on_changed.append(lambda w, _: seen.append(w))
        settings.mail_to = "ops@example.com"
        assert seen == [settings]
        assert seen[0] is settings

    def test_equal_value_is_a_no_op(self, seeded_store: SqlItemStore) -> None:
        settings = Settings(settings_item(seeded_store))
        events: list[str] = []
        settings.on_changing.append(lambda _, name: events.append(name))
        settings.on_changed.append(lambda _, name: events.append(name))

        settings.default_number_of_days_to_warn = 30
        settings.always_warn = False
        settings.mail_subject = "Sitecore license expires on [date]"

        assert events == []

    def test_equality_uses_decoded_values(self, seeded_store: SqlItemStore) -> None:
        item = settings_item(seeded_store)
        field = item.get_field(Settings.default_number_of_days_to_warn.field_id)
        assert field is not None
        field.value = " 30 "
        events: list[str] = []
        settings = Settings(item)
        settings.on_changed.append(lambda _, name: events.append(name))

        settings.default_number_of_days_to_warn = 30

        assert events == []
        assert field.value == " 30 "

    def test_integer_cleared_to_none(self, seeded_store: SqlItemStore) -> None:
        settings = Settings(settings_item(seeded_store))
        events: list[str] = []
        settings.on_changed.append(lambda _, name: events.append(name))
        settings.default_number_of_days_to_warn = None
        assert events == ["DefaultNumberOfDaysToWarn"]
        assert settings.default_number_of_days_to_warn is None

    def test_observers_are_per_wrapper(self, seeded_store: SqlItemStore) -> None:
        first = Settings(settings_item(seeded_store))
        second = Settings(settings_item(seeded_store))
        events: list[str] = []
        first.on_changed.append(lambda _, name: events.append(name))
        second.warning_title = "Renew now"
        assert events == []
        assert first.warning_title == "Renew now"

    def test_missing_field_notifies_nobody(self, store: SqlItemStore) -> None:
        settings = Settings(
            store.add_item("Settings", Settings.TEMPLATE_ID, template_name="Settings")
        )
        events: list[str] = []
        settings.on_changing.append(lambda _, name: events.append(name))
        with pytest.raises(FieldNotFoundError):
            settings.always_warn = True
        assert events == []
