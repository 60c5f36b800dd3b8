"""Tests for the type registry — registration, resolution, capabilities."""

from __future__ import annotations

import pytest

from licwatch.domain.errors import RegistryError
from licwatch.domain.ids import parse_id
from licwatch.domain.models import Settings
from licwatch.domain.registry import TypeRegistry, build_registry, default_registry
from licwatch.domain.wrapper import ContributingTemplate, DomainObject, ItemWrapper
from licwatch.infrastructure.store import SqlItemStore
from tests.conftest import add_plain

AUDITABLE_ID = parse_id("{0B3B0D5E-3F0C-4C67-9D7E-6C8B1B2A0001}")
REPORT_ID = parse_id("{0B3B0D5E-3F0C-4C67-9D7E-6C8B1B2A0002}")
NOTE_ID = parse_id("{0B3B0D5E-3F0C-4C67-9D7E-6C8B1B2A0003}")


class Auditable(ContributingTemplate):
    """Capability contributed by a shared base template."""


class Report(DomainObject, Auditable):
    pass


class Note(DomainObject):
    pass


@pytest.fixture
def registry() -> TypeRegistry:
    reg = TypeRegistry()
    reg.register(Settings.TEMPLATE_ID, Settings)
    reg.register(REPORT_ID, Report)
    reg.register(NOTE_ID, Note)
    reg.register_contributing(AUDITABLE_ID, Auditable)
    reg.freeze()
    return reg


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class TestRegistration:
    def test_duplicate_template_rejected(self) -> None:
        reg = TypeRegistry()
        reg.register(NOTE_ID, Note)
        with pytest.raises(RegistryError, match="already mapped"):
            reg.register(NOTE_ID, Report)

    def test_type_mapped_to_two_templates_rejected(self) -> None:
        reg = TypeRegistry()
        reg.register(NOTE_ID, Note)
        with pytest.raises(RegistryError, match="already the primary type"):
            reg.register(REPORT_ID, Note)

    def test_contributing_template_cannot_be_primary(self) -> None:
        with pytest.raises(RegistryError):
            TypeRegistry().register(AUDITABLE_ID, Auditable)

    def test_non_wrapper_rejected(self) -> None:
        with pytest.raises(TypeError):
            TypeRegistry().register(NOTE_ID, dict)  # type: ignore[arg-type]

    def test_duplicate_contributing_rejected(self) -> None:
        reg = TypeRegistry()
        reg.register_contributing(AUDITABLE_ID, Auditable)
        with pytest.raises(RegistryError):
            reg.register_contributing(AUDITABLE_ID, Auditable)

    def test_frozen_registry_rejects_registration(self, registry: TypeRegistry) -> None:
        assert registry.frozen
        with pytest.raises(RegistryError, match="frozen"):
            registry.register(parse_id("{0B3B0D5E-3F0C-4C67-9D7E-6C8B1B2A0009}"), ItemWrapper)

    def test_descriptor_records_declared_capabilities(self, registry: TypeRegistry) -> None:
        descriptor = registry.descriptor_for(REPORT_ID)
        assert descriptor is not None
        assert descriptor.wrapper_type is Report
        assert descriptor.capabilities == frozenset({Auditable})

    def test_lookups(self, registry: TypeRegistry) -> None:
        assert registry.primary_type_for(NOTE_ID) is Note
        assert registry.primary_type_for(AUDITABLE_ID) is None
        assert registry.template_id_for(Report) == REPORT_ID
        assert registry.template_id_for(ItemWrapper) is None
        assert NOTE_ID in registry
        assert len(registry) == 3


class TestDefaultRegistry:
    def test_holds_the_shipped_model(self) -> None:
        reg = default_registry()
        assert reg.frozen
        assert reg.primary_type_for(Settings.TEMPLATE_ID) is Settings

    def test_build_registry_returns_a_fresh_table(self) -> None:
        assert build_registry() is not default_registry()


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class TestResolve:
    def test_none_resolves_to_none(self, registry: TypeRegistry) -> None:
        assert registry.resolve(None) is None

    def test_unregistered_template_gives_plain_wrapper(
        self, registry: TypeRegistry, store: SqlItemStore
    ) -> None:
        item = add_plain(store, "sitecore")
        wrapper = registry.resolve(item)
        assert type(wrapper) is ItemWrapper
        assert wrapper.registry is registry

    def test_registered_template_gives_domain_type(
        self, registry: TypeRegistry, store: SqlItemStore
    ) -> None:
        item = add_plain(store, "report", template_id=REPORT_ID, template_name="Report")
        wrapper = registry.resolve(item)
        assert isinstance(wrapper, Report)
        assert isinstance(wrapper, Auditable)

    def test_each_resolve_builds_a_new_wrapper(
        self, registry: TypeRegistry, store: SqlItemStore
    ) -> None:
        item = add_plain(store, "note", template_id=NOTE_ID, template_name="Note")
        first = registry.resolve(item)
        second = registry.resolve(item)
        assert first is not second
        assert first == second


# ---------------------------------------------------------------------------
# Capabilities
# ---------------------------------------------------------------------------


class TestCapabilities:
    def test_declared_capability(self, registry: TypeRegistry) -> None:
        assert registry.type_has_capability(Report, AUDITABLE_ID)

    def test_undeclared_capability(self, registry: TypeRegistry) -> None:
        assert not registry.type_has_capability(Note, AUDITABLE_ID)

    def test_unknown_contributing_template(self, registry: TypeRegistry) -> None:
        assert not registry.type_has_capability(Report, NOTE_ID)

    def test_unregistered_type(self, registry: TypeRegistry) -> None:
        assert not registry.type_has_capability(ItemWrapper, AUDITABLE_ID)

    def test_valid_template_ids_for_capability(self, registry: TypeRegistry) -> None:
        assert registry.valid_template_ids_for(Auditable) == [REPORT_ID, AUDITABLE_ID]

    def test_valid_template_ids_for_concrete_type(self, registry: TypeRegistry) -> None:
        assert registry.valid_template_ids_for(Settings) == [Settings.TEMPLATE_ID]

    def test_valid_template_ids_for_base_includes_everything(
        self, registry: TypeRegistry
    ) -> None:
        ids = registry.valid_template_ids_for(ItemWrapper)
        assert set(ids) == {Settings.TEMPLATE_ID, REPORT_ID, NOTE_ID, AUDITABLE_ID}
