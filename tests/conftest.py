"""Shared pytest fixtures and test helpers for licwatch tests."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date
from pathlib import Path
from typing import Any

import pluggy
import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from licwatch.config.models import LicenseConfig, MailConfig
from licwatch.config.settings import LicwatchSettings
from licwatch.domain.fixed_paths import SETTINGS
from licwatch.domain.ids import ItemId, parse_id
from licwatch.infrastructure.database.engine import init_database
from licwatch.infrastructure.host import Host
from licwatch.infrastructure.seed import FOLDER_TEMPLATE_ID, seed_module_tree
from licwatch.infrastructure.store import SqlItemStore, SqlRawItem

hookimpl = pluggy.HookimplMarker("licwatch")

EXPIRATION = date(2026, 12, 31)

# Template used for items no domain type is registered for.
PLAIN_TEMPLATE_ID = parse_id("{76036F5E-CBCE-46D1-AF0A-4143F9B557AA}")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's LICWATCH_* environment out of the tests."""
    for name in ("LICWATCH_CONFIG", "LICWATCH_DATABASE", "LICWATCH_JSON_OUTPUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine() -> Iterator[Engine]:
    """Initialized in-memory SQLite engine with all tables created."""
    engine = init_database(None)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def store(db_engine: Engine) -> SqlItemStore:
    """Empty ``master`` database."""
    return SqlItemStore(db_engine, "master")


@pytest.fixture
def seeded_store(store: SqlItemStore) -> SqlItemStore:
    """``master`` database holding the module's standard tree."""
    seed_module_tree(store)
    return store


@pytest.fixture
def settings(tmp_path: Path) -> LicwatchSettings:
    """Settings rooted at a temp directory, with a known license and no SMTP."""
    return LicwatchSettings.from_cli(
        root=tmp_path,
        license=LicenseConfig(expiration=EXPIRATION),
        mail=MailConfig(enabled=False),
    )


@pytest.fixture
def host(settings: LicwatchSettings) -> Iterator[Host]:
    """Host over a file store in the temp directory, seeded in every database."""
    h = Host(settings)
    for database in h.databases:
        seed_module_tree(h.database(database))
    try:
        yield h
    finally:
        h.close()


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp project with a ``licwatch.toml``.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.
    """
    (tmp_path / "licwatch.toml").write_text(
        '[license]\nexpiration = "2099-12-31"\n\n[mail]\nenabled = false\n',
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


class RecordingMailPlugin:
    """Mail transport that keeps every message instead of sending it."""

    def __init__(self, *, fail: bool = False) -> None:
        self.sent: list[Any] = []
        self._fail = fail

    @hookimpl
    def send_mail(self, message: Any) -> bool:
        if self._fail:
            msg = "relay refused"
            raise ConnectionRefusedError(msg)
        self.sent.append(message)
        return True


def add_plain(
    store: SqlItemStore,
    name: str,
    parent: SqlRawItem | None = None,
    *,
    template_id: ItemId = PLAIN_TEMPLATE_ID,
    template_name: str = "Sample Item",
    **fields: tuple[ItemId, str],
) -> SqlRawItem:
    """Add an item whose template has no registered domain type."""
    return store.add_item(
        name,
        template_id,
        parent,
        template_name=template_name,
        field_values=fields or None,
    )


def add_folder(store: SqlItemStore, name: str, parent: SqlRawItem | None = None) -> SqlRawItem:
    return add_plain(store, name, parent, template_id=FOLDER_TEMPLATE_ID, template_name="Folder")


def settings_item(store: SqlItemStore) -> SqlRawItem:
    """The seeded settings item, asserting it exists."""
    item = store.get_item_by_id(SETTINGS.item_id)
    assert item is not None
    return item
