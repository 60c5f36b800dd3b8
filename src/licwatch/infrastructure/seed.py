"""Seed the license expiration module's standard tree into a database.

``licwatch init`` runs this for every configured database. Items that
already exist (matched by ID) are left alone, so seeding is idempotent and
never overwrites edited settings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from licwatch.domain.fields import field_properties
from licwatch.domain.fixed_paths import LICENSE_MODULE, MODULES, SETTINGS, SYSTEM
from licwatch.domain.ids import ItemId, parse_id
from licwatch.domain.models import Settings

if TYPE_CHECKING:
    from licwatch.infrastructure.store import SqlItemStore, SqlRawItem

logger = logging.getLogger(__name__)

ROOT_ID = parse_id("{11111111-1111-1111-1111-111111111111}")
ROOT_TEMPLATE_ID = parse_id("{C6576836-910C-4A3D-BA03-C277DBD3B827}")
MAIN_SECTION_TEMPLATE_ID = parse_id("{E3E2D58C-DF95-4230-ADC9-279924CECE84}")
FOLDER_TEMPLATE_ID = parse_id("{A87A00B1-E6DB-45AB-8B54-636FEC3B5523}")

DEFAULT_SETTINGS: dict[str, str] = {
    Settings.FIELD_ALWAYS_WARN: "",
    Settings.FIELD_DEFAULT_NUMBER_OF_DAYS_TO_WARN: "30",
    Settings.FIELD_WARNING_TITLE: "Your Sitecore license is about to expire",
    Settings.FIELD_WARNING_SUBTITLE: "The license expires on [date]. Contact your administrator.",
    Settings.FIELD_DISABLE_MAIL: "",
    Settings.FIELD_MAIL_FROM: "",
    Settings.FIELD_MAIL_TO: "",
    Settings.FIELD_MAIL_SUBJECT: "Sitecore license expires on [date]",
    Settings.FIELD_MAIL_CONTENT: (
        "<p>The Sitecore license of <a href=\"[url]\">[url]</a> expires on [date].</p>"
    ),
}


def seed_module_tree(store: SqlItemStore) -> list[str]:
    """Create the module's items in *store* where they are missing.

    Returns the paths of the items that were created.
    """
    created: list[str] = []

    def ensure(
        item_id: ItemId,
        name: str,
        template_id: ItemId,
        template_name: str,
        parent: SqlRawItem | None,
        field_values: dict[str, tuple[ItemId, str]] | None = None,
    ) -> SqlRawItem:
        existing = store.get_item_by_id(item_id)
        if existing is not None:
            return existing
        item = store.add_item(
            name,
            template_id,
            parent,
            item_id=item_id,
            template_name=template_name,
            field_values=field_values,
        )
        created.append(item.path)
        return item

    root = ensure(ROOT_ID, "sitecore", ROOT_TEMPLATE_ID, "Root", None)
    system = ensure(SYSTEM.item_id, SYSTEM.name, MAIN_SECTION_TEMPLATE_ID, "Main section", root)
    modules = ensure(MODULES.item_id, MODULES.name, FOLDER_TEMPLATE_ID, "Folder", system)
    module = ensure(
        LICENSE_MODULE.item_id, LICENSE_MODULE.name, FOLDER_TEMPLATE_ID, "Folder", modules
    )
    ensure(
        SETTINGS.item_id,
        SETTINGS.name,
        Settings.TEMPLATE_ID,
        Settings.TEMPLATE_NAME,
        module,
        field_values={
            prop.field_name: (prop.field_id, DEFAULT_SETTINGS.get(prop.field_name, ""))
            for prop in field_properties(Settings).values()
        },
    )

    if created:
        logger.info("Seeded %d item(s) into %s", len(created), store.name)
    return created
