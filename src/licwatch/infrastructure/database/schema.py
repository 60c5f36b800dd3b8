"""SQLAlchemy Core table definitions for the content store.

One SQLite file holds every named database (``master``, ``web``, ...).
Items form a tree through ``parent_id``; field values are plain strings;
``links`` is the inbound-reference index rebuilt whenever a field value
changes.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKeyConstraint,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

items = Table(
    "items",
    metadata,
    Column("database", Text, nullable=False),
    Column("id", Text, nullable=False),  # {GUID}
    Column("parent_id", Text),  # NULL for tree roots
    Column("name", Text, nullable=False),
    Column("template_id", Text, nullable=False),
    Column("template_name", Text, nullable=False, default="", server_default=""),
    Column("version", Integer, nullable=False, default=1, server_default="1"),
    Column("language", Text, nullable=False, default="en", server_default="en"),
    Column("sort_order", Integer, nullable=False, default=0, server_default="0"),
    PrimaryKeyConstraint("database", "id"),
)

fields = Table(
    "fields",
    metadata,
    Column("database", Text, nullable=False),
    Column("item_id", Text, nullable=False),
    Column("field_id", Text, nullable=False),
    Column("name", Text, nullable=False),
    Column("value", Text, nullable=False, default="", server_default=""),
    UniqueConstraint("database", "item_id", "field_id"),
    ForeignKeyConstraint(["database", "item_id"], ["items.database", "items.id"]),
)

links = Table(
    "links",
    metadata,
    Column("database", Text, nullable=False),
    Column("source_id", Text, nullable=False),
    Column("source_field_id", Text, nullable=False),
    Column("target_id", Text, nullable=False),
    UniqueConstraint("database", "source_id", "source_field_id", "target_id"),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_items_parent", items.c.database, items.c.parent_id)
Index("ix_fields_name", fields.c.database, fields.c.item_id, fields.c.name)
Index("ix_links_target", links.c.database, links.c.target_id)
