"""SQLite host-store adapter.

Implements the boundary protocols of :mod:`licwatch.domain.host` on top
of the tables in :mod:`licwatch.infrastructure.database.schema`:

- :class:`SqlItemStore` — one named database (``master``, ``web``, ...).
- :class:`SqlRawItem` — a row adapter; tree navigation queries lazily.
- :class:`SqlField` — a field handle; assigning ``value`` writes through.
- :class:`SqlLinkIndex` — inbound references, rebuilt on every write.

Reads never cache: each navigation call is one query against the
current state of the store.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, insert, select, update

from licwatch.domain.ids import ItemId, format_id, new_id, parse_id
from licwatch.infrastructure.database.schema import fields, items, links

if TYPE_CHECKING:
    from sqlalchemy import Connection, Row
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

# Any GUID inside a field value counts as a reference (link fields,
# multilists, rich text with internal links).
_GUID_IN_TEXT = re.compile(
    r"\{?([0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12})\}?"
)

# Path prefixes rewritten when building public URLs.
_URL_PREFIXES: tuple[tuple[str, str], ...] = (
    ("/sitecore/content/home", ""),
    ("/sitecore/media library", "/-/media"),
)

_MAX_DEPTH = 256


def extract_references(value: str) -> list[ItemId]:
    """Return every item ID mentioned in a field value, in order, without duplicates."""
    found: list[ItemId] = []
    for match in _GUID_IN_TEXT.finditer(value):
        ref = parse_id(match.group(1))
        if ref not in found:
            found.append(ref)
    return found


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


class SqlField:
    """A field on a stored item. Assigning :attr:`value` writes through."""

    def __init__(self, store: SqlItemStore, item_id: ItemId, field_id: ItemId, name: str) -> None:
        self._store = store
        self._item_id = item_id
        self._id = field_id
        self._name = name

    @property
    def id(self) -> ItemId:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def value(self) -> str:
        return self._store._read_field_value(self._item_id, self._id)

    @value.setter
    def value(self, new_value: str | None) -> None:
        self._store._write_field_value(self._item_id, self._id, new_value or "")

    def __repr__(self) -> str:
        return f"<SqlField {self._name} on {format_id(self._item_id)}>"


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------


class SqlRawItem:
    """A stored item. Identity columns are read once; relations are queried per call."""

    def __init__(self, store: SqlItemStore, row: Row[Any]) -> None:
        self._store = store
        self._id = parse_id(row.id)
        self._parent_id = parse_id(row.parent_id) if row.parent_id else None
        self._name: str = row.name
        self._template_id = parse_id(row.template_id)
        self._template_name: str = row.template_name
        self._version: int = row.version
        self._language: str = row.language

    @property
    def id(self) -> ItemId:
        return self._id

    @property
    def version(self) -> int:
        return self._version

    @property
    def language(self) -> str:
        return self._language

    @property
    def template_id(self) -> ItemId:
        return self._template_id

    @property
    def template_name(self) -> str:
        return self._template_name

    @property
    def name(self) -> str:
        return self._name

    @property
    def parent_id(self) -> ItemId | None:
        return self._parent_id

    @property
    def store(self) -> SqlItemStore:
        return self._store

    @property
    def path(self) -> str:
        return self._store._path_of(self)

    @property
    def parent(self) -> SqlRawItem | None:
        if self._parent_id is None:
            return None
        return self._store.get_item_by_id(self._parent_id)

    @property
    def has_children(self) -> bool:
        return self._store._count_children(self._id) > 0

    @property
    def children(self) -> list[SqlRawItem]:
        return self._store._children_of(self._id)

    def get_descendants(self) -> list[SqlRawItem]:
        """Depth-first, pre-order descendants (the item itself excluded)."""
        return self._store._descendants_of(self._id)

    def get_field(self, key: ItemId | str) -> SqlField | None:
        return self._store._find_field(self._id, key)

    def __repr__(self) -> str:
        return f"<SqlRawItem {format_id(self._id)} {self._name!r} in {self._store.name}>"


# ---------------------------------------------------------------------------
# Link index
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SqlItemLink:
    """An inbound reference from ``source_id`` (via ``source_field_id``)."""

    store: SqlItemStore
    source_id: ItemId
    source_field_id: ItemId
    target_id: ItemId

    def get_source_item(self) -> SqlRawItem | None:
        return self.store.get_item_by_id(self.source_id)


class SqlLinkIndex:
    """Inbound-reference index of one database."""

    def __init__(self, store: SqlItemStore) -> None:
        self._store = store

    def get_referrers(self, item: Any) -> list[SqlItemLink]:
        with self._store.engine.connect() as conn:
            rows = conn.execute(
                select(links.c.source_id, links.c.source_field_id)
                .where(
                    links.c.database == self._store.name,
                    links.c.target_id == format_id(item.id),
                )
                .order_by(links.c.source_id, links.c.source_field_id)
            ).fetchall()
        return [
            SqlItemLink(
                store=self._store,
                source_id=parse_id(row.source_id),
                source_field_id=parse_id(row.source_field_id),
                target_id=item.id,
            )
            for row in rows
        ]


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class SqlItemStore:
    """One named content database.

    Parameters:
        engine: SQLAlchemy engine with the content tables.
        name: Database name (``master``, ``web``, ...).
        site_url: Base URL used by :meth:`item_url`.
    """

    def __init__(self, engine: Engine, name: str, *, site_url: str = "http://localhost") -> None:
        self._engine = engine
        self._name = name
        self._site_url = site_url.rstrip("/")
        self._link_index = SqlLinkIndex(self)

    @property
    def name(self) -> str:
        return self._name

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def link_index(self) -> SqlLinkIndex:
        return self._link_index

    def __repr__(self) -> str:
        return f"<SqlItemStore {self._name}>"

    # ------------------------------------------------------------------
    # Reads (ItemStore protocol)
    # ------------------------------------------------------------------

    def get_item_by_id(self, item_id: ItemId) -> SqlRawItem | None:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(items).where(
                    items.c.database == self._name,
                    items.c.id == format_id(item_id),
                )
            ).first()
        return SqlRawItem(self, row) if row is not None else None

    def get_item_by_path(self, path: str) -> SqlRawItem | None:
        """Walk *path* from the tree root, matching names case-insensitively."""
        parts = [part for part in path.split("/") if part]
        if not parts:
            return None

        parent_id: str | None = None
        row = None
        with self._engine.connect() as conn:
            for part in parts:
                parent_clause = (
                    items.c.parent_id.is_(None) if parent_id is None else items.c.parent_id == parent_id
                )
                row = conn.execute(
                    select(items)
                    .where(
                        items.c.database == self._name,
                        parent_clause,
                        func.lower(items.c.name) == part.lower(),
                    )
                    .order_by(items.c.sort_order, items.c.name)
                ).first()
                if row is None:
                    return None
                parent_id = row.id
        return SqlRawItem(self, row) if row is not None else None

    def item_url(self, item: Any) -> str:
        """Public URL for *item*: site URL plus its lower-cased, dashed path."""
        path: str = item.path
        lowered = path.lower()
        for prefix, replacement in _URL_PREFIXES:
            if lowered == prefix or lowered.startswith(prefix + "/"):
                path = replacement + path[len(prefix) :]
                break
        slug = path.lower().replace(" ", "-") or "/"
        return f"{self._site_url}{slug}"

    # ------------------------------------------------------------------
    # Writes (adapter API used by seeding, services and tests)
    # ------------------------------------------------------------------

    def add_item(
        self,
        name: str,
        template_id: ItemId,
        parent: SqlRawItem | None = None,
        *,
        item_id: ItemId | None = None,
        template_name: str = "",
        version: int = 1,
        language: str = "en",
        field_values: dict[str, tuple[ItemId, str]] | None = None,
    ) -> SqlRawItem:
        """Insert an item (and optionally its fields) below *parent*.

        *field_values* maps field name to ``(field_id, value)``.
        """
        new_item_id = item_id or new_id()
        with self._engine.begin() as conn:
            sort_order = conn.execute(
                select(func.count())
                .select_from(items)
                .where(
                    items.c.database == self._name,
                    items.c.parent_id == format_id(parent.id)
                    if parent is not None
                    else items.c.parent_id.is_(None),
                )
            ).scalar_one()
            conn.execute(
                insert(items).values(
                    database=self._name,
                    id=format_id(new_item_id),
                    parent_id=format_id(parent.id) if parent is not None else None,
                    name=name,
                    template_id=format_id(template_id),
                    template_name=template_name,
                    version=version,
                    language=language,
                    sort_order=sort_order,
                )
            )
            for field_name, (field_id, value) in (field_values or {}).items():
                self._insert_field(conn, new_item_id, field_id, field_name, value)

        logger.debug("Added item %s (%s) to %s", name, format_id(new_item_id), self._name)
        created = self.get_item_by_id(new_item_id)
        assert created is not None
        return created

    def add_field(self, item: SqlRawItem, field_id: ItemId, name: str, value: str = "") -> SqlField:
        """Add a field to an existing item."""
        with self._engine.begin() as conn:
            self._insert_field(conn, item.id, field_id, name, value)
        return SqlField(self, item.id, field_id, name)

    def move_item(self, item: SqlRawItem, new_parent: SqlRawItem | None) -> SqlRawItem:
        """Re-parent *item*. Returns a fresh adapter for the moved item."""
        with self._engine.begin() as conn:
            conn.execute(
                update(items)
                .where(items.c.database == self._name, items.c.id == format_id(item.id))
                .values(parent_id=format_id(new_parent.id) if new_parent is not None else None)
            )
        moved = self.get_item_by_id(item.id)
        assert moved is not None
        return moved

    def delete_item(self, item: SqlRawItem) -> int:
        """Delete *item* and its subtree. Returns the number of items removed."""
        doomed = [item.id, *(d.id for d in item.get_descendants())]
        keys = [format_id(i) for i in doomed]
        with self._engine.begin() as conn:
            conn.execute(
                delete(links).where(links.c.database == self._name, links.c.source_id.in_(keys))
            )
            conn.execute(
                delete(fields).where(fields.c.database == self._name, fields.c.item_id.in_(keys))
            )
            conn.execute(delete(items).where(items.c.database == self._name, items.c.id.in_(keys)))
        return len(doomed)

    # ------------------------------------------------------------------
    # Internal, used by SqlRawItem and SqlField
    # ------------------------------------------------------------------

    def _path_of(self, item: SqlRawItem) -> str:
        names = [item.name]
        parent_id = item.parent_id
        with self._engine.connect() as conn:
            while parent_id is not None and len(names) < _MAX_DEPTH:
                row = conn.execute(
                    select(items.c.name, items.c.parent_id).where(
                        items.c.database == self._name,
                        items.c.id == format_id(parent_id),
                    )
                ).first()
                if row is None:
                    parent_id = None
                    break
                names.append(row.name)
                parent_id = parse_id(row.parent_id) if row.parent_id else None
        if parent_id is not None:
            logger.warning(
                "Path of item %s truncated at %d levels; the parent chain is too deep or cyclic",
                format_id(item.id),
                _MAX_DEPTH,
            )
        return "/" + "/".join(reversed(names))

    def _count_children(self, item_id: ItemId) -> int:
        with self._engine.connect() as conn:
            return conn.execute(
                select(func.count())
                .select_from(items)
                .where(items.c.database == self._name, items.c.parent_id == format_id(item_id))
            ).scalar_one()

    def _children_of(self, item_id: ItemId) -> list[SqlRawItem]:
        with self._engine.connect() as conn:
            rows = conn.execute(
                select(items)
                .where(items.c.database == self._name, items.c.parent_id == format_id(item_id))
                .order_by(items.c.sort_order, items.c.name)
            ).fetchall()
        return [SqlRawItem(self, row) for row in rows]

    def _descendants_of(self, item_id: ItemId) -> list[SqlRawItem]:
        result: list[SqlRawItem] = []
        seen: set[ItemId] = {item_id}
        stack = list(reversed(self._children_of(item_id)))
        while stack:
            current = stack.pop()
            if current.id in seen:
                continue
            seen.add(current.id)
            result.append(current)
            stack.extend(reversed(self._children_of(current.id)))
        return result

    def _find_field(self, item_id: ItemId, key: ItemId | str) -> SqlField | None:
        if isinstance(key, str):
            clause = func.lower(fields.c.name) == key.lower()
        else:
            clause = fields.c.field_id == format_id(key)
        with self._engine.connect() as conn:
            row = conn.execute(
                select(fields.c.field_id, fields.c.name).where(
                    fields.c.database == self._name,
                    fields.c.item_id == format_id(item_id),
                    clause,
                )
            ).first()
        if row is None:
            return None
        return SqlField(self, item_id, parse_id(row.field_id), row.name)

    def _read_field_value(self, item_id: ItemId, field_id: ItemId) -> str:
        with self._engine.connect() as conn:
            value = conn.execute(
                select(fields.c.value).where(
                    fields.c.database == self._name,
                    fields.c.item_id == format_id(item_id),
                    fields.c.field_id == format_id(field_id),
                )
            ).scalar_one_or_none()
        return value or ""

    def _write_field_value(self, item_id: ItemId, field_id: ItemId, value: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                update(fields)
                .where(
                    fields.c.database == self._name,
                    fields.c.item_id == format_id(item_id),
                    fields.c.field_id == format_id(field_id),
                )
                .values(value=value)
            )
            self._index_links(conn, item_id, field_id, value)

    def _insert_field(
        self,
        conn: Connection,
        item_id: ItemId,
        field_id: ItemId,
        name: str,
        value: str,
    ) -> None:
        conn.execute(
            insert(fields).values(
                database=self._name,
                item_id=format_id(item_id),
                field_id=format_id(field_id),
                name=name,
                value=value,
            )
        )
        self._index_links(conn, item_id, field_id, value)

    def _index_links(self, conn: Connection, item_id: ItemId, field_id: ItemId, value: str) -> None:
        """Replace the link rows contributed by one field."""
        conn.execute(
            delete(links).where(
                links.c.database == self._name,
                links.c.source_id == format_id(item_id),
                links.c.source_field_id == format_id(field_id),
            )
        )
        for target_id in extract_references(value):
            if target_id == item_id:
                continue
            conn.execute(
                insert(links).values(
                    database=self._name,
                    source_id=format_id(item_id),
                    source_field_id=format_id(field_id),
                    target_id=format_id(target_id),
                )
            )

