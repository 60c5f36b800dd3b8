"""InitService — create the content store and seed the module's items."""

from __future__ import annotations

import logging

from licwatch.infrastructure.seed import seed_module_tree
from licwatch.services.base import BaseService
from licwatch.services.result import ServiceResult

logger = logging.getLogger(__name__)


class InitService(BaseService):
    """Seeds the license expiration module into every configured database."""

    def init_store(self) -> ServiceResult:
        created: dict[str, list[str]] = {}
        for database in self._host.databases:
            created[database] = seed_module_tree(self._host.database(database))
        total = sum(len(paths) for paths in created.values())
        logger.debug("Initialized store at %s (%d items created)", self._host.store_path, total)
        return ServiceResult(
            ok=True,
            op="init",
            data={"store_path": str(self._host.store_path), "created": created},
            meta={"items_created": total},
        )
