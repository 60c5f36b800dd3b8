"""CheckService — structural validation of the module's items.

Single command following the linter pattern. Two categories:
fixed paths (each well-known item present, where expected, of the
right type) and relative paths (the module folder's expected subtree).
Nothing is modified.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from licwatch.domain.errors import DomainObjectBindingError
from licwatch.domain.fixed_paths import FIXED_PATHS, LICENSE_MODULE
from licwatch.domain.ids import format_id
from licwatch.domain.relative_paths import LicenseModuleRelativePath
from licwatch.services.base import BaseService
from licwatch.services.result import ServiceResult

if TYPE_CHECKING:
    from licwatch.domain.fixed_paths import FixedPath
    from licwatch.infrastructure.store import SqlItemStore

# ---------------------------------------------------------------------------
# Issue severity and category constants
# ---------------------------------------------------------------------------

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

CAT_FIXED_PATH = "fixed_path"
CAT_RELATIVE_PATH = "relative_path"


class CheckService(BaseService):
    """Reports structural issues across every configured database."""

    def check(self, *, min_severity: str = SEVERITY_WARNING) -> ServiceResult:
        """Report every issue without modifying anything.

        Args:
            min_severity: ``"error"`` hides warnings.
        """
        issues: list[dict[str, Any]] = []
        checked: list[str] = []
        for database in self._host.databases:
            store = self._host.database(database)
            expected = [fp for fp in FIXED_PATHS if database in fp.databases]
            if not expected:
                continue
            checked.append(database)
            for fixed_path in expected:
                issues.extend(self._check_fixed_path(store, fixed_path))
            if LICENSE_MODULE in expected:
                issues.extend(self._check_module_structure(store))

        if min_severity == SEVERITY_ERROR:
            issues = [issue for issue in issues if issue["severity"] == SEVERITY_ERROR]

        errors = sum(1 for issue in issues if issue["severity"] == SEVERITY_ERROR)
        return ServiceResult(
            ok=True,
            op="check",
            data={"issues": issues, "count": len(issues), "databases": checked},
            meta={"errors": errors, "warnings": len(issues) - errors},
        )

    def _check_fixed_path(self, store: SqlItemStore, fixed_path: FixedPath) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []

        def issue(severity: str, message: str) -> None:
            issues.append(
                {
                    "category": CAT_FIXED_PATH,
                    "severity": severity,
                    "database": store.name,
                    "item_id": format_id(fixed_path.item_id),
                    "path": fixed_path.path,
                    "message": message,
                }
            )

        by_id = store.get_item_by_id(fixed_path.item_id)
        if by_id is None:
            if store.get_item_by_path(fixed_path.path) is None:
                issue(SEVERITY_ERROR, f"Item {fixed_path.path} does not exist")
                return issues
            issue(
                SEVERITY_WARNING,
                f"Item {fixed_path.path} exists, but not with ID {format_id(fixed_path.item_id)}",
            )
        elif by_id.path != fixed_path.path:
            issue(SEVERITY_WARNING, f"Item {fixed_path.path} was moved to {by_id.path}")

        try:
            fixed_path.get(store)
        except DomainObjectBindingError as exc:
            issue(SEVERITY_ERROR, str(exc))
        return issues

    def _check_module_structure(self, store: SqlItemStore) -> list[dict[str, Any]]:
        module = LICENSE_MODULE.resolve_item(store)
        if module is None:
            return []
        messages = LicenseModuleRelativePath(module).validation_messages() or []
        return [
            {
                "category": CAT_RELATIVE_PATH,
                "severity": SEVERITY_ERROR,
                "database": store.name,
                "path": module.path,
                "message": message,
            }
            for message in messages
        ]
