"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from licwatch.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from licwatch.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="lw.ok")
    op = Text(f"  {result.op}", style="lw.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="lw.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="lw.id")
    elif key == "path":
        v = Text(str(value), style="lw.path")
    elif key in ("title", "subject"):
        v = Text(str(value), style="lw.title")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="lw.error")
    op = Text(f"  {result.op}", style="lw.op")
    console.print(label, op, Text(": "), Text(msg), sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render check results with issues grouped by database."""
    issues = result.data.get("issues", [])
    count = result.data.get("count", len(issues))

    if count == 0:
        console.print("[lw.ok]OK[/lw.ok]  No issues found.")
        return

    severity_styles = {"error": "lw.error", "warning": "lw.warning"}

    by_database: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_database.setdefault(str(issue.get("database", "?")), []).append(issue)

    for database, db_issues in by_database.items():
        console.print(f"\n[bold]{database}[/bold]")
        for issue in db_issues:
            sev = str(issue.get("severity", "warning"))
            style = severity_styles.get(sev, "")
            line = Text("  ")
            line.append(sev, style=style)
            line.append(f": {issue.get('message', '')}")
            console.print(line)
            if verbose:
                console.print(f"    category: {issue.get('category')}", markup=False)

    errors = sum(1 for i in issues if i.get("severity") == "error")
    console.print(f"\n{errors} errors, {count - errors} warnings")


def _render_settings(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the settings item as a two-column table."""
    _status_line(console, result)
    d = dict(result.data)
    _field(console, "database", d.pop("database"))
    _field(console, "path", d.pop("path"))
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("property", style="lw.key")
    table.add_column("value")
    for key, value in d.items():
        table.add_row(key, Text("" if value is None else str(value)))
    console.print(table)


def _render_settings_set(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    d = result.data
    for key in ("database", "property", "value"):
        _field(console, key, d.get(key))
    changed = d.get("fields_changed") or []
    _field(console, "fields_changed", ", ".join(changed) if changed else "(none)")


def _render_notify(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    for key in ("expiration", "days_to_warn", "within_window", "sent"):
        _field(console, key, d.get(key))
    if d.get("sent") or verbose:
        for key in ("recipient", "subject"):
            if d.get(key) is not None:
                _field(console, key, d[key])


def _render_warnings(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "expiration", d.get("expiration"))
    warnings = d.get("warnings", [])
    if not warnings:
        console.print("  No content editor warnings.")
        return
    for warning in warnings:
        console.print(Text(f"  [{warning['icon']}] ", style="lw.warning"), end="")
        console.print(Text(warning["title"], style="lw.title"))
        console.print(f"    {warning['text']}", markup=False)


def _render_init(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render init results with the seeded items per database."""
    _status_line(console, result)
    d = result.data
    _field(console, "store_path", d.get("store_path"))
    for database, created in d.get("created", {}).items():
        _field(console, database, f"{len(created)} item(s) created")
        if verbose:
            for path in created:
                console.print(f"    {path}", markup=False)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "check": _render_check,
    "settings_show": _render_settings,
    "settings_set": _render_settings_set,
    "notify": _render_notify,
    "warnings": _render_warnings,
    "init": _render_init,
}
