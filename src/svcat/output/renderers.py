"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops render the status line only.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from svcat.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from svcat.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op)
        if renderer is None:
            _status_line(console, result)
        else:
            renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    name = result.data.get("name")
    if name:
        return str(name)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="svcat.ok")
    op = Text(f"  {result.op}", style="svcat.op")
    console.print(label, op, end="")
    console.print()


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="svcat.error")
    op = Text(f"  {result.op}", style="svcat.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Instance renderer ─────────────────────────────────────────────────


def _render_instance(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a provisioned instance: details table, parameters, secret sources."""
    _status_line(console, result)
    data = result.data
    status = str(data.get("status") or "")

    details = Table(show_header=False, show_edge=False, box=None, padding=(0, 1, 0, 2))
    details.add_column(style="svcat.key", no_wrap=True)
    details.add_column()
    details.add_row("Name:", Text(str(data.get("name", "")), style="svcat.name"))
    details.add_row("Namespace:", str(data.get("namespace", "")))
    details.add_row("Status:", Text(status, style=style_for_status(status)))
    details.add_row("Class:", str(data.get("class_name", "")))
    details.add_row("Plan:", str(data.get("plan_name", "")))
    if verbose and data.get("uid"):
        details.add_row("UID:", str(data["uid"]))
    console.print(details)

    console.print()
    console.print(Text("Parameters:", style="svcat.section"))
    parameters = data.get("parameters")
    if parameters is None or parameters == {}:
        console.print("  No parameters defined")
    else:
        for line in _json.dumps(parameters, indent=2, sort_keys=True).splitlines():
            console.print(Text(f"  {line}"))

    secrets: dict[str, str] = data.get("secrets") or {}
    if secrets:
        console.print()
        console.print(Text("Parameters From:", style="svcat.section"))
        for name, key in secrets.items():
            console.print(Text(f"  Secret: {name}.{key}"))


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "provision": _render_instance,
}
