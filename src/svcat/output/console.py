"""Rich Console factory and theme for svcat output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SVCAT_THEME = Theme(
    {
        "svcat.ok": "bold green",
        "svcat.error": "bold red",
        "svcat.warning": "bold yellow",
        "svcat.op": "bold cyan",
        "svcat.key": "dim",
        "svcat.name": "bold blue",
        "svcat.section": "bold",
        "svcat.status.ready": "green",
        "svcat.status.pending": "yellow",
        "svcat.status.failed": "red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=SVCAT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for an instance status string."""
    if not status:
        return ""
    if status.startswith("Ready"):
        return "svcat.status.ready"
    if "Fail" in status or "Error" in status:
        return "svcat.status.failed"
    return "svcat.status.pending"
