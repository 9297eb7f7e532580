"""Rich Console factory and theme for sitepub output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SITEPUB_THEME = Theme(
    {
        "sitepub.ok": "bold green",
        "sitepub.error": "bold red",
        "sitepub.warning": "bold yellow",
        "sitepub.op": "bold cyan",
        "sitepub.key": "dim",
        "sitepub.path": "bold blue",
    }
)


def create_console() -> Console:
    """Create a Console that renders to a StringIO buffer.

    Results are printed with ``soft_wrap``, so the fixed width only bounds
    Rich's layout and never splits a long rsync command line.
    """
    return Console(file=StringIO(), theme=SITEPUB_THEME, highlight=False, width=120)


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
