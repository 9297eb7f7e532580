"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich text) or machines
(--json). The formatter layer adapts ServiceResult to the requested
output mode.
"""

from __future__ import annotations

import json as _json
import shlex
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from rich.text import Text

from sitepub.output.console import create_console, get_output

if TYPE_CHECKING:
    from sitepub.services.result import ServiceResult

# Keys whose values are paths or remote specs.
_PATH_KEYS = frozenset({"source", "destination"})


class OutputSettings(BaseModel):
    """Output mode flags, frozen after construction."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def _format_value(key: str, value: Any) -> str:
    if key == "command" and isinstance(value, list):
        return shlex.join(str(v) for v in value)
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def _data_line(key: str, value: Any) -> Text:
    line = Text("  ")
    line.append(f"{key}:", style="sitepub.key")
    line.append(" ")
    line.append(_format_value(key, value), style="sitepub.path" if key in _PATH_KEYS else "")
    return line


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output mode; defaults to human-readable, non-quiet output.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if result.ok:
        head = Text()
        head.append("OK", style="sitepub.ok")
        head.append(": ")
        head.append(result.op, style="sitepub.op")
        console.print(head, soft_wrap=True)
        if not settings.quiet:
            for key, value in result.data.items():
                console.print(_data_line(key, value), soft_wrap=True)
            if settings.verbose and result.meta:
                for key, value in result.meta.items():
                    console.print(_data_line(key, value), soft_wrap=True)
    else:
        error_msg = result.error.message if result.error else "Unknown error"
        head = Text()
        head.append("ERROR", style="sitepub.error")
        head.append(f": {result.op}: {error_msg}")
        console.print(head, soft_wrap=True)
        if settings.verbose and result.error:
            for key, value in result.error.detail.items():
                console.print(_data_line(key, value), soft_wrap=True)
    return get_output(console).rstrip("\n")
