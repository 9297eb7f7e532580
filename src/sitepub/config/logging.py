"""Logging for sitepub: structlog over the stdlib ``logging`` tree.

Everything goes to stderr, either as console lines or as JSON
(``--log-json``). stdout is left for command results, and rsync writes its
own progress straight to the terminal.

One CLI invocation is one publishing run. Its identifying fields
(destination, config file, operation) are bound once as context variables
and merged into every event logged during the run, including events from
plain ``logging.getLogger`` loggers.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

LOGGER_NAME = "sitepub"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route sitepub and stdlib logging to stderr and start a fresh run context.

    Args:
        verbose: Show sitepub DEBUG events (the rsync command line, timings).
            Otherwise only warnings and failures are logged.
        log_json: Emit JSON lines instead of console output.
    """
    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)
    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)

    reset_log_context()


def bind_log_context(**values: Any) -> None:
    """Attach *values* to every event logged for the rest of this run.

    ``None`` values are skipped so optional fields never show up empty.
    """
    structlog.contextvars.bind_contextvars(
        **{key: value for key, value in values.items() if value is not None}
    )


def reset_log_context() -> None:
    """Forget all run context bound so far."""
    structlog.contextvars.clear_contextvars()
