"""Structured logging via structlog.

Configured once by the CLI entry point. Modules log through
`logging.getLogger(__name__)`; the root handler formats those records with
`structlog.stdlib.ProcessorFormatter`, so stdlib and `structlog.get_logger()`
calls share one processor chain and one renderer.

stdout is reserved for the command being run (and for `?` debug output), so
every log line goes to stderr.

Renderer selection:
  debug=True  - `ConsoleRenderer` with colours, DEBUG level.
  debug=False - `JSONRenderer`, WARNING level and above only.
"""

from __future__ import annotations

import logging
import sys

import structlog


class CliLogHandler(logging.StreamHandler):
    """stderr handler installed by configure_structlog()."""


def configure_structlog(debug: bool = False) -> None:
    """Configure structlog and install its formatter on the root logger.

    Calling multiple times is safe; the last call wins.
    """
    level = logging.DEBUG if debug else logging.WARNING

    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = CliLogHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, CliLogHandler)]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
