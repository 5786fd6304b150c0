"""Structured logging for klaw-collections.

The library emits two debug events, ``collection_view.force`` and
``group_by``, through structlog loggers that wrap stdlib loggers. Nothing is
configured on import, so both stay silent until the application calls
`configure_logging` (or `init` with a log level), which routes them through a
stdlib handler with structlog's ProcessorFormatter.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

__all__ = [
    'configure_logging',
    'get_logger',
]

# Applied to library events and to foreign stdlib records alike.
_PRE_CHAIN: tuple[Any, ...] = (
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt='iso'),
)


def _event_processors() -> list[Any]:
    return [
        structlog.stdlib.filter_by_level,
        *_PRE_CHAIN,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def configure_logging(level: str = 'INFO', *, json_output: bool = True) -> None:
    """Install a stderr handler rendering library events as JSON or console lines.

    Args:
        level: Root logging level name; unknown names fall back to INFO.
        json_output: Render JSON when True, human-readable console lines otherwise.
    """
    structlog.configure(
        processors=_event_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if json_output:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=list(_PRE_CHAIN),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger over the stdlib logger ``name``.

    The logger does not go through the global structlog configuration, so
    its events are filtered by the stdlib level alone.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_event_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )
