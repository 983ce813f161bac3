"""Structured logging for migrations and maintenance scripts.

Migration modules log through ``logging.getLogger(__name__)`` and Alembic
logs through its own stdlib loggers, so the stdlib root handler is the
single sink: its ``ProcessorFormatter`` renders both stdlib records and
structlog events with the same renderer. Output goes to stderr because
``alembic ... --sql`` writes the migration script to stdout.
"""

import logging
import sys
from typing import Any, Literal, TextIO

import structlog


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def setup_logging(
    log_level: str = "INFO",
    log_format: Literal["json", "console"] = "json",
    stream: TextIO | None = None,
) -> None:
    """Route stdlib and structlog records through one structlog-rendered handler.

    Args:
        log_level: Standard Python log level name (INFO, DEBUG, etc.).
        log_format: ``"json"`` for one JSON object per line in deployed
            environments or ``"console"`` for coloured output when running
            ``alembic`` by hand.
        stream: Destination for log lines; defaults to ``sys.stderr``.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    shared = _shared_processors()

    if log_format == "console":
        final: list[structlog.types.Processor] = [structlog.dev.ConsoleRenderer()]
    else:
        final = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *final],
    )
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    # Statement echo is noise next to step descriptions
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Get a structlog logger."""
    return structlog.get_logger(name)
