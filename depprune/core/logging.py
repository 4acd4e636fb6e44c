"""Logging setup — structlog rendered through one stdlib handler on stderr."""

from __future__ import annotations

import logging
import os
import sys

import structlog

# Applied to structlog events and to plain stdlib records alike
_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.format_exc_info,
]


def setup_logging(level: str | None = None) -> None:
    """Route all depprune logging to stderr.

    *level* overrides ``DEPPRUNE_LOG_LEVEL`` (default INFO);
    ``DEPPRUNE_LOG_FORMAT`` picks ``console`` (default) or ``json``.
    Stdout stays reserved for the command's report.
    """
    log_level = (level or os.environ.get("DEPPRUNE_LOG_LEVEL", "INFO")).upper()
    if os.environ.get("DEPPRUNE_LOG_FORMAT", "console").lower() == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_PRE_CHAIN,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(log_level)

    structlog.configure(
        processors=_PRE_CHAIN + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
