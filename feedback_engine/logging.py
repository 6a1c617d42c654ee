"""Structured logging for the feedback engine.

Sources and the report CLI emit named events (`messages_loaded`, `rate_limited`,
`record_skipped`, `report_written`, `fetch_failed`) with key-value context. Output
goes to stderr so a report piped to stdout stays clean; FEEDBACK_LOG_FORMAT picks
JSON lines or plain console text. The classifier itself never logs.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

import structlog

from .config import LogFormat, get_settings


ContextValue = Union[str, int, float, bool, None]


def setup_logging(level: Optional[str] = None, fmt: Optional[LogFormat] = None) -> None:
    """Route structlog events through a single stdlib handler on stderr.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR). Defaults to settings.
        fmt: Output format (json or console). Defaults to settings.
    """
    settings = get_settings()
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    log_format = LogFormat(fmt or settings.log_format)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == LogFormat.JSON:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    # stderr, so a report written to stdout stays parseable
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for noisy in ["httpx", "httpcore"]:
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str, **initial_context: ContextValue) -> structlog.stdlib.BoundLogger:
    """Return a logger with initial bound context.

    Args:
        name: Dotted component name, e.g. "sources.admin_api" or "run_score".
        **initial_context: Values bound to every event, e.g. the source path or base URL.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
