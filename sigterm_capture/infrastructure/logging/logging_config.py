"""
Structured logging configuration for sigterm-capture.

Configures structlog for human-readable text logging (default) with optional JSON format.
"""

import logging
import sys
from typing import Any, Optional

import structlog


def configure_logging(log_level: str = "INFO", log_format: str = "text") -> None:
    """
    Configure structlog on top of standard logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: "text" for console output, "json" for structured logs
    """
    # Configure standard logging to use structlog
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(
    name: Optional[str] = None,
    task_id: Optional[str] = None,
    host_id: Optional[str] = None,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance with optional context.

    Args:
        name: Logger name
        task_id: Task identifier for tracing
        host_id: Host identifier for tracing

    Returns:
        Configured logger instance
    """
    context: dict[str, Any] = {}
    if task_id:
        context["task_id"] = task_id
    if host_id:
        context["host_id"] = host_id

    return structlog.get_logger(name, **context)
