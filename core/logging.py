"""
Logging

structlog configured from settings. Every event carries the service name,
and request-scoped values (the correlation ID, a pipeline run ID) are bound
through structlog's contextvars so they reach logs emitted from worker
threads started with asyncio.to_thread.
"""

import logging
import sys
from typing import Any, Optional

import structlog

from core.settings import settings

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("peewee", "urllib3")


def bind_correlation_id(correlation_id: str) -> None:
    """Start a fresh log context for one request, tagged with its correlation ID."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def get_correlation_id() -> Optional[str]:
    return structlog.contextvars.get_contextvars().get("correlation_id")


def _service_processor(service_name: str) -> structlog.typing.Processor:
    def processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def setup_logging(
    log_level: Optional[str] = None,
    json_format: Optional[bool] = None,
    service_name: Optional[str] = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Arguments left as None fall back to LOG_LEVEL, LOG_FORMAT and
    SERVICE_NAME from settings.
    """
    level = getattr(logging, (log_level or settings.log_level).upper())
    if json_format is None:
        json_format = settings.log_format == "json"

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _service_processor(service_name or settings.service_name),
    ]
    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """
    Get a logger, optionally tagged with a component name.

    Example:
        log = get_logger("extractor.balldontlie")
        log.info("fetch_complete", season=2024, count=26000)
    """
    return structlog.get_logger(name)
