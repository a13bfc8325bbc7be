"""Structured logging for graph-schema-walker.

Every line is one JSON object with timestamp, level, service, logger,
correlation_id and message. Query runners attach the description and
Cypher of the query they run (``extra={"query_description": ..., "cypher":
...}``); those fields are copied into the line when present so the exact
text of each executed query can be found in the logs.

Level and optional log file come from Settings (SCHEMA_WALKER_LOG_LEVEL,
SCHEMA_WALKER_LOG_FILE).
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from schema_walker.core.config import Settings

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)

SERVICE_NAME = "schema-walker"
PACKAGE_LOGGER = "schema_walker"

# Extra attributes copied from a record into the JSON line.
QUERY_FIELDS = ("query_description", "cypher")


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current request context."""
    _correlation_id.set(correlation_id)


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set(None)


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def __init__(self, service_name: str = SERVICE_NAME, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "correlation_id": getattr(record, "correlation_id", "-"),
            "message": record.getMessage(),
        }
        for name in QUERY_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class CorrelationIdFilter(logging.Filter):
    """Stamps the request's correlation ID (or "-") on every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def _handler(handler: logging.Handler) -> logging.Handler:
    handler.setFormatter(JSONFormatter())
    handler.addFilter(CorrelationIdFilter())
    return handler


def setup_structured_logging(
    settings: Settings,
    logger_name: str = PACKAGE_LOGGER,
) -> logging.Logger:
    """Attach JSON handlers to the package logger tree.

    Module loggers come from ``logging.getLogger(__name__)``, so they all
    hang off ``schema_walker`` and inherit these handlers. An unknown level
    name falls back to INFO.

    Args:
        settings: Source of the level name and optional log file path
        logger_name: Logger to configure

    Returns:
        The configured logger
    """
    level = logging.getLevelName(settings.schema_walker_log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(_handler(logging.StreamHandler(sys.stdout)))

    log_file = settings.schema_walker_log_file
    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            logger.addHandler(
                _handler(
                    RotatingFileHandler(
                        log_file,
                        maxBytes=10_485_760,
                        backupCount=5,
                        encoding="utf-8",
                    )
                )
            )
        except PermissionError:
            logger.warning("Cannot write to %s, file logging disabled", log_file)

    logger.propagate = False
    return logger
