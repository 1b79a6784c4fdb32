"""Structured JSON logging for the Contact API."""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from contact_api.config import settings

SERVICE_NAME = "contact-api"

# Fields owned by the formatter; record context cannot replace them
RESERVED_FIELDS = frozenset(
    {"timestamp", "level", "logger", "message", "service", "environment"}
)


class JSONFormatter(logging.Formatter):
    """
    Render each record as one JSON object per line.

    Every line carries ``timestamp``, ``level``, ``logger``, ``message``,
    ``service`` and ``environment``, so lines from the uvicorn server and
    from Lambda can be told apart in a shared log group. ``correlation_id``
    and the keys of ``extra={"context": {...}}`` are added when present.
    """

    def __init__(
        self,
        service: str = SERVICE_NAME,
        environment: str | None = None,
    ) -> None:
        super().__init__()
        self.service = service
        self.environment = environment or settings.environment

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service,
            "environment": self.environment,
        }

        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            log_data["correlation_id"] = correlation_id

        context = getattr(record, "context", None)
        if isinstance(context, dict):
            for key, value in context.items():
                if key not in RESERVED_FIELDS:
                    log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.levelno == logging.DEBUG:
            log_data["file"] = record.pathname
            log_data["line"] = record.lineno
            log_data["function"] = record.funcName

        return json.dumps(log_data, default=str)


def configure_logging() -> None:
    """
    Send JSON logs from the root logger to stdout at ``LOG_LEVEL``.

    Safe to call more than once; existing root handlers are replaced.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(console_handler)

    # botocore logs request signing at DEBUG; keep it out of app debug output
    logging.getLogger("botocore").setLevel(max(log_level, logging.INFO))

    root_logger.info(
        "Logging configured",
        extra={"context": {"log_level": settings.log_level}},
    )


def get_logger(name: str) -> logging.Logger:
    """Return the named logger (use ``__name__``)."""
    return logging.getLogger(name)
