"""Structured JSON logging configuration.

Every service logs through the standard ``logging`` tree. ``configure_logging``
installs two console handlers on the root logger: records below WARNING go to
stdout and everything else to stderr. In JSON mode each record becomes one
object per line:

    {"timestamp": "...", "level": "info", "service": "api-service",
     "logger": "shared.core.runner", "message": "...", ...extra}
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

from shared.core.clock import utc_timestamp

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Attributes present on every LogRecord; anything else came from ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.makeLogRecord({})).keys() | {"message", "asctime", "taskName"}
)


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def __init__(self, service: str) -> None:
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": utc_timestamp(datetime.fromtimestamp(record.created, UTC)),
            "level": record.levelname.lower(),
            "service": self.service,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class _BelowLevelFilter(logging.Filter):
    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def resolve_level(level: str, environment: str) -> int:
    """Map a level name to a logging level, suppressing debug outside development."""
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    if environment != "development" and resolved < logging.INFO:
        resolved = logging.INFO

    return resolved


def configure_logging(
    service: str,
    environment: str,
    level: str = "info",
    log_format: str = "json",
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> None:
    """Install console handlers on the root logger.

    Args:
        service: Service name stamped on every JSON record
        environment: Deployment environment; debug output requires "development"
        level: Minimum level name (debug, info, warning, error)
        log_format: "json" or "text"
        stdout: Stream for records below WARNING (default sys.stdout)
        stderr: Stream for WARNING and above (default sys.stderr)
    """
    if log_format == "json":
        formatter: logging.Formatter = JsonFormatter(service)
    else:
        formatter = logging.Formatter(TEXT_FORMAT)

    out_handler = logging.StreamHandler(stdout or sys.stdout)
    out_handler.addFilter(_BelowLevelFilter(logging.WARNING))
    out_handler.setFormatter(formatter)

    err_handler = logging.StreamHandler(stderr or sys.stderr)
    err_handler.setLevel(logging.WARNING)
    err_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(out_handler)
    root_logger.addHandler(err_handler)
    root_logger.setLevel(resolve_level(level, environment))
