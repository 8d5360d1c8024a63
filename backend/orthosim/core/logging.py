"""Structured JSON logging configuration."""

import logging
import sys
from typing import Any

from pythonjsonlogger import jsonlogger

from orthosim.core.config import settings

# Third-party loggers that drown out request and ranking events at INFO
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "sqlalchemy.engine")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per line, tagged with the service and environment."""

    def __init__(self, *args: Any, service: str, env: str, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.service = service
        self.env = env

    def add_fields(self, log_record: dict[str, Any], record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = self.service
        log_record["env"] = self.env
        log_record["msg"] = record.getMessage()
        if record.levelno >= logging.WARNING:
            log_record["location"] = f"{record.module}.{record.funcName}:{record.lineno}"

        log_record.pop("message", None)
        log_record.pop("asctime", None)


def setup_logging(level: str | None = None, stream: Any = None) -> None:
    """
    Route every logger through one JSON handler on the root logger.

    ``level`` overrides ``settings.LOG_LEVEL``; unknown names fall back to INFO.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        CustomJsonFormatter(
            "%(timestamp)s %(level)s %(logger)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
            service=settings.PROJECT_NAME,
            env=settings.ENV,
        )
    )
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
