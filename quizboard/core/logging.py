"""Structured JSON logging setup."""

from __future__ import annotations

import logging
import sys
from typing import Any

from pythonjsonlogger.json import JsonFormatter

_FORMAT = "%(timestamp)s %(level)s %(logger)s %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S"
_HANDLER_NAME = "quizboard-json"


class QuizJsonFormatter(JsonFormatter):
    """JSON lines with the same keys on every record."""

    def add_fields(
        self, log_record: dict[str, Any], record: logging.LogRecord, message_dict: dict
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def build_formatter() -> QuizJsonFormatter:
    return QuizJsonFormatter(_FORMAT, datefmt=_DATEFMT)


def configure_logging(level: str = "INFO") -> None:
    """Install the JSON console handler on the root logger.

    Calling this again replaces the handler instead of stacking another one.
    """

    resolved = getattr(logging, (level or "INFO").upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(resolved)
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(build_formatter())
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


__all__ = ["QuizJsonFormatter", "build_formatter", "configure_logging"]
