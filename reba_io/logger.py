"""Structured logger for REBA evaluation sessions.

Messages carrying context (a session id, a record id, a wizard step) are
rendered as one JSON object per line so session and re-score logs can be
filtered by those keys.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union

__all__ = [
    "EvaluationFileHandler",
    "FileLoggerConfig",
    "StructuredAdapter",
    "get_logger",
    "setup_file_logger",
]


def _loggable(value: Any) -> Any:
    # wizard steps, statuses and risk levels log by name
    if isinstance(value, Enum):
        return value.name.lower()
    return value


class StructuredAdapter(logging.LoggerAdapter):
    """Logger adapter that merges session or record context with every message."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple[str, Dict[str, Any]]:
        extra = kwargs.get("extra", {})
        context = {key: _loggable(value) for key, value in {**self.extra, **extra}.items()}
        if context:
            msg = json.dumps({"message": msg, **context}, default=str)
            kwargs["extra"] = {}
        return msg, kwargs

    def bind(self, **context: Any) -> "StructuredAdapter":
        """Return an adapter that also carries ``context``, e.g. a record id."""
        return StructuredAdapter(self.logger, {**self.extra, **context})


def get_logger(name: str = "reba", **context: Any) -> StructuredAdapter:
    return StructuredAdapter(logging.getLogger(name), context)


class EvaluationFileHandler(logging.handlers.RotatingFileHandler):
    """Rotating log file installed by :func:`setup_file_logger`."""


@dataclass
class FileLoggerConfig:
    path: Path
    level: Union[int, str] = logging.INFO
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 3
    fmt: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    def create_handler(self) -> logging.Handler:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        handler = EvaluationFileHandler(
            self.path,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(self.fmt, self.datefmt))
        handler.setLevel(self.level)
        return handler


def setup_file_logger(config: FileLoggerConfig, name: str = "reba", **context: Any) -> StructuredAdapter:
    """Point ``name`` at the file in ``config``.

    A file handler installed by an earlier call on the same logger is closed
    and replaced, so repeated runs in one process keep a single open log.
    """
    logger = logging.getLogger(name)
    logger.setLevel(config.level)
    for handler in list(logger.handlers):
        if isinstance(handler, EvaluationFileHandler):
            logger.removeHandler(handler)
            handler.close()
    logger.addHandler(config.create_handler())
    return StructuredAdapter(logger, context)
