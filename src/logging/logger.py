# src/logging/logger.py
"""Handler setup and the two output formats used by the fetcher.

Every record carries the ambient request context (request id, package id
and the page being fetched) so concurrent page fetches can be told apart
in a single stream.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from rangefetch.logging.context import get_context

ROOT_LOGGER_NAME = "rangefetch"

_NOISY_LIBRARIES = ("httpx", "httpcore")


def _utc_timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class JsonFormatter(logging.Formatter):
    """One JSON object per line, context under ``context``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": _utc_timestamp(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = get_context().as_dict()
        if context:
            payload["context"] = context

        extra = getattr(record, "data", None)
        if extra:
            payload["data"] = extra

        if record.exc_info and record.exc_info[1] is not None:
            payload["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)

        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Single-line text: ``time level logger [package] (page) - message``."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        line = "{time} [{level:8s}] {name}".format(
            time=_utc_timestamp(record).strftime("%Y-%m-%d %H:%M:%S"),
            level=record.levelname,
            name=record.name,
        )
        if ctx.package_id:
            line += f" [{ctx.package_id}]"
        if ctx.page:
            line += f" ({ctx.page})"
        line += f" - {record.getMessage()}"

        if record.exc_info and record.exc_info[1] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


_FORMATTERS: dict[str, type[logging.Formatter]] = {
    "json": JsonFormatter,
    "text": TextFormatter,
}


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    log_file: str | None = None,
    rotation: str = "10MB",
    retention: int = 5,
) -> None:
    """Install handlers on the ``rangefetch`` logger.

    Calling it again replaces the previous handlers.

    Args:
        level: Level name, unknown names fall back to INFO.
        log_format: "json" or "text"; anything else means text.
        log_file: Optional path for a size-rotated copy of the stream.
        rotation: Size at which the log file rolls over (e.g. "10MB").
        retention: Number of rolled-over files to keep.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = _FORMATTERS.get(log_format, TextFormatter)()

    # stdout is reserved for page documents printed by the CLI
    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(formatter)
    root.addHandler(stream)

    if log_file:
        from rangefetch.logging.handlers import create_rotating_handler

        rotating = create_rotating_handler(log_file, rotation=rotation, retention=retention)
        rotating.setFormatter(formatter)
        root.addHandler(rotating)

    for name in _NOISY_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)
