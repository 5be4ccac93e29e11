# src/logging/logger.py — v3
"""Logger factory with JSON and text formatters.

Records carry the current compile pass context (run_id, logical_path, phase)
so per-asset diagnostics can be correlated across a precompile run.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from assetforge.logging.context import get_context

if TYPE_CHECKING:
    from assetforge.config.settings import Settings

ROOT_LOGGER_NAME = "assetforge"


class _PassFormatter(logging.Formatter):
    """Shared pieces: record-time stamps, pass context and tracebacks."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        created = datetime.fromtimestamp(record.created, timezone.utc)
        if datefmt:
            return created.strftime(datefmt)
        return created.isoformat(timespec="milliseconds")

    def failure_text(self, record: logging.LogRecord) -> str | None:
        """Traceback and stack info of a record, if it carries either."""
        chunks: list[str] = []
        if record.exc_info and record.exc_info[1] is not None:
            chunks.append(self.formatException(record.exc_info))
        if record.stack_info:
            chunks.append(self.formatStack(record.stack_info))
        return "\n".join(chunks) or None


class JsonFormatter(_PassFormatter):
    """One JSON object per line: when, where, what, and the pass context."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "where": f"{record.module}:{record.lineno}",
            "message": record.getMessage(),
        }
        if context := get_context().as_dict():
            entry["context"] = context
        if data := getattr(record, "data", None):
            entry["data"] = data
        if failure := self.failure_text(record):
            entry["exception"] = failure
        return json.dumps(entry, default=str, ensure_ascii=False)


class TextFormatter(_PassFormatter):
    """Terminal lines: ``time LEVEL logger run=.. [phase] (path) message``.

    Tracebacks follow on their own lines.
    """

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        line = [
            self.formatTime(record, "%Y-%m-%d %H:%M:%S"),
            f"{record.levelname:<7}",
            record.name,
        ]
        if ctx.run_id:
            line.append(f"run={ctx.run_id}")
        if ctx.phase:
            line.append(f"[{ctx.phase}]")
        if ctx.logical_path:
            line.append(f"({ctx.logical_path})")
        line.append(record.getMessage())

        text = " ".join(line)
        if failure := self.failure_text(record):
            text = f"{text}\n{failure}"
        return text


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Configuration is applied by setup_logging()."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    log_file: str | None = None,
    rotation: str = "10MB",
    retention: int = 30,
) -> None:
    """Configure root assetforge logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_format: Output format ("json" or "text").
        log_file: Path to log file (None = stderr only).
        rotation: Max file size before rotation (e.g. "10MB").
        retention: Number of rotated files to keep.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates on re-init
    root_logger.handlers.clear()

    formatter: logging.Formatter
    if log_format == "json":
        formatter = JsonFormatter()
    else:
        formatter = TextFormatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        from assetforge.logging.handlers import create_rotating_handler

        file_handler = create_rotating_handler(
            log_file, rotation=rotation, retention=retention
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def setup_logging_from_settings(settings: Settings) -> None:
    """Apply the logging section of Settings."""
    setup_logging(
        level=settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
