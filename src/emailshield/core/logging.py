"""Logging setup shared by the CLI, API and UI entry points."""

from __future__ import annotations

import json
import logging
import sys

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_configured = False


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log)


def resolve_level(level_name: str | None) -> int:
    value = getattr(logging, str(level_name or "INFO").strip().upper(), None)
    return value if isinstance(value, int) else logging.INFO


def build_formatter(fmt: str | None) -> logging.Formatter:
    if str(fmt or "").strip().lower() == "json":
        return JsonFormatter(datefmt=DATE_FORMAT)
    return logging.Formatter(DEFAULT_FORMAT, DATE_FORMAT)


def configure_logging(level: str | None = "INFO", fmt: str | None = "plain", *, force: bool = False) -> None:
    """Install a single stderr handler on the root logger."""

    global _configured
    if _configured and not force:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(build_formatter(fmt))
    logging.basicConfig(level=resolve_level(level), handlers=[handler], force=True)
    _configured = True
