"""Logging setup for the ``fetchbatch`` logger hierarchy.

Modules log through ``logging.getLogger("fetchbatch.<area>")``. Nothing is
emitted until the host application configures logging, either its own way
or with configure_logging, which installs one handler rendering either
human-readable text or JSON lines (serialized with orjson).

Example:
    >>> from fetchbatch.foundation.config import LoggingSettings
    >>> from fetchbatch.observability import configure_logging
    >>> configure_logging()  # reads FETCHBATCH_LOG_* settings
    >>> configure_logging(LoggingSettings(level="DEBUG", format="json"))
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from typing import TextIO

import orjson

from fetchbatch.foundation.config import LoggingSettings, get_settings

ROOT_LOGGER = "fetchbatch"

# LogRecord attributes that are not user-supplied ``extra`` fields
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """JSON Lines output for log aggregation (Elasticsearch, Loki, Datadog, etc.)."""

    def __init__(self, include_timestamps: bool = True) -> None:
        super().__init__()
        self.include_timestamps = include_timestamps

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {"level": record.levelname.lower(), "logger": record.name,
                                      "event": record.getMessage()}
        if self.include_timestamps:
            payload["timestamp"] = datetime.fromtimestamp(record.created, tz=UTC).isoformat()
        payload.update((k, v) for k, v in vars(record).items() if k not in _RESERVED)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(payload, default=repr, option=orjson.OPT_NON_STR_KEYS).decode()


def _text_formatter(include_timestamps: bool) -> logging.Formatter:
    fmt = "%(levelname)s %(name)s: %(message)s"
    return logging.Formatter(f"%(asctime)s {fmt}" if include_timestamps else fmt)


def configure_logging(
    settings: LoggingSettings | None = None,
    *,
    output: TextIO | None = None,
) -> logging.Logger:
    """Attach a single handler to the ``fetchbatch`` logger.

    Calling it again replaces the handler it installed before rather than
    stacking a second one.
    """
    cfg = settings or get_settings().logging
    log = logging.getLogger(ROOT_LOGGER)
    for handler in [h for h in log.handlers if getattr(h, "_fetchbatch", False)]:
        log.removeHandler(handler)

    handler = logging.StreamHandler(output or sys.stderr)
    handler.setFormatter(JsonFormatter(cfg.include_timestamps) if cfg.format == "json"
                         else _text_formatter(cfg.include_timestamps))
    handler._fetchbatch = True  # type: ignore[attr-defined]
    log.addHandler(handler)
    log.setLevel(cfg.level)
    return log
