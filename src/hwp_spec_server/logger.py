"""Structured JSON logger for the HWP specification index server.

Each record is written as a single JSON object:
{"time":"2026-02-03T14:06:20.829529+09:00","level":"INFO","source":{"function":"get_index","file":"index_manager.py","line":43},"msg":"index built","document_id":"hwp5"}

Records go to stderr so stdout stays free for tool output.
"""

import json
import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class StructuredFormatter(logging.Formatter):
    """Formats a record as one JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "time": datetime.now(timezone.utc).astimezone().isoformat(),
            "level": record.levelname,
            "source": {
                "function": record.funcName,
                "file": os.path.basename(record.pathname),
                "line": record.lineno,
            },
            "msg": record.getMessage(),
        }

        ctx_fields = _log_context.get()
        if ctx_fields:
            log_entry.update(ctx_fields)

        if hasattr(record, "extra_fields"):
            log_entry.update(record.extra_fields)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class StructuredLogger:
    """Logger that takes a message plus keyword fields."""

    def __init__(self, name: str = "hwp_spec_server", level: str | None = None):
        self._logger = logging.getLogger(name)
        self._logger.handlers.clear()

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(StructuredFormatter())
        self._logger.addHandler(handler)
        self._logger.propagate = False

        self.set_level(level or os.getenv("LOG_LEVEL", "INFO"))

    def set_level(self, level: str) -> None:
        """Change the minimum level; unknown names fall back to INFO."""
        self._logger.setLevel(_LEVELS.get(level.upper(), logging.INFO))

    def get_level(self) -> int:
        return self._logger.level

    def _log(self, level: int, msg: str, stacklevel: int = 3, **fields: Any) -> None:
        extra = {"extra_fields": fields} if fields else {}
        self._logger.log(level, msg, stacklevel=stacklevel, extra=extra)

    def debug(self, msg: str, **fields: Any) -> None:
        self._log(logging.DEBUG, msg, **fields)

    def info(self, msg: str, **fields: Any) -> None:
        self._log(logging.INFO, msg, **fields)

    def warn(self, msg: str, **fields: Any) -> None:
        self._log(logging.WARNING, msg, **fields)

    def error(self, msg: str, **fields: Any) -> None:
        self._log(logging.ERROR, msg, **fields)


def set_context(**fields: Any) -> None:
    """Attach fields to every subsequent record in the current context.

    Example:
        set_context(document_id="hwp5")
        logger.info("building index")  # includes document_id
    """
    current = _log_context.get()
    _log_context.set({**current, **fields})


def clear_context() -> None:
    _log_context.set({})


def get_context() -> dict[str, Any]:
    return _log_context.get().copy()


logger = StructuredLogger("hwp_spec_server")
