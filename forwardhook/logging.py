# forwardhook/logging.py
"""
Structured logging for forwardhook.

Every log line is a JSON object with:
- timestamp: ISO 8601 (UTC)
- level, logger, event
- any keyword fields passed at the call site or bound with `bind()`

Usage:
    from forwardhook.logging import get_logger
    logger = get_logger(__name__)
    logger.info("webhook_forwarded", webhook="todo", status_code=200)
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class JsonLogFormatter(logging.Formatter):
    """Render each record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }

        fields = getattr(record, "fields", None)
        if fields:
            payload.update(fields)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        if record.levelno >= logging.ERROR:
            payload["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(payload, default=str)


class TextLogFormatter(logging.Formatter):
    """Human readable formatter that appends structured fields as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = getattr(record, "fields", None)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


class StructuredLogger:
    """
    Logger wrapper taking keyword fields instead of format args.

    Example:
        logger = get_logger(__name__).bind(webhook="todo")
        logger.warning("required_field_missing", path="todos[0]")
    """

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        self._logger = logging.getLogger(name)
        self._context = dict(context or {})

    @property
    def name(self) -> str:
        return self._logger.name

    def bind(self, **context) -> "StructuredLogger":
        """Return a logger that adds `context` to every record."""
        return StructuredLogger(self._logger.name, {**self._context, **context})

    def _log(self, level: int, event: str, exc_info: bool = False, **fields):
        if not self._logger.isEnabledFor(level):
            return
        self._logger.log(
            level,
            event,
            exc_info=exc_info,
            extra={"fields": {**self._context, **fields}},
            stacklevel=3,
        )

    def debug(self, event: str, **fields):
        self._log(logging.DEBUG, event, **fields)

    def info(self, event: str, **fields):
        self._log(logging.INFO, event, **fields)

    def warning(self, event: str, **fields):
        self._log(logging.WARNING, event, **fields)

    def error(self, event: str, exc_info: bool = False, **fields):
        self._log(logging.ERROR, event, exc_info=exc_info, **fields)

    def critical(self, event: str, exc_info: bool = False, **fields):
        self._log(logging.CRITICAL, event, exc_info=exc_info, **fields)

    def exception(self, event: str, **fields):
        """Log at ERROR level with the current traceback."""
        self._log(logging.ERROR, event, exc_info=True, **fields)


_configured = False


def configure_logging(level: str = "INFO", json_output: bool = True, force: bool = False) -> None:
    """
    Configure the root logger once per process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: JSON lines (True) or plain text (False)
        force: Reconfigure even if logging was already set up
    """
    global _configured
    if _configured and not force:
        return
    _configured = True

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonLogFormatter() if json_output else TextLogFormatter())
    root_logger.addHandler(handler)

    # Outbound client and server chatter
    for noisy in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger, configuring logging with defaults on first use.

    Args:
        name: Logger name (typically __name__)
    """
    if not _configured:
        configure_logging()
    return StructuredLogger(name)
