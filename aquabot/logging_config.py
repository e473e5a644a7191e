"""Structured logs for the bot: one JSON object per line on stdout.

Call sites attach per-event data with `extra={"context": {...}}`, or bind it
once through `LoggerAdapter(logger, {"user_id": ...})`.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any, Optional

NAMESPACE = "aquabot"

# Chatty below WARNING: the long-poll request alone would log every 25 seconds.
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = getattr(record, "context", None)
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        # Context may carry dates or Decimals from the ticketing gateway.
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", stream: Optional[IO[str]] = None) -> None:
    """Route every logger through a single JSON handler at `level`."""
    numeric = logging.getLevelName(level.upper())
    root = logging.getLogger()
    root.setLevel(numeric if isinstance(numeric, int) else logging.INFO)

    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter())
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{NAMESPACE}.{name}")


class LoggerAdapter(logging.LoggerAdapter):
    """Binds a fixed context (user id, event kind) to every record.

    A per-call `context=` kwarg is merged over the bound one.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        context = {**(self.extra or {}), **(kwargs.pop("context", None) or {})}
        if context:
            kwargs["extra"] = {**kwargs.get("extra", {}), "context": context}
        return msg, kwargs
