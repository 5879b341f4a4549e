from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

ROOT_LOGGER = "sales_client_sdk"

CONTEXT_KEYS = (
    "email",
    "user_id",
    "role",
    "status_code",
    "reason",
    "method",
    "path",
    "resource",
    "verb",
    "id",
    "page",
    "page_size",
    "count",
    "metadata",
    "fields",
    "index",
    "length",
    "host",
    "port",
    "error_type",
)

_HANDLER_NAME = "sales_client_sdk.json"


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        for key in CONTEXT_KEYS:
            if key in record.__dict__:
                payload[key] = record.__dict__[key]
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, sort_keys=True)


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a single JSON-line stream handler to the package logger."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    if not any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(JsonLineFormatter())
        logger.addHandler(handler)
    return logger
