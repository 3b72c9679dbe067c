"""Structured Logging — one JSON object per log line on stderr.

Invariants:
    - Every line carries timestamp, level, logger name and message
    - Catalog extras (operation, entity ids, error code/category, status, path)
      appear only when the record sets them to a non-None value
    - The timestamp is the moment the record was created, in UTC

Design Decisions:
    - stdout belongs to CLI result envelopes, so the handler writes to stderr
    - CatalogError.log_fields() produces the same keys this formatter surfaces
    - setup_logging is called by the entry point, never at import time
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "operation", "entity_type", "entity_id", "status_code",
    "error_code", "error_category", "path",
)

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """Render a record and its catalog extras as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(
            (key, record.__dict__[key]) for key in EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Attach a stderr handler to the root logger. Returns the installed handler."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
