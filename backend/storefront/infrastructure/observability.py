"""Structured Logging — JSON formatter and setup for the API and the change feed.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Change-feed and write context (observer_id, observer_count, entity_type,
      action, event_id) and gateway context (service, attempt, status_code)
      surfaced when present
    - setup_logging is idempotent: re-running the lifespan replaces the
      storefront handler instead of stacking a second one

Design Decisions:
    - setup_logging called once on startup via lifespan
    - Text format appends observer_id / entity_type so feed logs stay readable
      without JSON tooling
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "observer_id", "observer_count", "entity_type", "action", "event_id",
    "record_id", "error_code", "path", "service", "attempt", "status_code",
)

# Per-statement and per-request chatter from libraries
_QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, extras flattened to top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(_extras(record))
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable line with extras as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _extras(record)
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in extras.items())
        return line


def _extras(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in _EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the storefront handler on the root logger."""
    for existing in list(logging.root.handlers):
        if getattr(existing, "_storefront", False):
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler._storefront = True
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
