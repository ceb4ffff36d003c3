# folio/utils/logging.py
"""
Logging setup for folio.

Every record carries the correlation ID of the refresh cycle or valuation
run that produced it, so one price refresh can be followed across the
resolver, the providers and the valuation service.

Usage:
    from folio.utils import setup_logging

    setup_logging()                      # level/format from settings
    setup_logging("DEBUG", "json")       # explicit

Levels used by the services:
    DEBUG   - Per-holding valuation detail, rate resolution paths
    INFO    - Completed calculations, refresh summaries, snapshots
    WARNING - Degraded data (unresolved rates, assumed prices, provider failures)
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from folio.config import settings
from folio.utils.context import get_correlation_id

# =============================================================================
# CONSTANTS
# =============================================================================

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(correlation_id)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NO_CORRELATION_ID = "no-correlation-id"

# HTTP clients used by concrete provider adapters
NOISY_LOGGERS = ("urllib3", "requests", "httpx", "httpcore")

# Attributes every LogRecord has; anything else came in through `extra=`
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {
    "message", "asctime", "correlation_id",
}


# =============================================================================
# FILTER / FORMATTER
# =============================================================================

class CorrelationIdFilter(logging.Filter):
    """Stamps %(correlation_id)s onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        return True


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line:

        {"timestamp": ..., "level": "WARNING", "logger": "folio.services...",
         "correlation_id": "refresh-rates-1a2b3c", "message": "...",
         "extra": {"from_currency": "CHF"}}

    Values in `extra` that json cannot encode (Decimal, dates) are
    written with str().
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "correlation_id": getattr(record, "correlation_id", NO_CORRELATION_ID),
            "message": record.getMessage(),
        }

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        extra = _extra_fields(record)
        if extra:
            entry["extra"] = extra

        return json.dumps(entry, default=str)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS
    }


# =============================================================================
# SETUP
# =============================================================================

def setup_logging(
        level: str | None = None,
        log_format: str | None = None,
        suppress_noisy_loggers: bool = True,
) -> None:
    """
    Install a single stdout handler on the root logger.

    Args:
        level: Level name. Defaults to settings.log_level.
        log_format: 'text' or 'json'. Defaults to settings.effective_log_format.
        suppress_noisy_loggers: Raise HTTP client loggers to WARNING.

    Raises:
        ValueError: If the level name is not recognized
    """
    level_name = level or settings.log_level
    format_type = (log_format or settings.effective_log_format).lower()

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    if format_type == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(_get_log_level(level_name))
    root.handlers.clear()
    root.addHandler(handler)

    if suppress_noisy_loggers:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured: level={level_name}, format={format_type}"
    )


def _get_log_level(name: str) -> int:
    """Map a level name (case-insensitive, WARN accepted) to its number."""
    levels = logging.getLevelNamesMapping()
    key = name.strip().upper()
    if key not in levels or key == "NOTSET":
        valid = ", ".join(sorted(k for k in levels if k != "NOTSET"))
        raise ValueError(f"Invalid log level: '{name}'. Valid levels are: {valid}")
    return levels[key]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
