# folio/utils/__init__.py
"""
Utility modules for the portfolio dashboard core.

This package contains cross-cutting utilities:
- logging: Logging configuration with correlation ID support
- context: Correlation ID storage
- fx_conversion: Exchange-rate arithmetic helpers

Usage:
    from folio.utils import setup_logging, get_logger
    from folio.utils import get_correlation_id, set_correlation_id
"""

from folio.utils.context import (
    get_correlation_id,
    set_correlation_id,
    clear_correlation_id,
)
from folio.utils.logging import setup_logging, get_logger

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    # Context
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
]
