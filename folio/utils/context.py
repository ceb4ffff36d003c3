# folio/utils/context.py
"""
Context management for log correlation.

Each price/rate refresh cycle (and any caller that wants it) runs under a
correlation ID so that every log line emitted while processing it can be
grouped together.

Uses Python's contextvars so the value is isolated per thread and per
async task.

Usage:
    from folio.utils.context import get_correlation_id, set_correlation_id

    set_correlation_id("refresh-1a2b3c")
    correlation_id = get_correlation_id()  # Returns "refresh-1a2b3c"
"""

from contextvars import ContextVar

# =============================================================================
# CONTEXT VARIABLES
# =============================================================================

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


# =============================================================================
# CORRELATION ID
# =============================================================================

def get_correlation_id() -> str | None:
    """
    Get the current correlation ID.

    Returns:
        The correlation ID for the current context, or None if not set.
    """
    return _correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """
    Set the correlation ID for the current context.

    Args:
        correlation_id: Unique identifier for this unit of work
    """
    _correlation_id_var.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID."""
    _correlation_id_var.set(None)
