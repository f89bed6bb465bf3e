"""Trace ID context for log correlation.

The tracing middleware stores the hex trace id of the request's server span
here, so every log record emitted while handling the request can carry it
without the handler passing it around.

Example:
    >>> from libs.common.logging.context import get_trace_id, set_trace_id
    >>> set_trace_id("4bf92f3577b34da6a3ce929d0e0e4736")
    >>> get_trace_id()
    '4bf92f3577b34da6a3ce929d0e0e4736'
"""

import contextvars

# Context variable for storing trace ID in async contexts
_trace_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("trace_id", default=None)

# Response/request header carrying the hex trace ID for humans and log search
TRACE_ID_HEADER = "X-Trace-ID"


def get_trace_id() -> str | None:
    """Get the current trace ID from context.

    Returns:
        Current trace ID if set, None otherwise
    """
    return _trace_id_var.get()


def set_trace_id(trace_id: str) -> None:
    """Set the trace ID for the current context.

    Args:
        trace_id: The trace ID to set

    Raises:
        ValueError: If trace_id is empty or None
    """
    if not trace_id:
        raise ValueError("Trace ID cannot be empty")
    _trace_id_var.set(trace_id)


def clear_trace_id() -> None:
    """Clear the trace ID from the current context."""
    _trace_id_var.set(None)
