"""
Observability module for command-scoped structured logging.

- Trace context propagation via ContextVar
- Structured JSON logging or human-readable logging on stderr
"""

from linearis.observability.logging import (
    clear_trace_context,
    configure_logging,
    get_trace_context,
    set_trace_context,
)

__all__ = [
    "configure_logging",
    "get_trace_context",
    "set_trace_context",
    "clear_trace_context",
]
