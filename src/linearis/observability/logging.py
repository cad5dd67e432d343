"""
Structured logging with automatic command context propagation.

Key Features:
- Standard logger.info() calls pick up the active command and trace id
- ContextVar-based propagation: async-safe across awaited lookups
- Dual output modes: JSON for machines, human-readable for terminals
- Everything goes to stderr; stdout is reserved for command JSON

Flow:
    cli.main() → configure_logging() once
        ↓
    output.handle_command() → set_trace_context(command=..., trace_id=...)
        ↓ (automatic propagation via ContextVar)
    LinearClient.request() → logger.debug("...") gets the context
"""

import json
import logging
import os
import re
import sys
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

trace_context: ContextVar[dict[str, Any] | None] = ContextVar("trace_context", default=None)

# ANSI escape code pattern (matches \033[...m or \x1b[...m)
ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*m|\033\[[0-9;]*m")


def strip_ansi_codes(text: str) -> str:
    """Remove ANSI escape codes from text for clean JSON logging."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Produces machine-parseable log entries with:
    - Standard fields (timestamp, level, logger, message)
    - Trace context (trace_id, command)
    - Request fields from extra (operation, latency_ms, status_code)
    """

    EXTRA_FIELDS = ("operation", "latency_ms", "status_code", "entity")

    def format(self, record: logging.LogRecord) -> str:
        context = trace_context.get() or {}

        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": strip_ansi_codes(record.getMessage()),
        }
        log_entry.update(context)

        for name in self.EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_entry[name] = value

        if record.exc_info:
            log_entry["exception"] = strip_ansi_codes(self.formatException(record.exc_info))

        return json.dumps(log_entry)


class HumanReadableFormatter(logging.Formatter):
    """
    Human-readable formatter for terminals.

    Prefixes each line with the command being run and a short trace id.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        context = trace_context.get() or {}
        trace_id = context.get("trace_id", "")
        command = context.get("command", "")

        prefix_parts = []
        if command:
            prefix_parts.append(command)
        if trace_id:
            prefix_parts.append(f"trace:{trace_id[:8]}")
        context_prefix = f"[{' | '.join(prefix_parts)}] " if prefix_parts else ""

        color = self.COLORS.get(record.levelname, "")
        reset = self.RESET
        if os.environ.get("NO_COLOR"):
            color = reset = ""

        level = f"{record.levelname:<8}"

        latency = ""
        latency_ms = getattr(record, "latency_ms", None)
        if latency_ms is not None:
            latency = f" ({latency_ms}ms)"

        return f"{color}[{level}]{reset} {context_prefix}{record.getMessage()}{latency}"


def configure_logging(
    level: str = "WARNING",
    format: str = "auto",  # "json", "human", or "auto"
) -> None:
    """
    Configure logging for a CLI invocation.

    Called once from the entry point and from test fixtures.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format:
            - "json": Machine-parseable JSON
            - "human": Human-readable with colors
            - "auto": JSON if LOG_FORMAT=json, else human
    """
    if format == "auto":
        format = "json" if os.getenv("LOG_FORMAT", "").lower() == "json" else "human"

    formatter = StructuredFormatter() if format == "json" else HumanReadableFormatter()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level.upper())

    # httpx logs every request at INFO; keep it out unless debugging
    for logger_name in ("httpx", "httpcore"):
        third_party = logging.getLogger(logger_name)
        third_party.handlers.clear()
        third_party.propagate = True
        third_party.setLevel(logging.DEBUG if level.upper() == "DEBUG" else logging.WARNING)


def set_trace_context(**kwargs: Any) -> None:
    """
    Merge fields into the trace context for the current execution.

    Args:
        **kwargs: Context fields (trace_id, command)
    """
    current = trace_context.get() or {}
    trace_context.set({**current, **kwargs})


def get_trace_context() -> dict:
    """Return a copy of the current trace context (empty dict if unset)."""
    context = trace_context.get() or {}
    return context.copy()


def clear_trace_context() -> None:
    """Clear trace context, mainly between tests."""
    trace_context.set(None)
