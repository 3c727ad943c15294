"""Logging utilities.

Every tool invocation runs inside :func:`call_context`, which tags its log
lines with a call id and tool name. Structured ``extra=`` fields passed by the
tool and backend (``query_len``, ``result_count``, ``latency_ms`` ...) are
rendered after the message as ``key=value`` pairs.
"""

from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "ddgtool"

_call_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("ddgtool_call_id", default="-")
_tool_var: contextvars.ContextVar[str] = contextvars.ContextVar("ddgtool_tool", default="-")

_RESERVED_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {
    "message",
    "asctime",
    "call_id",
    "tool",
}


class _CallContextFilter(logging.Filter):
    """Inject tool call context into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.call_id = _call_id_var.get()  # type: ignore[attr-defined]
        record.tool = _tool_var.get()  # type: ignore[attr-defined]
        return True


class StructuredFormatter(logging.Formatter):
    """Append a record's ``extra`` fields to the message, sorted by key."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        message = super().format(record)
        fields = extra_fields(record)
        if not fields:
            return message
        rendered = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
        return f"{message} | {rendered}"


def extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Fields attached to ``record`` through ``extra=``."""

    return {key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS}


@contextlib.contextmanager
def call_context(*, call_id: str, tool: str | None = None) -> Any:
    """Temporarily bind tool call context for structured logging.

    Context vars are task-local, so concurrent ``run`` calls keep their own ids.

    Args:
        call_id: Tool call identifier.
        tool: Optional tool name.
    """

    token_call = _call_id_var.set(call_id)
    token_tool = _tool_var.set(tool or _tool_var.get())
    try:
        yield
    finally:
        _call_id_var.reset(token_call)
        _tool_var.reset(token_tool)


def configure_logging(level: str = "INFO") -> None:
    """Send ``ddgtool`` logs to stderr through rich.

    Only the package logger is configured, so embedding applications keep
    control of the root logger. Stdout stays free for ``--json`` output.

    Args:
        level: Logging level name.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper())

    formatter = StructuredFormatter(fmt="[%(call_id)s %(tool)s] %(name)s: %(message)s")
    for h in logger.handlers:
        if isinstance(h, RichHandler):
            h.setFormatter(formatter)
            return

    handler = RichHandler(
        console=Console(stderr=True), rich_tracebacks=True, show_time=True, show_level=True
    )
    handler.addFilter(_CallContextFilter())
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)
