"""Context helpers that enrich log records with request metadata."""
from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Iterator


_context_var: contextvars.ContextVar[dict[str, object]] = contextvars.ContextVar(
    "log_context", default={}
)


class LogContext:
    """Bind key-value pairs to every record logged from the current context."""

    @contextmanager
    def bound(self, **values: object) -> Iterator[None]:
        """Bind ``values`` for the duration of the ``with`` block."""

        token = _context_var.set(
            {**_context_var.get(), **{k: v for k, v in values.items() if v is not None}}
        )
        try:
            yield
        finally:
            _context_var.reset(token)


class ContextFilter(logging.Filter):
    """Attach contextual key-value pairs to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        # Records relayed through the queue listener keep the caller's context.
        if getattr(record, "context", None) is not None:
            return True
        context = _context_var.get()
        if context:
            record.context = " ".join(f"{k}={v}" for k, v in context.items()) + " "
        else:
            record.context = ""
        return True


log_context = LogContext()
