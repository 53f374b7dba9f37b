"""Per-operation context used to correlate log lines."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4


trace_context: ContextVar[dict | None] = ContextVar("trace_context", default=None)


def get_trace_context() -> dict:
    """Return the current context, starting a new trace if there is none."""
    ctx = trace_context.get()
    if ctx is None:
        ctx = {"trace_id": uuid4().hex, "span_id": uuid4().hex[:16]}
        trace_context.set(ctx)
    return ctx


@contextmanager
def operation_context(operation: str) -> Iterator[dict]:
    """Open a new span named ``operation`` under the current trace."""
    ctx = {**get_trace_context(), "span_id": uuid4().hex[:16], "operation": operation}
    token = trace_context.set(ctx)
    try:
        yield ctx
    finally:
        trace_context.reset(token)
