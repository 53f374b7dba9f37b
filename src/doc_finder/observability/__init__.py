"""Observability module for structured, operation-correlated logging."""

from doc_finder.observability.context import get_trace_context, operation_context, trace_context
from doc_finder.observability.logging import JsonFormatter, PlainFormatter, configure_logging, mask_credentials


__all__ = [
    "JsonFormatter",
    "PlainFormatter",
    "configure_logging",
    "get_trace_context",
    "mask_credentials",
    "operation_context",
    "trace_context",
]
