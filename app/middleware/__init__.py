"""
Middleware modules for the Document Service
"""

from .trace_context import (
    TraceContextMiddleware,
    get_trace_id,
    get_span_id,
    get_correlation_id,
)

__all__ = ["TraceContextMiddleware", "get_trace_id", "get_span_id", "get_correlation_id"]
