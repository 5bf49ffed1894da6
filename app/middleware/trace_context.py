"""
W3C Trace Context Middleware
Extracts or generates the traceparent header and keeps the request's
trace and correlation IDs in context variables for logging and events.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional, Tuple

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

TRACEPARENT_PATTERN = re.compile(r'^00-([0-9a-f]{32})-([0-9a-f]{16})-[0-9a-f]{2}$')

# Context variables holding the trace context of the current request
trace_id_ctx: ContextVar[Optional[str]] = ContextVar("trace_id", default=None)
span_id_ctx: ContextVar[Optional[str]] = ContextVar("span_id", default=None)
correlation_id_ctx: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def get_trace_id() -> Optional[str]:
    """Get the trace ID from the current context"""
    return trace_id_ctx.get()


def get_span_id() -> Optional[str]:
    """Get the span ID from the current context"""
    return span_id_ctx.get()


def get_correlation_id() -> Optional[str]:
    """Correlation ID of the current request, falling back to the trace ID"""
    return correlation_id_ctx.get() or trace_id_ctx.get()


def set_trace_context(trace_id: str, span_id: str, correlation_id: Optional[str] = None) -> None:
    """Set the trace context in the current context"""
    trace_id_ctx.set(trace_id)
    span_id_ctx.set(span_id)
    correlation_id_ctx.set(correlation_id or trace_id)


def extract_trace_context(traceparent: str) -> Optional[Tuple[str, str]]:
    """
    Extract traceId and spanId from W3C traceparent header
    Format: 00-{32-hex-traceId}-{16-hex-spanId}-{2-hex-flags}

    Returns:
        Tuple of (trace_id, span_id) or None if invalid
    """
    if not traceparent:
        return None

    match = TRACEPARENT_PATTERN.match(traceparent.strip().lower())
    if not match:
        return None

    trace_id, span_id = match.groups()
    # All-zero IDs are invalid in W3C trace context
    if trace_id == '0' * 32 or span_id == '0' * 16:
        return None
    return trace_id, span_id


def generate_trace_context() -> Tuple[str, str]:
    """Generate a new (trace_id, span_id) pair as 32 and 16 hex chars"""
    return uuid.uuid4().hex, uuid.uuid4().hex[:16]


class TraceContextMiddleware(BaseHTTPMiddleware):
    """
    - Reads traceparent (or generates a new trace context)
    - Reads the correlation ID header, defaulting to the trace ID
    - Echoes traceparent, X-Trace-ID and the correlation header on the response
    """

    def __init__(self, app, correlation_id_header: str = "X-Correlation-ID"):
        super().__init__(app)
        self.correlation_id_header = correlation_id_header

    async def dispatch(self, request: Request, call_next):
        trace_context = extract_trace_context(request.headers.get("traceparent"))
        trace_id, span_id = trace_context or generate_trace_context()
        correlation_id = request.headers.get(self.correlation_id_header) or trace_id

        set_trace_context(trace_id, span_id, correlation_id)
        request.state.trace_id = trace_id
        request.state.span_id = span_id
        request.state.correlation_id = correlation_id

        response = await call_next(request)

        response.headers["traceparent"] = f"00-{trace_id}-{span_id}-01"
        response.headers["X-Trace-ID"] = trace_id
        response.headers[self.correlation_id_header] = correlation_id
        return response
