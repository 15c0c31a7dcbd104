"""Request tracing middleware."""

import uuid

from fastapi import Request

TRACE_ID_HEADER = "X-Trace-ID"


def ensure_trace_id(request: Request) -> str:
    """Return the request's trace ID, assigning a new one if absent."""
    trace_id = getattr(request.state, "trace_id", None)
    if not trace_id:
        trace_id = str(uuid.uuid4())
        request.state.trace_id = trace_id
    return trace_id


async def trace_id_middleware(request: Request, call_next):
    """Ensure every request has a trace ID in state and response headers.

    An incoming ``X-Trace-ID`` header is reused so callers can correlate.
    """
    incoming = request.headers.get(TRACE_ID_HEADER)
    if incoming:
        request.state.trace_id = incoming
    trace_id = ensure_trace_id(request)
    response = await call_next(request)
    response.headers[TRACE_ID_HEADER] = trace_id
    return response
