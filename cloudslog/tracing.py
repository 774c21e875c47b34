"""tracing.py - Trace correlation from OpenTelemetry spans.

Cloud Logging joins a log entry to a Cloud Trace span through two fields:

    Trace:   ``projects/<reporting id>/traces/<32 hex chars>``
    Span ID: 16 hex chars

Correlation is only attached when the span is recording and both its trace id
and span id are valid (non-zero). Otherwise both fields are omitted together;
a half-correlated entry is never produced.

The span argument only needs the read side of the OpenTelemetry ``Span`` API:
``is_recording()`` and ``get_span_context()`` returning an object with integer
``trace_id`` and ``span_id`` attributes.
"""

from typing import Optional, Tuple

from opentelemetry import trace
from opentelemetry.trace import INVALID_SPAN_ID, INVALID_TRACE_ID


def trace_resource_name(reporting_id: str, trace_id_hex: str) -> str:
    """Return the Cloud Trace resource name for a trace id."""
    return f"projects/{reporting_id}/traces/{trace_id_hex}"


def resolve_trace(span, reporting_id: str) -> Optional[Tuple[str, str]]:
    """Return ``(trace resource name, span id hex)`` for a recording span.

    Args:
        span: An OpenTelemetry Span, or None.
        reporting_id: Project id used to build the trace resource name.

    Returns:
        The pair, or None if ``span`` is None, not recording, or carries an
        invalid trace id or span id.
    """
    if span is None or not span.is_recording():
        return None
    span_ctx = span.get_span_context()
    if span_ctx is None:
        return None
    if span_ctx.trace_id == INVALID_TRACE_ID or span_ctx.span_id == INVALID_SPAN_ID:
        return None
    return (
        trace_resource_name(reporting_id, format(span_ctx.trace_id, "032x")),
        format(span_ctx.span_id, "016x"),
    )


def resolve_trace_from_context(context, reporting_id: str) -> Optional[Tuple[str, str]]:
    """Extract the active span from an OpenTelemetry Context and resolve it.

    ``context=None`` means the current ambient context. A context without an
    active span yields the invalid span, which resolves to None.
    """
    return resolve_trace(trace.get_current_span(context), reporting_id)
