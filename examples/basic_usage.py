"""examples/basic_usage.py - cloudslog with OpenTelemetry tracing.

Configures cloudslog from the environment, starts a real recording span with
the OpenTelemetry SDK and logs through all three call shapes at each level.
Lines written with a span or context carry Cloud Trace correlation; plain
lines do not.

Run:
    pip install -e ".[examples]"
    PROJECT=my-project LOG_LEVEL=debug python examples/basic_usage.py
"""

import os

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider

import cloudslog


def main() -> None:
    project_id = os.environ.get("PROJECT", "local")
    cloudslog.setup(
        project_id,
        cloudslog.with_log_level(os.environ.get("LOG_LEVEL", "debug")),
    )

    trace.set_tracer_provider(TracerProvider())
    tracer = trace.get_tracer("cloudslog.examples.basic_usage")

    with tracer.start_as_current_span("examples/basic_usage") as span:
        cloudslog.debug("Debug/debug message")
        cloudslog.debug_with_span(span, "DebugWithSpan/debug message")
        cloudslog.debug_with_ctx(None, "DebugWithCtx/debug message")

        cloudslog.info("Info/info message")
        cloudslog.info_with_span(span, "InfoWithSpan/info message")
        cloudslog.info_with_ctx(None, "InfoWithCtx/info message")

        cloudslog.warn("Warn/warn message")
        cloudslog.warn_with_span(span, "WarnWithSpan/warn message")
        cloudslog.warn_with_ctx(None, "WarnWithCtx/warn message")

        cloudslog.error("Error/error message")
        cloudslog.error_with_span(span, "ErrorWithSpan/error message")
        cloudslog.error_with_ctx(None, "ErrorWithCtx/error message")

        try:
            {}["missing"]
        except KeyError:
            cloudslog.report_error_with_span(span, "lookup of %r failed", "missing")


if __name__ == "__main__":
    main()
