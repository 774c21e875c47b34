"""logger.py - Leveled logging calls that gate, build and write entries.

Every public method is one of five levels (debug, info, warn, error and
report_error) crossed with three call shapes:

    ``info(msg, *args)``                   no trace correlation
    ``info_with_span(span, msg, *args)``   correlate with an explicit span
    ``info_with_ctx(ctx, msg, *args)``     correlate with the span active in
                                           an OpenTelemetry Context

All fifteen are generated by ``_leveled()`` and funnel into ``Logger._emit``.
A call below the configured threshold returns before any formatting or Entry
construction. ``args`` are applied printf-style (``msg % args``) exactly as
the stdlib ``logging`` module does.

Typical usage::

    import cloudslog
    from opentelemetry import trace

    cloudslog.setup("my-project", cloudslog.with_log_level("info"))
    cloudslog.info("job %s started", job_id)

    with trace.get_tracer(__name__).start_as_current_span("job") as span:
        cloudslog.info_with_span(span, "fetched %d rows", n)
        cloudslog.warn_with_ctx(None, "slow query")  # current context
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Optional

from .config import Config, default_config
from .entry import Entry
from .errors import SerializationError, SinkWriteError
from .location import format_stack, resolve_caller
from .severity import Severity
from .sink import write_entry
from .tracing import resolve_trace, resolve_trace_from_context

logger = logging.getLogger(__name__)

# Frames from Logger._emit up to the application's call site: _emit itself and
# the generated public method. Module-level functions in ``cloudslog`` are
# bound methods, so they add nothing.
_CALLER_SKIP = 2


class _Shape(Enum):
    PLAIN = "plain"
    SPAN = "span"
    CONTEXT = "ctx"


class Logger:
    """Structured logger writing Cloud Logging JSON lines.

    Args:
        config: The Config to read the threshold, reporting id and sink
            from. Defaults to the process-wide ``default_config``.
        stacklevel: Extra frames to skip when resolving the source location,
            for code that wraps a Logger in its own helper functions.
    """

    def __init__(self, config: Optional[Config] = None, stacklevel: int = 0) -> None:
        self._config = config if config is not None else default_config
        self._stacklevel = stacklevel

    @property
    def config(self) -> Config:
        return self._config

    def enabled(self, severity: Severity) -> bool:
        return self._config.enabled(severity)

    def _emit(self, severity: Severity, msg, args, report: bool, shape: _Shape, source) -> None:
        config = self._config
        skip = _CALLER_SKIP + self._stacklevel

        try:
            message = _render(msg, args)
            if report:
                message = f"{message}\n{format_stack(skip)}"

            correlation = None
            if shape is _Shape.SPAN:
                correlation = resolve_trace(source, config.reporting_id)
            elif shape is _Shape.CONTEXT:
                correlation = resolve_trace_from_context(source, config.reporting_id)
            trace_name, span_id = correlation if correlation is not None else ("", "")

            entry = Entry(
                severity=str(severity),
                message=message,
                trace=trace_name,
                span_id=span_id,
                source_location=resolve_caller(skip),
            )
            write_entry(config.sink, entry)
        except (SinkWriteError, SerializationError) as exc:
            if not config.swallow_errors:
                raise
            logger.warning("cloudslog dropped a %s entry: %s", severity, exc)


def _render(msg, args) -> str:
    if not args:
        return str(msg)
    # Same single-mapping convention as logging.LogRecord.getMessage().
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        args = args[0]
    try:
        return str(msg) % args
    except (TypeError, ValueError, KeyError) as exc:
        raise SerializationError(f"cannot format message {msg!r}: {exc}") from exc


def _leveled(severity: Severity, shape: _Shape, report: bool = False):
    """Build one public logging method for a level and call shape."""
    if shape is _Shape.PLAIN:

        def method(self, msg, *args) -> None:
            if self._config.enabled(severity):
                self._emit(severity, msg, args, report, shape, None)

    elif shape is _Shape.SPAN:

        def method(self, span, msg, *args) -> None:
            if self._config.enabled(severity):
                self._emit(severity, msg, args, report, shape, span)

    else:

        def method(self, ctx, msg, *args) -> None:
            if self._config.enabled(severity):
                self._emit(severity, msg, args, report, shape, ctx)

    what = "an error with the current stack trace" if report else "a message"
    with_ = {
        _Shape.PLAIN: "",
        _Shape.SPAN: ", correlated with ``span``",
        _Shape.CONTEXT: ", correlated with the span active in ``ctx``",
    }[shape]
    method.__doc__ = f"Log {what} at {severity.name}{with_}."
    return method


_LEVELS = (
    ("debug", Severity.DEBUG, False),
    ("info", Severity.INFO, False),
    ("warn", Severity.WARNING, False),
    ("error", Severity.ERROR, False),
    ("report_error", Severity.ERROR, True),
)

_SUFFIXES = {
    _Shape.PLAIN: "",
    _Shape.SPAN: "_with_span",
    _Shape.CONTEXT: "_with_ctx",
}

for _name, _severity, _report in _LEVELS:
    for _shape, _suffix in _SUFFIXES.items():
        _method = _leveled(_severity, _shape, _report)
        _method.__name__ = _name + _suffix
        _method.__qualname__ = f"Logger.{_method.__name__}"
        setattr(Logger, _method.__name__, _method)

# stdlib spelling
Logger.warning = Logger.warn
Logger.warning_with_span = Logger.warn_with_span
Logger.warning_with_ctx = Logger.warn_with_ctx

del _name, _severity, _report, _shape, _suffix, _method
