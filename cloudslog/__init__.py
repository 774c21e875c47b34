"""cloudslog/__init__.py - Public API for the cloudslog package.

cloudslog writes single-line JSON log records in the structured format that
the Cloud Logging agent ingests from stdout: severity, optional Cloud Trace
correlation, optional source location and the message.

Quick start:
    import cloudslog

    # 1. Configure once at process start (a second call raises
    #    AlreadyInitializedError).
    cloudslog.setup("my-project", cloudslog.with_log_level("info"))

    # 2. Log. Calls below the threshold are dropped before any formatting.
    cloudslog.debug("not written")
    cloudslog.info("order %s accepted", order_id)

    # 3. Correlate with OpenTelemetry spans.
    cloudslog.info_with_span(span, "charging card")
    cloudslog.error_with_ctx(ctx, "charge declined")

    # 4. Report an error with the current stack for Error Reporting.
    cloudslog.report_error("unexpected state")

Exported names:
    setup, enabled:    Operate on the process-wide ``default_config``.
    debug ... report_error_with_ctx:
                       Leveled logging functions bound to a default Logger.
    Logger, Config:    Explicit objects for code that injects its own config.
    Severity:          The nine Cloud Logging severity levels.
    Entry, SourceLocation:
                       The record model and its JSON encoding.
    Sink, StreamSink:  Entry destinations.
    CloudLoggingHandler:
                       stdlib ``logging`` bridge writing the same format.
"""

from .config import (
    Config,
    Option,
    default_config,
    with_log_level,
    with_severity,
    with_sink,
    with_swallow_errors,
)
from .entry import Entry, SourceLocation
from .errors import (
    AlreadyInitializedError,
    CloudSlogError,
    InvalidSeverityName,
    SerializationError,
    SinkWriteError,
)
from .handler import CloudLoggingHandler
from .logger import Logger
from .severity import Severity
from .sink import Sink, StreamSink

setup = default_config.setup
enabled = default_config.enabled

_default_logger = Logger(default_config)

debug = _default_logger.debug
debug_with_span = _default_logger.debug_with_span
debug_with_ctx = _default_logger.debug_with_ctx
info = _default_logger.info
info_with_span = _default_logger.info_with_span
info_with_ctx = _default_logger.info_with_ctx
warn = _default_logger.warn
warn_with_span = _default_logger.warn_with_span
warn_with_ctx = _default_logger.warn_with_ctx
warning = _default_logger.warning
warning_with_span = _default_logger.warning_with_span
warning_with_ctx = _default_logger.warning_with_ctx
error = _default_logger.error
error_with_span = _default_logger.error_with_span
error_with_ctx = _default_logger.error_with_ctx
report_error = _default_logger.report_error
report_error_with_span = _default_logger.report_error_with_span
report_error_with_ctx = _default_logger.report_error_with_ctx

__all__ = [
    "setup",
    "enabled",
    "debug",
    "debug_with_span",
    "debug_with_ctx",
    "info",
    "info_with_span",
    "info_with_ctx",
    "warn",
    "warn_with_span",
    "warn_with_ctx",
    "warning",
    "warning_with_span",
    "warning_with_ctx",
    "error",
    "error_with_span",
    "error_with_ctx",
    "report_error",
    "report_error_with_span",
    "report_error_with_ctx",
    "Logger",
    "Config",
    "Option",
    "default_config",
    "with_severity",
    "with_log_level",
    "with_sink",
    "with_swallow_errors",
    "Severity",
    "Entry",
    "SourceLocation",
    "Sink",
    "StreamSink",
    "CloudLoggingHandler",
    "CloudSlogError",
    "AlreadyInitializedError",
    "SinkWriteError",
    "SerializationError",
    "InvalidSeverityName",
]
__version__ = "0.1.0"
