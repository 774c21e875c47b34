"""test_handler.py - Unit and integration tests for CloudLoggingHandler.

Covers:
    - to_entry() maps stdlib levels to Cloud severities
    - to_entry() takes the source location from the record
    - to_entry() returns None below the Config threshold
    - emit() writes one JSON line per record, including exception text
    - emit() attaches trace correlation from the current span
    - emit() routes sink failures to handleError()
    - Integration: a stdlib logger with the handler attached
"""

import io
import json
import logging

import pytest
from opentelemetry import context as otel_context
from opentelemetry import trace
from opentelemetry.trace import NonRecordingSpan, SpanContext

from cloudslog.config import Config, with_severity, with_sink
from cloudslog.handler import CloudLoggingHandler
from cloudslog.severity import Severity
from cloudslog.sink import Sink


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_record(
    msg: str,
    level: int = logging.INFO,
    exc_info=None,
    pathname: str = "/srv/app/jobs.py",
    lineno: int = 42,
    func: str = "run",
) -> logging.LogRecord:
    """Create a minimal LogRecord for testing."""
    return logging.LogRecord(
        name="test",
        level=level,
        pathname=pathname,
        lineno=lineno,
        msg=msg,
        args=(),
        exc_info=exc_info,
        func=func,
    )


def _fresh_handler(threshold: Severity = Severity.DEBUG):
    """Return a handler over a fresh Config writing to an in-memory stream."""
    stream = io.StringIO()
    config = Config()
    config.setup("test-project", with_severity(threshold), with_sink(stream))
    return CloudLoggingHandler(config), stream


class _RecordingSpan(NonRecordingSpan):
    def is_recording(self) -> bool:
        return True


class _FailingSink(Sink):
    def write(self, line: str) -> None:
        raise OSError("broken pipe")


# ---------------------------------------------------------------------------
# to_entry()
# ---------------------------------------------------------------------------


class TestToEntry:
    def setup_method(self):
        self.handler, self.stream = _fresh_handler()

    @pytest.mark.parametrize(
        "level,severity",
        [
            (logging.DEBUG, "DEBUG"),
            (logging.INFO, "INFO"),
            (logging.WARNING, "WARNING"),
            (logging.ERROR, "ERROR"),
            (logging.CRITICAL, "CRITICAL"),
        ],
    )
    def test_to_entry_maps_level(self, level, severity):
        entry = self.handler.to_entry(_make_record("m", level))
        assert entry.severity == severity

    def test_to_entry_uses_record_location(self):
        """File, line and module-qualified function come from the record."""
        entry = self.handler.to_entry(_make_record("m"))
        assert entry.source_location.file == "/srv/app/jobs.py"
        assert entry.source_location.line == 42
        assert entry.source_location.function == "jobs.run"

    def test_to_entry_without_location_omits_it(self):
        entry = self.handler.to_entry(_make_record("m", pathname="", lineno=0, func=None))
        assert entry.source_location is None

    def test_to_entry_below_threshold_returns_none(self):
        handler, _ = _fresh_handler(Severity.WARNING)
        assert handler.to_entry(_make_record("m", logging.INFO)) is None


# ---------------------------------------------------------------------------
# emit()
# ---------------------------------------------------------------------------


class TestEmit:
    def setup_method(self):
        self.handler, self.stream = _fresh_handler()

    def test_emit_writes_one_json_line(self):
        self.handler.emit(_make_record("hello"))
        lines = self.stream.getvalue().splitlines()
        assert len(lines) == 1
        record = json.loads(lines[0])
        assert record["severity"] == "INFO"
        assert record["message"] == "hello"

    def test_emit_includes_exception_text(self):
        try:
            raise ValueError("bad value")
        except ValueError:
            import sys

            exc_info = sys.exc_info()

        self.handler.emit(_make_record("caught it", logging.ERROR, exc_info=exc_info))
        message = json.loads(self.stream.getvalue())["message"]
        assert message.startswith("caught it\nTraceback (most recent call last):")
        assert "ValueError: bad value" in message

    def test_emit_correlates_with_current_span(self):
        span = _RecordingSpan(SpanContext(trace_id=0xABC, span_id=0xDEF, is_remote=False))
        token = otel_context.attach(trace.set_span_in_context(span))
        try:
            self.handler.emit(_make_record("traced"))
        finally:
            otel_context.detach(token)

        record = json.loads(self.stream.getvalue())
        assert record["logging.googleapis.com/trace"] == (
            "projects/test-project/traces/" + format(0xABC, "032x")
        )
        assert record["logging.googleapis.com/spanId"] == format(0xDEF, "016x")

    def test_emit_below_threshold_writes_nothing(self):
        handler, stream = _fresh_handler(Severity.ERROR)
        handler.emit(_make_record("quiet", logging.WARNING))
        assert stream.getvalue() == ""

    def test_emit_sink_failure_goes_to_handle_error(self, monkeypatch):
        config = Config()
        config.setup("p", with_sink(_FailingSink()))
        handler = CloudLoggingHandler(config)
        seen = []
        monkeypatch.setattr(handler, "handleError", seen.append)

        record = _make_record("lost")
        handler.emit(record)

        assert seen == [record]


# ---------------------------------------------------------------------------
# Integration
# ---------------------------------------------------------------------------


class TestIntegrationStdlibLogger:
    def test_integration_stdlib_logger_emits_cloud_json(self):
        """A plain logging.getLogger() call produces the Cloud Logging format."""
        handler, stream = _fresh_handler(Severity.INFO)
        logger = logging.getLogger("cloudslog_integration_test")
        logger.setLevel(logging.DEBUG)
        logger.handlers.clear()
        logger.propagate = False
        logger.addHandler(handler)

        try:
            logger.debug("below threshold")
            logger.info("order %s accepted", 17)
            logger.warning("stock low")
        finally:
            logger.removeHandler(handler)

        records = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert [r["severity"] for r in records] == ["INFO", "WARNING"]
        assert records[0]["message"] == "order 17 accepted"
        location = records[0]["logging.googleapis.com/sourceLocation"]
        assert location["file"] == __file__
        assert location["function"].endswith(
            "test_integration_stdlib_logger_emits_cloud_json"
        )
