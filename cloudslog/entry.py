"""entry.py - The structured log record and its JSON wire format.

An Entry is one line of output in the format the Cloud Logging agent parses
from a container's stdout (see the ``LogEntry`` resource of the Cloud Logging
v2 API). Entries are immutable value objects built fresh for every enabled
logging call.

Wire format (field order is fixed; optional fields are omitted, never null)::

    {"severity":"INFO",
     "logging.googleapis.com/trace":"projects/<id>/traces/<hex>",
     "logging.googleapis.com/spanId":"<hex>",
     "logging.googleapis.com/sourceLocation":{"file":"<path>","line":<n>,"function":"<name>"},
     "message":"<text>"}

The encoded form is a single line terminated by ``"\\n"``.
"""

import json
from typing import Any, Dict, NamedTuple, Optional

from .errors import SerializationError

TRACE_KEY = "logging.googleapis.com/trace"
SPAN_ID_KEY = "logging.googleapis.com/spanId"
SOURCE_LOCATION_KEY = "logging.googleapis.com/sourceLocation"


class SourceLocation(NamedTuple):
    """Source code location that produced a log entry.

    Attributes:
        file: Source file name, as reported by the interpreter for the frame.
        line: 1-based line within ``file``; 0 means no line is available.
        function: Human-readable function name, e.g. ``"app.jobs.Worker.run"``.
            Empty when it could not be determined.
    """

    file: str = ""
    line: int = 0
    function: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON object for this location, omitting empty fields."""
        out: Dict[str, Any] = {}
        if self.file:
            out["file"] = self.file
        if self.line:
            out["line"] = self.line
        if self.function:
            out["function"] = self.function
        return out


class Entry(NamedTuple):
    """A single structured log record.

    Attributes:
        severity: Severity name, e.g. ``"INFO"``. Always present.
        message: The fully formatted log message. Always present.
        trace: Trace resource name, ``projects/<id>/traces/<hex>``. Empty
            when the record has no trace correlation.
        span_id: 16-character hex span id. Empty when ``trace`` is empty.
        source_location: Where the logging call was made, or None.
    """

    severity: str
    message: str
    trace: str = ""
    span_id: str = ""
    source_location: Optional[SourceLocation] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON object for this entry in wire field order."""
        out: Dict[str, Any] = {"severity": self.severity}
        if self.trace:
            out[TRACE_KEY] = self.trace
        if self.span_id:
            out[SPAN_ID_KEY] = self.span_id
        if self.source_location is not None:
            out[SOURCE_LOCATION_KEY] = self.source_location.to_dict()
        out["message"] = self.message
        return out

    def encode(self) -> str:
        """Serialise the entry as one compact JSON line ending in a newline.

        Returns:
            The JSON text followed by ``"\\n"``.

        Raises:
            SerializationError: If the encoder rejects a field value. Only
                reachable when an Entry was built with non-string fields.

        Example:
            >>> Entry("INFO", "hoge").encode()
            '{"severity":"INFO","message":"hoge"}\\n'
        """
        try:
            body = json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"cannot encode log entry: {exc}") from exc
        return body + "\n"
