"""sink.py - Output destination for encoded log entries.

A Sink receives one fully encoded JSON line per enabled logging call. The
line already carries its trailing newline, and ``write()`` is called exactly
once per entry so that concurrent writers can interleave only at line
granularity. Buffering and flushing belong to the underlying stream.

Typical usage::

    import io
    from cloudslog import Config, StreamSink, with_sink

    buf = io.StringIO()
    config = Config()
    config.setup("my-project", with_sink(StreamSink(buf)))
"""

import sys
from abc import ABC, abstractmethod

from .entry import Entry
from .errors import SinkWriteError


class Sink(ABC):
    """Abstract base class for entry destinations.

    Example:
        >>> class ListSink(Sink):
        ...     def __init__(self):
        ...         self.lines = []
        ...     def write(self, line: str) -> None:
        ...         self.lines.append(line)
    """

    @abstractmethod
    def write(self, line: str) -> None:
        """Write one encoded entry, including its trailing newline.

        Raises:
            SinkWriteError: If the destination rejected the write.
        """


class StreamSink(Sink):
    """Write entries to a text stream (default: the current ``sys.stdout``).

    When no stream is given, ``sys.stdout`` is looked up on every write rather
    than captured at construction, so redirections made after setup (test
    capture, ``contextlib.redirect_stdout``) are honoured.

    Attributes:
        _stream: The writable file-like object, or None for ``sys.stdout``.
    """

    def __init__(self, stream=None) -> None:
        self._stream = stream

    @property
    def stream(self):
        return self._stream if self._stream is not None else sys.stdout

    def write(self, line: str) -> None:
        try:
            self.stream.write(line)
        except (OSError, ValueError) as exc:
            # ValueError is what a closed file raises on write.
            raise SinkWriteError(f"failed to write log entry: {exc}") from exc


def as_sink(target) -> Sink:
    """Return ``target`` if it is a Sink, otherwise wrap it in a StreamSink."""
    if isinstance(target, Sink):
        return target
    if not callable(getattr(target, "write", None)):
        raise TypeError(f"expected a Sink or a writable stream, got {type(target).__name__}")
    return StreamSink(target)


def write_entry(sink: Sink, entry: Entry) -> None:
    """Encode ``entry`` and hand it to ``sink`` in a single write call.

    Raises:
        SerializationError: If the entry cannot be encoded.
        SinkWriteError: If the sink fails the write. Exceptions of any other
            type raised by a custom sink are wrapped in SinkWriteError.
    """
    line = entry.encode()
    try:
        sink.write(line)
    except SinkWriteError:
        raise
    except Exception as exc:
        raise SinkWriteError(f"sink {type(sink).__name__} failed: {exc}") from exc
