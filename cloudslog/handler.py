"""handler.py - Bridge from the stdlib ``logging`` module to cloudslog.

CloudLoggingHandler lets code that already logs through ``logging.getLogger``
emit the same Cloud Logging JSON lines as the ``cloudslog`` functions, without
changing any call sites.

Design contract:
    - Attach the handler once; every record that passes both the handler
      level and the Config threshold becomes one Entry on the Config's sink.
    - The record's own ``pathname``, ``lineno`` and ``funcName`` give the
      source location; no stack walk is needed.
    - Trace correlation comes from the span that is current when the record
      is emitted, i.e. the OpenTelemetry span active in the logging thread.

Typical usage::

    import logging
    import cloudslog
    from cloudslog import CloudLoggingHandler

    cloudslog.setup("my-project")
    logging.getLogger().addHandler(CloudLoggingHandler())
    logging.getLogger(__name__).warning("disk at %d%%", 91)
"""

import logging
from typing import Optional

from .config import Config, default_config
from .entry import Entry, SourceLocation
from .severity import Severity
from .sink import write_entry
from .tracing import resolve_trace_from_context


class CloudLoggingHandler(logging.Handler):
    """A logging.Handler that writes records as Cloud Logging JSON lines.

    Thread-safety:
        ``logging.Handler.handle`` serialises ``emit()`` calls on the handler
        lock, and each record is written with a single sink call.

    Attributes:
        _config (Config): Supplies the threshold, reporting id and sink.

    Example:
        >>> import logging
        >>> logging.getLogger().addHandler(CloudLoggingHandler())
        >>> logging.getLogger("myapp").error("payment failed", exc_info=True)
    """

    def __init__(self, config: Optional[Config] = None, level: int = logging.NOTSET) -> None:
        """Initialise the handler.

        Args:
            config: Config to write through. Defaults to ``default_config``.
            level: Handler level, applied before the Config threshold.
        """
        super().__init__(level)
        self._config = config if config is not None else default_config

    def emit(self, record: logging.LogRecord) -> None:
        """Convert ``record`` to an Entry and write it.

        Failures go to ``handleError()`` so that a broken sink never raises
        into the application's logging call.
        """
        try:
            entry = self.to_entry(record)
            if entry is not None:
                write_entry(self._config.sink, entry)
        except Exception:
            self.handleError(record)

    def to_entry(self, record: logging.LogRecord) -> Optional[Entry]:
        """Return the Entry for ``record``, or None if below the threshold."""
        severity = Severity.from_logging_level(record.levelno)
        if not self._config.enabled(severity):
            return None

        location = None
        if record.pathname or record.lineno:
            function = record.funcName or ""
            if function and record.module:
                function = f"{record.module}.{function}"
            location = SourceLocation(record.pathname or "", record.lineno or 0, function)

        correlation = resolve_trace_from_context(None, self._config.reporting_id)
        trace_name, span_id = correlation if correlation is not None else ("", "")

        return Entry(
            severity=str(severity),
            message=self.format(record),
            trace=trace_name,
            span_id=span_id,
            source_location=location,
        )
