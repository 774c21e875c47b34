"""config.py - Initialise-once configuration shared by every logging call.

A Config holds the reporting identity used to build trace resource names, the
minimum enabled severity, the sink and the write-failure policy. It starts
uninitialised; exactly one ``setup()`` call moves it to initialised, applying
options in the order given. Later ``setup()`` calls raise
AlreadyInitializedError and leave the state untouched.

The check-and-set in ``setup()`` runs under a ``threading.Lock``, so when
several threads race to configure the same Config exactly one of them wins.
Logging calls only read ``threshold``; a single attribute read cannot observe
a partial write, so the hot path takes no lock.

Typical usage::

    from cloudslog import default_config, with_log_level

    default_config.setup("my-project", with_log_level("info"))
"""

import logging
import threading
from typing import Callable

from .errors import AlreadyInitializedError
from .severity import Severity, enabled
from .sink import Sink, StreamSink, as_sink

logger = logging.getLogger(__name__)

# Options receive a _Draft, not the Config: only reporting_id, threshold, sink
# and swallow_errors are visible to them.
Option = Callable[["_Draft"], None]


class Config:
    """Process-wide logging configuration with an initialise-once lifecycle.

    Before ``setup()`` the defaults apply: an empty reporting id, a DEBUG
    threshold and a StreamSink over ``sys.stdout``.

    Attributes:
        reporting_id (str): Project id that namespaces trace resource names.
        threshold (Severity): Minimum severity that is written.
        sink (Sink): Destination for encoded entries.
        swallow_errors (bool): If True, write and serialisation failures are
            reported through the ``cloudslog`` stdlib logger instead of being
            raised to the caller.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._initialized = False
        self.reporting_id = ""
        self.threshold = Severity.DEBUG
        self.sink: Sink = StreamSink()
        self.swallow_errors = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def setup(self, reporting_id: str, *options: Option) -> None:
        """Initialise the configuration. May succeed only once.

        Options are applied in order to a scratch copy of the current
        settings; the copy is committed only if every option succeeds, so an
        option that raises leaves the Config uninitialised and unchanged.

        Args:
            reporting_id: Project id used in ``projects/<id>/traces/<hex>``.
            *options: Callables produced by ``with_severity()``,
                ``with_log_level()``, ``with_sink()`` or
                ``with_swallow_errors()``.

        Raises:
            AlreadyInitializedError: If ``setup()`` already succeeded.
        """
        with self._lock:
            if self._initialized:
                raise AlreadyInitializedError()

            draft = _Draft(self)
            draft.reporting_id = reporting_id
            for option in options:
                option(draft)

            self.reporting_id = draft.reporting_id
            self.sink = draft.sink
            self.swallow_errors = draft.swallow_errors
            self.threshold = draft.threshold
            self._initialized = True

        logger.debug(
            "cloudslog configured: reporting_id=%r threshold=%s",
            reporting_id,
            self.threshold,
        )

    def enabled(self, severity: Severity) -> bool:
        """Return True if ``severity`` passes the current threshold."""
        return enabled(severity, self.threshold)

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"Config(reporting_id={self.reporting_id!r}, threshold={self.threshold!s}, "
            f"initialized={self._initialized})"
        )


class _Draft:
    """Mutable scratch copy of a Config's settings that options write into."""

    __slots__ = ("reporting_id", "threshold", "sink", "swallow_errors")

    def __init__(self, config: Config) -> None:
        self.reporting_id = config.reporting_id
        self.threshold = config.threshold
        self.sink = config.sink
        self.swallow_errors = config.swallow_errors


# --------------------------------------------------------------------------- #
# Options
# --------------------------------------------------------------------------- #


def with_severity(severity: Severity) -> Option:
    """Return an Option that sets the threshold. The default is DEBUG."""
    severity = Severity(severity)

    def apply(cfg) -> None:
        cfg.threshold = severity

    return apply


def with_log_level(name: str, strict: bool = False) -> Option:
    """Return an Option that sets the threshold from a level name.

    Matching is case-insensitive. An unknown name sets the threshold to
    DEFAULT, which enables every level; pass ``strict=True`` to make
    ``setup()`` raise InvalidSeverityName instead.
    """

    def apply(cfg) -> None:
        cfg.threshold = Severity.parse(name, strict=strict)

    return apply


def with_sink(target) -> Option:
    """Return an Option that sends entries to ``target``.

    ``target`` is either a Sink or any object with a ``write(str)`` method,
    which is wrapped in a StreamSink.
    """
    sink = as_sink(target)

    def apply(cfg) -> None:
        cfg.sink = sink

    return apply


def with_swallow_errors(swallow: bool = True) -> Option:
    """Return an Option that logs write failures instead of raising them."""

    def apply(cfg) -> None:
        cfg.swallow_errors = swallow

    return apply


# Backs the module-level API in ``cloudslog``.
default_config = Config()
