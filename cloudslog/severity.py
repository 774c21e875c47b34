"""severity.py - Cloud Logging severity levels and threshold comparison.

The nine levels mirror the ``LogSeverity`` enum of the Cloud Logging
``LogEntry`` resource. They are totally ordered by their integer value, which
is what threshold checks compare:

    DEFAULT < DEBUG < INFO < NOTICE < WARNING < ERROR < CRITICAL < ALERT < EMERGENCY

Example:
    >>> Severity.parse("warning")
    <Severity.WARNING: 4>
    >>> str(Severity.INFO)
    'INFO'
    >>> enabled(Severity.DEBUG, Severity.INFO)
    False
"""

import logging
from enum import IntEnum

from .errors import InvalidSeverityName


class Severity(IntEnum):
    """Ordered log severity, rendered by name in the wire format."""

    # The log entry has no assigned severity level.
    DEFAULT = 0
    # Debug or trace information.
    DEBUG = 1
    # Routine information, such as ongoing status or performance.
    INFO = 2
    # Normal but significant events, such as start up, shut down, or a configuration change.
    NOTICE = 3
    # Warning events might cause problems.
    WARNING = 4
    # Error events are likely to cause problems.
    ERROR = 5
    # Critical events cause more severe problems or outages.
    CRITICAL = 6
    # A person must take an action immediately.
    ALERT = 7
    # One or more systems are unusable.
    EMERGENCY = 8

    def __str__(self) -> str:
        return self.name

    @classmethod
    def parse(cls, name, strict: bool = False) -> "Severity":
        """Return the Severity whose name matches ``name``, ignoring case.

        Args:
            name: A level name such as ``"info"`` or ``"WARNING"``. ``None``
                is treated as an unknown name.
            strict: When False (default), an unknown name falls back to
                ``Severity.DEFAULT``. When True, it raises instead.

        Returns:
            The matching Severity, or ``Severity.DEFAULT`` for unknown names
            in non-strict mode.

        Raises:
            InvalidSeverityName: If ``strict`` is True and ``name`` matches
                none of the nine levels.
        """
        if isinstance(name, str):
            member = cls.__members__.get(name.upper())
            if member is not None:
                return member
        if strict:
            raise InvalidSeverityName(name)
        return cls.DEFAULT

    @classmethod
    def from_logging_level(cls, levelno: int) -> "Severity":
        """Map a stdlib ``logging`` level number to the nearest lower Severity."""
        if levelno >= logging.CRITICAL:
            return cls.CRITICAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARNING
        if levelno >= logging.INFO:
            return cls.INFO
        if levelno >= logging.DEBUG:
            return cls.DEBUG
        return cls.DEFAULT


def enabled(severity: Severity, threshold: Severity) -> bool:
    """Return True if ``severity`` is at or above ``threshold``."""
    return severity >= threshold
