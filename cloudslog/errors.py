"""errors.py - Exception types raised by cloudslog.

Unresolvable source locations and missing trace correlation are not errors;
they degrade to omitted fields. Everything here is raised to the immediate
caller of the logging or setup function.
"""


class CloudSlogError(Exception):
    """Base class for all cloudslog errors."""


class AlreadyInitializedError(CloudSlogError):
    """Raised when ``setup()`` is called on an already initialised Config."""

    def __init__(self, message: str = "cloudslog is already initialized") -> None:
        super().__init__(message)


class SinkWriteError(CloudSlogError):
    """The sink rejected or failed to write a serialised entry."""


class SerializationError(CloudSlogError):
    """An Entry could not be encoded as JSON.

    The Entry shape only holds strings, integers and a nested record, so this
    indicates a defect rather than a recoverable condition.
    """


class InvalidSeverityName(CloudSlogError, ValueError):
    """Raised by strict severity parsing when a name matches no level."""

    def __init__(self, name) -> None:
        super().__init__(f"unknown severity name: {name!r}")
        self.name = name
