"""examples/custom_sink_usage.py - Implement and plug in a custom Sink.

Shows how to subclass Sink to collect encoded entries in memory (useful for
tests), and how a failing sink surfaces as SinkWriteError unless the Config
was set up with ``with_swallow_errors()``.

Run:
    python examples/custom_sink_usage.py
"""

import json
from typing import List

from cloudslog import Config, Logger, Sink, SinkWriteError, with_sink, with_swallow_errors


class MemorySink(Sink):
    """Stores every encoded entry in memory.

    Attributes:
        lines: Each element is one JSON line, newline included.
    """

    def __init__(self) -> None:
        self.lines: List[str] = []

    def write(self, line: str) -> None:
        self.lines.append(line)


class UnavailableSink(Sink):
    """Simulates a destination that is down."""

    def write(self, line: str) -> None:
        raise ConnectionError("log collector unreachable")


if __name__ == "__main__":
    memory = MemorySink()
    config = Config()
    config.setup("local", with_sink(memory))
    log = Logger(config)

    log.info("collected %d entries so far", len(memory.lines))
    log.warn("disk usage at %d%%", 91)
    for line in memory.lines:
        print(json.loads(line))

    strict = Config()
    strict.setup("local", with_sink(UnavailableSink()))
    try:
        Logger(strict).error("this write fails")
    except SinkWriteError as exc:
        print(f"SinkWriteError: {exc}")

    lenient = Config()
    lenient.setup("local", with_sink(UnavailableSink()), with_swallow_errors())
    Logger(lenient).error("this write fails quietly")
    print("swallowed write failure; see the cloudslog stdlib logger for details")
