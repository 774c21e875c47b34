"""test_config.py - Unit tests for the initialise-once Config.

Covers:
    - Defaults before setup()
    - First setup() succeeds, second raises and leaves state unchanged
    - Options apply in order
    - with_log_level() parsing, fallback and strict mode
    - A failing option leaves the Config uninitialised
    - Concurrent setup(): exactly one winner
"""

import io
import threading

import pytest

from cloudslog.config import (
    Config,
    with_log_level,
    with_severity,
    with_sink,
    with_swallow_errors,
)
from cloudslog.errors import AlreadyInitializedError, InvalidSeverityName
from cloudslog.severity import Severity
from cloudslog.sink import StreamSink


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestConfigLifecycle:
    def setup_method(self):
        self.config = Config()

    def test_config_defaults_before_setup(self):
        """An unconfigured Config logs everything from DEBUG to stdout."""
        assert self.config.initialized is False
        assert self.config.reporting_id == ""
        assert self.config.threshold is Severity.DEBUG
        assert isinstance(self.config.sink, StreamSink)
        assert self.config.swallow_errors is False

    def test_config_setup_marks_initialized(self):
        self.config.setup("local")
        assert self.config.initialized is True
        assert self.config.reporting_id == "local"

    def test_config_second_setup_raises_and_keeps_first_values(self):
        """The rejected call does not touch reporting id or threshold."""
        self.config.setup("first", with_severity(Severity.WARNING))

        with pytest.raises(AlreadyInitializedError):
            self.config.setup("second", with_severity(Severity.DEBUG))

        assert self.config.reporting_id == "first"
        assert self.config.threshold is Severity.WARNING

    def test_config_enabled_reads_threshold(self):
        self.config.setup("local", with_severity(Severity.INFO))
        assert self.config.enabled(Severity.DEBUG) is False
        assert self.config.enabled(Severity.INFO) is True
        assert self.config.enabled(Severity.ERROR) is True

    def test_config_enabled_before_setup_uses_debug_threshold(self):
        assert self.config.enabled(Severity.DEFAULT) is False
        assert self.config.enabled(Severity.DEBUG) is True


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class TestConfigOptions:
    def setup_method(self):
        self.config = Config()

    def test_options_apply_in_order(self):
        """A later option overrides an earlier one."""
        self.config.setup(
            "local",
            with_severity(Severity.ERROR),
            with_log_level("notice"),
        )
        assert self.config.threshold is Severity.NOTICE

    def test_with_log_level_is_case_insensitive(self):
        self.config.setup("local", with_log_level("Critical"))
        assert self.config.threshold is Severity.CRITICAL

    def test_with_log_level_unknown_name_sets_default(self):
        """Unknown names enable everything rather than failing setup."""
        self.config.setup("local", with_log_level("loud"))
        assert self.config.threshold is Severity.DEFAULT
        assert self.config.enabled(Severity.DEFAULT) is True

    def test_with_log_level_strict_failure_leaves_config_untouched(self):
        """A raising option aborts setup; a later setup() can still succeed."""
        with pytest.raises(InvalidSeverityName):
            self.config.setup(
                "local",
                with_severity(Severity.ERROR),
                with_log_level("loud", strict=True),
            )

        assert self.config.initialized is False
        assert self.config.reporting_id == ""
        assert self.config.threshold is Severity.DEBUG

        self.config.setup("retry", with_log_level("error", strict=True))
        assert self.config.threshold is Severity.ERROR

    def test_with_severity_accepts_int(self):
        self.config.setup("local", with_severity(4))
        assert self.config.threshold is Severity.WARNING

    def test_with_sink_wraps_stream(self):
        stream = io.StringIO()
        self.config.setup("local", with_sink(stream))
        assert isinstance(self.config.sink, StreamSink)
        assert self.config.sink.stream is stream

    def test_with_swallow_errors(self):
        self.config.setup("local", with_swallow_errors())
        assert self.config.swallow_errors is True

    def test_custom_option_sees_draft_fields(self):
        """A hand-written option reads and writes the four draft fields."""
        seen = {}

        def raise_to_error_in_prod(cfg) -> None:
            seen.update(
                reporting_id=cfg.reporting_id,
                threshold=cfg.threshold,
                swallow_errors=cfg.swallow_errors,
                sink=cfg.sink,
            )
            if cfg.reporting_id.endswith("-prod"):
                cfg.threshold = Severity.ERROR

        self.config.setup("shop-prod", with_severity(Severity.INFO), raise_to_error_in_prod)

        assert seen["reporting_id"] == "shop-prod"
        assert seen["threshold"] is Severity.INFO
        assert seen["swallow_errors"] is False
        assert isinstance(seen["sink"], StreamSink)
        assert self.config.threshold is Severity.ERROR


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------


class TestConfigConcurrentSetup:
    def test_concurrent_setup_has_exactly_one_winner(self):
        """N racing setup() calls: one succeeds, N-1 see AlreadyInitializedError."""
        config = Config()
        n = 16
        barrier = threading.Barrier(n)
        levels = list(Severity)
        winners = []
        losers = []
        lock = threading.Lock()

        def worker(i: int):
            barrier.wait()
            try:
                config.setup(f"project-{i}", with_severity(levels[i % len(levels)]))
            except AlreadyInitializedError:
                with lock:
                    losers.append(i)
            else:
                with lock:
                    winners.append(i)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(n)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(winners) == 1
        assert len(losers) == n - 1

        # The surviving configuration is the winner's, unmixed.
        winner = winners[0]
        assert config.reporting_id == f"project-{winner}"
        assert config.threshold is levels[winner % len(levels)]
