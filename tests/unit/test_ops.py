"""Unit tests for logging setup and metrics."""

import logging

import pytest

from hackstat.ops import (
    BLEND_OUTCOMES,
    InMemoryMetricsRecorder,
    blend_outcome_counts,
    configure_logging,
    get_metrics_recorder,
)


@pytest.fixture
def restore_loggers(monkeypatch):
    monkeypatch.delenv("HACKSTAT_LOG_LEVEL", raising=False)
    root = logging.getLogger()
    aiohttp_logger = logging.getLogger("aiohttp")
    saved = (root.level, list(root.handlers), aiohttp_logger.level)
    yield root
    root.setLevel(saved[0])
    root.handlers = saved[1]
    aiohttp_logger.setLevel(saved[2])


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level_from_env(self, monkeypatch, restore_loggers):
        monkeypatch.setenv("HACKSTAT_LOG_LEVEL", "debug")
        configure_logging()

        assert restore_loggers.level == logging.DEBUG
        assert logging.getLogger("aiohttp").level == logging.WARNING

    def test_explicit_level_wins(self, monkeypatch, restore_loggers):
        monkeypatch.setenv("HACKSTAT_LOG_LEVEL", "debug")
        configure_logging(level="error")

        assert restore_loggers.level == logging.ERROR
        assert logging.getLogger("aiohttp").level == logging.ERROR

    @pytest.mark.parametrize("name", ["chatty", "BASIC_FORMAT"])
    def test_unknown_level_defaults_to_info(self, restore_loggers, name):
        configure_logging(level=name)
        assert restore_loggers.level == logging.INFO

    def test_run_id_in_format(self, restore_loggers):
        configure_logging(run_id="abc")
        assert "[run_id=abc]" in restore_loggers.handlers[0].formatter._fmt


class TestMetricsRecorder:
    """Tests for InMemoryMetricsRecorder."""

    def test_counters(self):
        metrics = InMemoryMetricsRecorder()
        metrics.increment("blend.applied")
        metrics.increment("blend.applied", 2)

        assert metrics.count("blend.applied") == 3
        assert metrics.count("blend.no_match") == 0
        assert metrics.snapshot()["counters"] == {"blend.applied": 3}

    def test_timings(self):
        metrics = InMemoryMetricsRecorder()
        metrics.timing("on_court.fetch_ms", 10)
        metrics.timing("on_court.fetch_ms", 30)

        summary = metrics.snapshot()["timings"]["on_court.fetch_ms"]
        assert summary == {"count": 2, "avg_ms": 20.0, "max_ms": 30.0}

    def test_reset(self):
        metrics = InMemoryMetricsRecorder()
        metrics.increment("x")
        metrics.timing("y", 1)
        metrics.reset()

        assert metrics.snapshot() == {"counters": {}, "timings": {}}

    def test_blend_outcome_counts(self):
        metrics = InMemoryMetricsRecorder()
        metrics.increment("blend.no_match")

        counts = blend_outcome_counts(metrics)
        assert set(counts) == set(BLEND_OUTCOMES)
        assert counts["blend.no_match"] == 1
        assert counts["blend.applied"] == 0

    def test_default_recorder_is_shared(self):
        assert get_metrics_recorder() is get_metrics_recorder()
