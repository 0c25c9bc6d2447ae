"""Outcome counters and fetch timings for the blend and on-court paths."""

from dataclasses import dataclass
from typing import Dict
import threading

# Exactly one of these is counted per blended player.
BLEND_OUTCOMES = (
    "blend.applied",
    "blend.no_match",
    "blend.no_ratings",
    "blend.fetch_failed",
)


@dataclass
class _TimingStats:
    count: int = 0
    total_ms: float = 0.0
    max_ms: float = 0.0

    def add(self, value_ms: float) -> None:
        self.count += 1
        self.total_ms += value_ms
        self.max_ms = value_ms if self.count == 1 else max(self.max_ms, value_ms)

    def summary(self) -> Dict[str, float]:
        return {
            "count": self.count,
            "avg_ms": self.total_ms / self.count,
            "max_ms": self.max_ms,
        }


class MetricsRecorder:
    def increment(self, key: str, value: int = 1) -> None:
        raise NotImplementedError

    def timing(self, key: str, value_ms: float) -> None:
        raise NotImplementedError

    def count(self, key: str) -> int:
        raise NotImplementedError

    def snapshot(self) -> Dict[str, Dict]:
        raise NotImplementedError

    def reset(self) -> None:
        raise NotImplementedError


class InMemoryMetricsRecorder(MetricsRecorder):
    """Thread-safe recorder; timings keep running aggregates rather than samples."""

    def __init__(self) -> None:
        self._counters: Dict[str, int] = {}
        self._timings: Dict[str, _TimingStats] = {}
        self._lock = threading.Lock()

    def increment(self, key: str, value: int = 1) -> None:
        with self._lock:
            self._counters[key] = self._counters.get(key, 0) + int(value)

    def timing(self, key: str, value_ms: float) -> None:
        with self._lock:
            self._timings.setdefault(key, _TimingStats()).add(float(value_ms))

    def count(self, key: str) -> int:
        with self._lock:
            return self._counters.get(key, 0)

    def snapshot(self) -> Dict[str, Dict]:
        with self._lock:
            return {
                "counters": dict(self._counters),
                "timings": {key: stats.summary() for key, stats in self._timings.items()},
            }

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._timings.clear()


def blend_outcome_counts(recorder: MetricsRecorder) -> Dict[str, int]:
    """Per-outcome blend counts, zero-filled."""
    return {key: recorder.count(key) for key in BLEND_OUTCOMES}


_DEFAULT_RECORDER = InMemoryMetricsRecorder()


def get_metrics_recorder() -> MetricsRecorder:
    return _DEFAULT_RECORDER
