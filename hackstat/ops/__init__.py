"""Operational helpers."""

from hackstat.ops.logging import configure_logging
from hackstat.ops.metrics import (
    BLEND_OUTCOMES,
    InMemoryMetricsRecorder,
    MetricsRecorder,
    blend_outcome_counts,
    get_metrics_recorder,
)

__all__ = [
    "configure_logging",
    "BLEND_OUTCOMES",
    "InMemoryMetricsRecorder",
    "MetricsRecorder",
    "blend_outcome_counts",
    "get_metrics_recorder",
]
