"""Prometheus metrics for the chord progression engine.

Exposes musical context in metrics so dashboards show how progressions are
built and edited, not just generic HTTP stats.

Metrics:
    progressions_generated_total     Counter by mode
    chord_swaps_total                Counter by swap mode (harmony/voicing)
    note_events_scheduled_total      Counter of emitted note events
    request_latency_seconds          Histogram of request latency by endpoint

Usage::

    from infrastructure.metrics import (
        LatencyTimer,
        record_generation,
        record_request,
        record_swap,
    )
"""

from __future__ import annotations

import logging
import time

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

logger = logging.getLogger(__name__)

_REGISTRY = CollectorRegistry()

progressions_generated_total = Counter(
    "cpe_progressions_generated_total",
    "Progressions generated, by mode",
    ["mode"],
    registry=_REGISTRY,
)

chord_swaps_total = Counter(
    "cpe_chord_swaps_total",
    "Smart swaps performed, by swap mode",
    ["swap_mode"],
    registry=_REGISTRY,
)

note_events_scheduled_total = Counter(
    "cpe_note_events_scheduled_total",
    "Note events emitted by the grouping scheduler",
    registry=_REGISTRY,
)

request_latency_seconds = Histogram(
    "cpe_request_latency_seconds",
    "Request latency in seconds",
    ["endpoint"],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
    registry=_REGISTRY,
)

logger.info("Prometheus metrics registry initialized")


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def record_generation(mode: str) -> None:
    """Increment the generated-progressions counter for a mode."""
    progressions_generated_total.labels(mode=mode).inc()


def record_swap(swap_mode: str) -> None:
    """Increment the smart-swap counter.

    Args:
        swap_mode: "harmony" or "voicing".
    """
    chord_swaps_total.labels(swap_mode=swap_mode).inc()


def record_scheduled_events(count: int) -> None:
    """Add ``count`` emitted note events."""
    if count > 0:
        note_events_scheduled_total.inc(count)


def record_request(*, endpoint: str, latency_seconds: float) -> None:
    """Record a completed request.

    Args:
        endpoint: Route path, e.g. "/progressions/swap".
        latency_seconds: Wall-clock time in seconds.
    """
    request_latency_seconds.labels(endpoint=endpoint).observe(latency_seconds)


def get_metrics_response() -> tuple[bytes, str]:
    """Generate Prometheus text exposition format.

    Returns:
        Tuple of (body_bytes, content_type_string).
    """
    return generate_latest(_REGISTRY), CONTENT_TYPE_LATEST


class LatencyTimer:
    """Context manager for measuring latency.

    Usage::

        with LatencyTimer() as t:
            progression = generate_progression("C", "major")
        record_request(endpoint="/progressions/generate", latency_seconds=t.elapsed)
    """

    def __init__(self) -> None:
        """Initialize timer."""
        self._start: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> LatencyTimer:
        """Start timing."""
        self._start = time.perf_counter()
        return self

    def __exit__(self, *_: object) -> None:
        """Stop timing and record elapsed."""
        self.elapsed = time.perf_counter() - self._start
