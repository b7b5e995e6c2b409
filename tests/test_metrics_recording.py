"""Tests for infrastructure/metrics.py — Prometheus counter recording.

Verifies that:
- All public record_*() helpers increment the correct counter
- record_request() observes the latency histogram per endpoint
- get_metrics_response() renders the registry in text exposition format
- LatencyTimer measures elapsed time correctly

Counters are cumulative within the module registry, so every test compares
a before/after delta instead of absolute values.
"""

from __future__ import annotations

import time

from infrastructure import metrics as metrics_module

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_counter_value(counter, **labels) -> float:
    """Read current value of a (optionally labeled) counter."""
    if labels:
        return counter.labels(**labels)._value.get()
    return counter._value.get()


def _get_histogram_sum(histogram, **labels) -> float:
    """Read the sum of observations of a labeled histogram."""
    return histogram.labels(**labels)._sum.get()


# ---------------------------------------------------------------------------
# Counters
# ---------------------------------------------------------------------------


class TestRecordHelpers:
    def test_record_generation_by_mode(self) -> None:
        counter = metrics_module.progressions_generated_total
        before = _get_counter_value(counter, mode="dorian")
        metrics_module.record_generation("dorian")
        metrics_module.record_generation("dorian")
        assert _get_counter_value(counter, mode="dorian") == before + 2

    def test_record_swap_by_swap_mode(self) -> None:
        counter = metrics_module.chord_swaps_total
        harmony = _get_counter_value(counter, swap_mode="harmony")
        voicing = _get_counter_value(counter, swap_mode="voicing")
        metrics_module.record_swap("voicing")
        assert _get_counter_value(counter, swap_mode="voicing") == voicing + 1
        assert _get_counter_value(counter, swap_mode="harmony") == harmony

    def test_record_scheduled_events(self) -> None:
        counter = metrics_module.note_events_scheduled_total
        before = _get_counter_value(counter)
        metrics_module.record_scheduled_events(7)
        metrics_module.record_scheduled_events(0)
        assert _get_counter_value(counter) == before + 7

    def test_record_request_observes_latency(self) -> None:
        histogram = metrics_module.request_latency_seconds
        before = _get_histogram_sum(histogram, endpoint="/test")
        metrics_module.record_request(endpoint="/test", latency_seconds=0.25)
        assert _get_histogram_sum(histogram, endpoint="/test") == before + 0.25


class TestMetricsResponse:
    def test_exposition_contains_engine_metrics(self) -> None:
        metrics_module.record_generation("major")
        body, content_type = metrics_module.get_metrics_response()
        assert content_type.startswith("text/plain")
        text = body.decode()
        assert "cpe_progressions_generated_total" in text
        assert 'mode="major"' in text


# ---------------------------------------------------------------------------
# LatencyTimer
# ---------------------------------------------------------------------------


class TestLatencyTimer:
    def test_elapsed_starts_at_zero(self) -> None:
        assert metrics_module.LatencyTimer().elapsed == 0.0

    def test_measures_elapsed(self) -> None:
        with metrics_module.LatencyTimer() as timer:
            time.sleep(0.01)
        assert timer.elapsed >= 0.01
        assert timer.elapsed < 1.0

    def test_elapsed_set_on_exception(self) -> None:
        timer = metrics_module.LatencyTimer()
        try:
            with timer:
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert timer.elapsed > 0.0
