"""Tests for latency tracking."""

import pytest

from erdiagram.utils.timing import LatencyTracker, TimingContext, get_latency_tracker, timed


def test_tracker_stats():
    tracker = LatencyTracker(window=3)
    for value in (4.0, 1.0, 2.0, 3.0):
        tracker.record("op", value)

    stats = tracker.get_stats("op")["op"]

    assert stats["count"] == 4
    assert stats["total_ms"] == 10.0
    assert stats["min_ms"] == 1.0
    assert stats["max_ms"] == 4.0
    # only the last three samples feed the percentiles
    assert stats["p50_ms"] == 2.0
    assert tracker.get_stats("missing")["missing"]["count"] == 0


def test_timing_context_and_decorator():
    tracker = get_latency_tracker()
    tracker.reset()

    with TimingContext("block"):
        pass

    @timed("decorated")
    def work():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        work()

    stats = tracker.get_stats()
    assert stats["block"]["count"] == 1
    assert stats["decorated"]["count"] == 1
