"""Latency tracking for diagram load, layout and routing passes."""

import functools
import time
from collections import defaultdict, deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Callable, Deque, Dict, Optional

from erdiagram.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_WINDOW = 1000


@dataclass
class TimingStat:
    """Rolling statistics for one timed operation."""

    window: int = DEFAULT_WINDOW
    count: int = 0
    total_ms: float = 0.0
    min_ms: float = float("inf")
    max_ms: float = 0.0
    recent: Deque[float] = field(default_factory=deque)

    def __post_init__(self) -> None:
        self.recent = deque(self.recent, maxlen=self.window)

    def add(self, duration_ms: float) -> None:
        """Add a timing measurement."""
        self.count += 1
        self.total_ms += duration_ms
        self.min_ms = min(self.min_ms, duration_ms)
        self.max_ms = max(self.max_ms, duration_ms)
        self.recent.append(duration_ms)

    @property
    def mean_ms(self) -> float:
        """Mean latency over every recorded call."""
        return self.total_ms / self.count if self.count > 0 else 0.0

    def percentile(self, p: float) -> float:
        """Percentile over the recent window (p in [0, 100])."""
        if not self.recent:
            return 0.0
        ordered = sorted(self.recent)
        idx = min(int(len(ordered) * p / 100), len(ordered) - 1)
        return ordered[idx]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "count": self.count,
            "total_ms": round(self.total_ms, 3),
            "mean_ms": round(self.mean_ms, 3),
            "min_ms": round(self.min_ms, 3) if self.count else 0.0,
            "max_ms": round(self.max_ms, 3),
            "p50_ms": round(self.percentile(50), 3),
            "p95_ms": round(self.percentile(95), 3),
        }


class LatencyTracker:
    """Per-operation latency tracker with a bounded sample window.

    Routing runs on every drag frame, so only the most recent ``window``
    samples per operation are kept.
    """

    def __init__(self, window: int = DEFAULT_WINDOW):
        self._window = window
        self._stats: Dict[str, TimingStat] = defaultdict(
            lambda: TimingStat(window=self._window)
        )
        self._lock = Lock()

    def record(self, operation: str, duration_ms: float) -> None:
        """Record one measurement for ``operation``."""
        with self._lock:
            self._stats[operation].add(duration_ms)

    def get_stats(self, operation: Optional[str] = None) -> Dict[str, Any]:
        """Get statistics for one operation, or for all of them."""
        with self._lock:
            if operation:
                stat = self._stats.get(operation)
                return {operation: stat.to_dict() if stat else TimingStat().to_dict()}
            return {op: stat.to_dict() for op, stat in self._stats.items()}

    def reset(self) -> None:
        """Reset all statistics."""
        with self._lock:
            self._stats.clear()


_global_tracker = LatencyTracker()


def get_latency_tracker() -> LatencyTracker:
    """Get the global latency tracker instance."""
    return _global_tracker


@contextmanager
def TimingContext(operation: str, log_level: str = "debug"):
    """
    Context manager for timing a block of code.

    Example:
        with TimingContext("diagram.load"):
            session.load(snapshot)

    Args:
        operation: Name of the operation being timed
        log_level: Logging level for the timing message
    """
    start_time = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - start_time) * 1000
        _global_tracker.record(operation, duration_ms)

        log_fn = getattr(logger, log_level, logger.debug)
        log_fn(f"{operation} completed in {duration_ms:.3f}ms")


def timed(operation: Optional[str] = None, log_level: str = "debug"):
    """
    Decorator for timing function execution.

    Example:
        @timed("diagram.layout")
        def layout(nodes, edges):
            ...

    Args:
        operation: Name of the operation (defaults to function name)
        log_level: Logging level for the timing message
    """

    def decorator(func: Callable) -> Callable:
        op_name = operation or f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                duration_ms = (time.perf_counter() - start_time) * 1000
                _global_tracker.record(op_name, duration_ms)

                log_fn = getattr(logger, log_level, logger.debug)
                log_fn(f"{op_name} completed in {duration_ms:.3f}ms")

        return wrapper

    return decorator
