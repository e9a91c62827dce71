"""VendorCache Metrics Collector - Cache Hit/Miss and Latency Tracking.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict

logger = logging.getLogger(__name__)


@dataclass
class CacheStats:
    """Cache statistics snapshot.

    Attributes:
        hits: Reads that found a live entry
        misses: Reads that found nothing
        hit_rate: hits / total_requests, 0.0 before the first read
        avg_response_time: Mean operation latency in ms over the window
        total_requests: Number of reads
    """

    hits: int = 0
    misses: int = 0
    hit_rate: float = 0.0
    avg_response_time: float = 0.0
    total_requests: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hit_rate,
            "avg_response_time": self.avg_response_time,
            "total_requests": self.total_requests,
        }


class CacheStatsCollector:
    """Collects cache read counters and operation latencies.

    Counters only grow (until ``reset``). Latencies live in a bounded
    window; once full, the oldest sample is dropped.

    Example:
        collector = CacheStatsCollector()
        collector.record_read(hit=True)
        with Timer(collector):
            do_work()

        stats = collector.snapshot()
        print(f"Hit rate: {stats.hit_rate:.2%}")
    """

    def __init__(self, max_samples: int = 1000):
        """Initialize collector.

        Args:
            max_samples: Latency window capacity
        """
        self.max_samples = max_samples

        self._hits = 0
        self._misses = 0
        self._total_requests = 0
        self._latencies: Deque[float] = deque(maxlen=max_samples)

        self._lock = threading.RLock()

    def record_read(self, hit: bool) -> None:
        """Record a read and its outcome as one update.

        Args:
            hit: Whether the read found a live entry
        """
        with self._lock:
            self._total_requests += 1
            if hit:
                self._hits += 1
            else:
                self._misses += 1

    def record_latency(self, ms: float) -> None:
        """Record operation latency.

        Args:
            ms: Latency in milliseconds
        """
        with self._lock:
            self._latencies.append(ms)

    @property
    def sample_count(self) -> int:
        """Number of latency samples in the window."""
        return len(self._latencies)

    def _calculate_latency_avg(self) -> float:
        if not self._latencies:
            return 0.0
        return sum(self._latencies) / len(self._latencies)

    def snapshot(self) -> CacheStats:
        """Get current statistics.

        Returns:
            CacheStats instance
        """
        with self._lock:
            total = self._total_requests
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                hit_rate=self._hits / total if total > 0 else 0.0,
                avg_response_time=self._calculate_latency_avg(),
                total_requests=total,
            )

    def reset(self) -> None:
        """Reset all statistics."""
        with self._lock:
            self._hits = 0
            self._misses = 0
            self._total_requests = 0
            self._latencies.clear()

    def __repr__(self) -> str:
        stats = self.snapshot()
        return f"CacheStatsCollector(hits={stats.hits}, hit_rate={stats.hit_rate:.2%})"


class Timer:
    """Context manager that records elapsed time into a collector.

    The sample is recorded whether or not the body raises.
    """

    def __init__(self, collector: CacheStatsCollector):
        """Initialize timer.

        Args:
            collector: Stats collector
        """
        self._collector = collector
        self._start: float = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        elapsed_ms = (time.perf_counter() - self._start) * 1000
        self._collector.record_latency(elapsed_ms)


__all__ = ["CacheStats", "CacheStatsCollector", "Timer"]
