"""VendorCache Request Metrics - Per-Request Latency and Error Tracking.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass, field
from typing import Any, Dict

import psutil

from vendorcache.metrics.system import MemoryUsage, process_memory

logger = logging.getLogger(__name__)


@dataclass
class PerformanceStats:
    """Request metrics snapshot.

    Attributes:
        request_count: Completed requests
        average_response_time: Mean response time in ms
        error_rate: Percentage of requests flagged as errors
        memory_usage: Process memory at snapshot time
    """

    request_count: int = 0
    average_response_time: float = 0.0
    error_rate: float = 0.0
    memory_usage: MemoryUsage = field(default_factory=lambda: MemoryUsage(0, 0))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "request_count": self.request_count,
            "average_response_time": self.average_response_time,
            "error_rate": self.error_rate,
            "memory_usage": self.memory_usage.to_dict(),
        }


class PerformanceMonitor:
    """Aggregates response times and error counts across requests.

    ``record_request`` is the hook the HTTP layer calls once per finished
    request. Deciding what counts as an error is the caller's job.

    Example:
        monitor = PerformanceMonitor()
        monitor.record_request(120.0)
        monitor.record_request(340.0, has_error=True)
        monitor.get_stats().error_rate  # 50.0
    """

    def __init__(self):
        self._request_count = 0
        self._total_response_time = 0.0
        self._error_count = 0
        self._lock = threading.Lock()

    def record_request(self, response_time_ms: float, has_error: bool = False) -> None:
        """Record one completed request.

        Args:
            response_time_ms: Elapsed time in milliseconds
            has_error: Whether the request ended in an error
        """
        try:
            ms = float(response_time_ms)
        except (TypeError, ValueError):
            logger.error(f"Ignoring request with invalid response time: {response_time_ms!r}")
            return
        if not math.isfinite(ms):
            logger.error(f"Ignoring request with non-finite response time: {ms}")
            return

        with self._lock:
            self._request_count += 1
            self._total_response_time += ms
            if has_error:
                self._error_count += 1

    def get_stats(self) -> PerformanceStats:
        """Get current request metrics.

        Returns:
            PerformanceStats instance
        """
        with self._lock:
            count = self._request_count
            total = self._total_response_time
            errors = self._error_count

        return PerformanceStats(
            request_count=count,
            average_response_time=total / count if count > 0 else 0.0,
            error_rate=errors / count * 100 if count > 0 else 0.0,
            memory_usage=self._memory_usage(),
        )

    @staticmethod
    def _memory_usage() -> MemoryUsage:
        try:
            return process_memory()
        except psutil.Error as e:
            logger.warning(f"Process memory unavailable: {e}")
            return MemoryUsage(0, 0)

    def reset(self) -> None:
        """Reset all counters."""
        with self._lock:
            self._request_count = 0
            self._total_response_time = 0.0
            self._error_count = 0

    def __repr__(self) -> str:
        return f"PerformanceMonitor(requests={self._request_count}, errors={self._error_count})"


__all__ = ["PerformanceMonitor", "PerformanceStats"]
