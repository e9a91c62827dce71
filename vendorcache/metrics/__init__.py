"""Metrics module - Cache statistics and request monitoring.

The FastAPI middleware lives in ``vendorcache.metrics.middleware`` and is
not imported here, so the core package works without the ``web`` extra.
"""

from vendorcache.metrics.collector import (
    CacheStats,
    CacheStatsCollector,
    Timer,
)
from vendorcache.metrics.requests import (
    PerformanceMonitor,
    PerformanceStats,
)
from vendorcache.metrics.system import MemoryUsage, process_memory

__all__ = [
    "CacheStats",
    "CacheStatsCollector",
    "Timer",
    "PerformanceMonitor",
    "PerformanceStats",
    "MemoryUsage",
    "process_memory",
]
