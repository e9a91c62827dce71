"""VendorCache - Caching and Request Monitoring for the Vendor Directory.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Two independent in-process components:
- MemoryCache: key/value store with per-entry TTL, prefix namespacing,
  pattern invalidation and hit/miss/latency statistics
- PerformanceMonitor: per-request latency and error-rate aggregation,
  fed by a hook at the end of every request

Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      VendorCache                         │
    ├──────────────────────────────────────────────────────────┤
    │  ┌─────────────┐  ┌─────────────┐  ┌─────────────┐       │
    │  │ VendorCache │  │  Namespace  │  │   Entry     │ CACHE │
    │  │ lists/search│  │  prefixing  │  │  TTL/expiry │ LAYER │
    │  └──────┬──────┘  └──────┬──────┘  └──────┬──────┘       │
    │         └────────────────┼────────────────┘              │
    │                   ┌──────┴──────┐                        │
    │                   │ MemoryCache │  sweep thread          │
    │                   └──────┬──────┘                        │
    │  ┌───────────────────────┴──────────────────────┐        │
    │  │ CacheStatsCollector   PerformanceMonitor     │ METRICS│
    │  │ hits/misses/latency   requests/errors        │ LAYER  │
    │  └──────────────────────────────────────────────┘        │
    └──────────────────────────────────────────────────────────┘

Example Usage:
    from vendorcache import MemoryCache, VendorCache, PerformanceMonitor

    cache = MemoryCache()
    cache.set("user:1", {"name": "Ada"}, ttl=300)
    user = cache.get("user:1")

    vendors = VendorCache(cache)
    vendors.set_vendor(7, {"name": "Rose Hall"})
    vendors.invalidate_vendor(7)

    monitor = PerformanceMonitor()
    monitor.record_request(120.0, has_error=False)
    print(monitor.get_stats().to_dict())

    cache.stop()
"""

__version__ = "1.0.0"
__author__ = "BlackRoad OS"

from vendorcache.cache.entry import CacheEntry
from vendorcache.cache.namespace import Namespace
from vendorcache.cache.cache import (
    MemoryCache,
    CacheConfig,
)
from vendorcache.cache.vendors import VendorCache
from vendorcache.metrics.collector import (
    CacheStats,
    CacheStatsCollector,
)
from vendorcache.metrics.requests import (
    PerformanceMonitor,
    PerformanceStats,
)
from vendorcache.metrics.system import MemoryUsage

__all__ = [
    # Cache
    "MemoryCache",
    "CacheConfig",
    "CacheEntry",
    "Namespace",
    "VendorCache",
    # Metrics
    "CacheStats",
    "CacheStatsCollector",
    "PerformanceMonitor",
    "PerformanceStats",
    "MemoryUsage",
]
