"""Cache module - Core caching functionality.

This module provides the in-memory cache, namespacing helpers and the
vendor-directory caching layer.
"""

from vendorcache.cache.entry import CacheEntry
from vendorcache.cache.namespace import (
    Namespace,
    compile_pattern,
    make_key,
)
from vendorcache.cache.cache import (
    MemoryCache,
    CacheConfig,
    CacheStats,
)
from vendorcache.cache.vendors import (
    VendorCache,
    canonical_filters,
)

__all__ = [
    "CacheEntry",
    "Namespace",
    "compile_pattern",
    "make_key",
    "MemoryCache",
    "CacheConfig",
    "CacheStats",
    "VendorCache",
    "canonical_filters",
]
