"""VendorCache Cache - In-Memory TTL Cache.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import math
import os
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from vendorcache.cache.entry import CacheEntry
from vendorcache.cache.namespace import Namespace, compile_pattern, make_key
from vendorcache.metrics.collector import CacheStats, CacheStatsCollector, Timer
from vendorcache.metrics.system import process_memory

logger = logging.getLogger(__name__)


@dataclass
class CacheConfig:
    """Cache configuration.

    Attributes:
        name: Cache name, used in logs
        default_ttl: TTL in seconds when a call passes none
        default_prefix: Namespace for calls that pass no prefix
        cleanup_interval: Seconds between housekeeping sweeps (0 disables)
        max_latency_samples: Size of the latency window
    """

    name: str = "cache"
    default_ttl: float = 300
    default_prefix: str = "wedding"
    cleanup_interval: float = 300.0
    max_latency_samples: int = 1000

    def __post_init__(self):
        if self.default_ttl <= 0:
            raise ValueError(f"default_ttl must be positive, got {self.default_ttl}")
        if self.cleanup_interval < 0:
            raise ValueError(f"cleanup_interval must be >= 0, got {self.cleanup_interval}")
        if self.max_latency_samples <= 0:
            raise ValueError(
                f"max_latency_samples must be positive, got {self.max_latency_samples}"
            )

    @classmethod
    def from_env(cls, prefix: str = "VENDORCACHE_") -> "CacheConfig":
        """Load configuration from environment variables.

        Reads ``<prefix>NAME``, ``<prefix>DEFAULT_TTL``,
        ``<prefix>DEFAULT_PREFIX``, ``<prefix>CLEANUP_INTERVAL`` and
        ``<prefix>MAX_LATENCY_SAMPLES``; unset variables keep their defaults.

        Args:
            prefix: Environment variable prefix

        Returns:
            CacheConfig instance
        """
        defaults = cls()
        return cls(
            name=os.getenv(f"{prefix}NAME", defaults.name),
            default_ttl=float(os.getenv(f"{prefix}DEFAULT_TTL", defaults.default_ttl)),
            default_prefix=os.getenv(f"{prefix}DEFAULT_PREFIX", defaults.default_prefix),
            cleanup_interval=float(
                os.getenv(f"{prefix}CLEANUP_INTERVAL", defaults.cleanup_interval)
            ),
            max_latency_samples=int(
                os.getenv(f"{prefix}MAX_LATENCY_SAMPLES", defaults.max_latency_samples)
            ),
        )


def _finite_ttl(ttl: Any) -> float:
    ttl = float(ttl)
    if not math.isfinite(ttl):
        raise ValueError(f"TTL must be finite, got {ttl}")
    return ttl


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


class MemoryCache:
    """Process-local key/value cache with per-entry TTL.

    Features:
    - Prefix namespacing (``prefix:key``)
    - Lazy expiry on read plus a periodic housekeeping sweep
    - Glob-style bulk deletion
    - Hit/miss and latency statistics
    - Thread-safe operations

    No operation raises for missing or expired keys, and failures inside
    an operation are logged and turned into a neutral result (``default``,
    ``None``, ``False`` or ``0``). A broken cache costs misses, never
    requests.

    Example:
        cache = MemoryCache(CacheConfig(default_ttl=300))

        cache.set("vendor:7", vendor, ttl=1800, prefix="vendors")
        vendor = cache.get("vendor:7", prefix="vendors")
        cache.delete_pattern("*", prefix="vendors")

        cache.stop()
    """

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize cache and start housekeeping.

        Args:
            config: Cache configuration
            clock: Monotonic clock returning seconds
        """
        self.config = config or CacheConfig()
        self._clock = clock

        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._stats = CacheStatsCollector(max_samples=self.config.max_latency_samples)
        self._connected = False

        self._cleanup_thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

        self.start()

    @property
    def is_connected(self) -> bool:
        return self._connected

    def start(self) -> None:
        """Connect the cache and start the housekeeping sweep."""
        self._connected = True

        if self._cleanup_thread is not None or not self.config.cleanup_interval:
            logger.info(f"Cache {self.config.name} started")
            return

        self._stop_event.clear()
        self._cleanup_thread = threading.Thread(
            target=self._cleanup_loop,
            daemon=True,
            name=f"Cache-{self.config.name}-cleanup",
        )
        self._cleanup_thread.start()
        logger.info(f"Cache {self.config.name} started")

    def stop(self) -> None:
        """Stop the sweep, drop all entries and disconnect."""
        self._stop_event.set()
        if self._cleanup_thread:
            self._cleanup_thread.join(timeout=5.0)
            self._cleanup_thread = None

        with self._lock:
            self._connected = False
            self._entries.clear()
        logger.info(f"Cache {self.config.name} stopped")

    def _make_key(self, key: str, prefix: Optional[str]) -> str:
        return make_key(key, prefix or self.config.default_prefix)

    def _resolve_ttl(self, ttl: Optional[float]) -> float:
        # None and 0 both mean "use the default"
        return _finite_ttl(ttl) if ttl else self.config.default_ttl

    def _live_entry(self, cache_key: str, now: float) -> Optional[CacheEntry]:
        """Return the entry if present and unexpired, evicting it if expired.

        Caller must hold the lock.
        """
        entry = self._entries.get(cache_key)
        if entry is None:
            return None
        if entry.is_expired(now):
            del self._entries[cache_key]
            return None
        return entry

    def get(
        self,
        key: str,
        default: Any = None,
        *,
        prefix: Optional[str] = None,
        ttl: Optional[float] = None,
    ) -> Any:
        """Get value from cache.

        Args:
            key: Logical key
            default: Returned when the key is absent or expired
            prefix: Namespace prefix
            ttl: Accepted for symmetry with ``set``; reads never change expiry

        Returns:
            Cached value or default
        """
        if not self._connected:
            return default

        cache_key = self._make_key(key, prefix)

        try:
            with self._lock, Timer(self._stats):
                entry = self._live_entry(cache_key, self._clock())
        except Exception as e:
            logger.error(f"Cache get error for {cache_key}: {e}")
            self._stats.record_read(hit=False)
            return default

        self._stats.record_read(hit=entry is not None)
        if entry is None:
            return default
        return entry.value

    def set(
        self,
        key: str,
        value: Any,
        *,
        ttl: Optional[float] = None,
        prefix: Optional[str] = None,
        compress: bool = False,
    ) -> None:
        """Set value in cache, replacing any existing entry.

        Args:
            key: Logical key
            value: Value to cache
            ttl: TTL in seconds (default from config)
            prefix: Namespace prefix
            compress: Reserved; currently ignored
        """
        if not self._connected:
            return

        cache_key = self._make_key(key, prefix)

        try:
            with self._lock, Timer(self._stats):
                entry = CacheEntry.create(cache_key, value, self._resolve_ttl(ttl), self._clock())
                self._entries[cache_key] = entry
        except Exception as e:
            logger.error(f"Cache set error for {cache_key}: {e}")

    def delete(self, key: str, *, prefix: Optional[str] = None) -> None:
        """Delete key from cache. Absent keys are ignored.

        Args:
            key: Logical key
            prefix: Namespace prefix
        """
        if not self._connected:
            return

        cache_key = self._make_key(key, prefix)

        try:
            with self._lock, Timer(self._stats):
                self._entries.pop(cache_key, None)
        except Exception as e:
            logger.error(f"Cache delete error for {cache_key}: {e}")

    def delete_pattern(self, pattern: str, *, prefix: Optional[str] = None) -> None:
        """Delete every key matching a glob-style pattern.

        The pattern is prefixed like a key and must match the whole
        namespaced key. ``*`` matches any run of characters; everything
        else is literal.

        Args:
            pattern: Pattern over logical keys, e.g. ``"vendors:*"``
            prefix: Namespace prefix
        """
        if not self._connected:
            return

        cache_pattern = self._make_key(pattern, prefix)

        try:
            regex = compile_pattern(cache_pattern)
            with self._lock, Timer(self._stats):
                doomed = [k for k in self._entries if regex.fullmatch(k)]
                for k in doomed:
                    del self._entries[k]
        except Exception as e:
            logger.error(f"Cache delete pattern error for {cache_pattern}: {e}")
            return

        if doomed:
            logger.debug(f"Deleted {len(doomed)} keys matching {cache_pattern}")

    def exists(self, key: str, *, prefix: Optional[str] = None) -> bool:
        """Check if key exists and is unexpired. Does not count as a read.

        Args:
            key: Logical key
            prefix: Namespace prefix

        Returns:
            True if a live entry exists
        """
        if not self._connected:
            return False

        cache_key = self._make_key(key, prefix)

        try:
            with self._lock, Timer(self._stats):
                return self._live_entry(cache_key, self._clock()) is not None
        except Exception as e:
            logger.error(f"Cache exists error for {cache_key}: {e}")
            return False

    def increment(
        self,
        key: str,
        *,
        ttl: Optional[float] = None,
        prefix: Optional[str] = None,
    ) -> int:
        """Increment an integer counter.

        Absent, expired and non-integer values count as 0. The entry is
        stored with a fresh TTL on every call, so the window restarts each
        time; call ``expire`` afterwards to pin a different expiry.

        Args:
            key: Logical key
            ttl: TTL in seconds (default from config)
            prefix: Namespace prefix

        Returns:
            New value, or 0 on failure
        """
        if not self._connected:
            return 0

        cache_key = self._make_key(key, prefix)

        try:
            with self._lock, Timer(self._stats):
                now = self._clock()
                entry = self._live_entry(cache_key, now)
                new_value = (_as_int(entry.value) if entry is not None else 0) + 1
                self._entries[cache_key] = CacheEntry.create(
                    cache_key, new_value, self._resolve_ttl(ttl), now
                )
                return new_value
        except Exception as e:
            logger.error(f"Cache increment error for {cache_key}: {e}")
            return 0

    def expire(self, key: str, ttl: float, *, prefix: Optional[str] = None) -> None:
        """Restart a live entry's TTL window. Absent keys are ignored.

        Args:
            key: Logical key
            ttl: New TTL in seconds, counted from now
            prefix: Namespace prefix
        """
        if not self._connected:
            return

        cache_key = self._make_key(key, prefix)

        try:
            with self._lock, Timer(self._stats):
                now = self._clock()
                entry = self._live_entry(cache_key, now)
                if entry is not None:
                    entry.refresh(_finite_ttl(ttl), now)
        except Exception as e:
            logger.error(f"Cache expire error for {cache_key}: {e}")

    def namespace(self, prefix: str, default_ttl: Optional[float] = None) -> Namespace:
        """Get a view of this cache bound to ``prefix``.

        Args:
            prefix: Namespace prefix
            default_ttl: TTL for namespace writes that pass none

        Returns:
            Namespace instance
        """
        return Namespace(self, prefix, default_ttl=default_ttl)

    def keys(self) -> List[str]:
        """Get stored namespaced keys, including expired ones not yet evicted."""
        with self._lock:
            return list(self._entries.keys())

    def size(self) -> int:
        """Get stored entry count."""
        with self._lock:
            return len(self._entries)

    def cleanup_expired(self) -> int:
        """Remove expired entries.

        Returns:
            Number removed
        """
        with self._lock:
            now = self._clock()
            expired = [k for k, e in self._entries.items() if e.is_expired(now)]
            for k in expired:
                del self._entries[k]

        if expired:
            logger.info(f"Cleaned up {len(expired)} expired cache entries")
        return len(expired)

    def _cleanup_loop(self) -> None:
        """Background cleanup loop."""
        while not self._stop_event.wait(self.config.cleanup_interval):
            try:
                self.cleanup_expired()
            except Exception as e:
                logger.error(f"Cleanup error: {e}")

    def get_stats(self) -> CacheStats:
        """Get cache statistics.

        Returns:
            CacheStats snapshot
        """
        return self._stats.snapshot()

    def reset_stats(self) -> None:
        """Reset statistics."""
        self._stats.reset()

    def health_check(self) -> Dict[str, Any]:
        """Report cache health for an operational status endpoint.

        Returns:
            ``{"status": "healthy" | "unhealthy", "details": {...}}``
        """
        if not self._connected:
            return {
                "status": "unhealthy",
                "details": {"error": "Memory cache not connected"},
            }

        try:
            return {
                "status": "healthy",
                "details": {
                    "cache_type": "in-memory",
                    "cache_size": self.size(),
                    "stats": self.get_stats().to_dict(),
                    "memory": process_memory().to_megabytes(),
                },
            }
        except Exception as e:
            logger.error(f"Cache health check error: {e}")
            return {"status": "unhealthy", "details": {"error": str(e)}}

    def __len__(self) -> int:
        """Get entry count."""
        return self.size()

    def __enter__(self) -> "MemoryCache":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.stop()

    def __repr__(self) -> str:
        return f"MemoryCache(name={self.config.name!r}, entries={len(self._entries)})"


__all__ = ["MemoryCache", "CacheConfig", "CacheStats"]
