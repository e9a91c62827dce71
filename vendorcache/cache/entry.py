"""VendorCache Entry - Cache Entry with Absolute Expiry.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class CacheEntry:
    """A cache entry with value and expiry.

    Timestamps come from the owning cache's clock (monotonic seconds),
    so an entry never reads the clock itself.

    Attributes:
        key: Namespaced cache key
        value: Cached value, returned unchanged
        expires_at: Clock reading after which the entry is absent
    """

    key: str
    value: Any
    expires_at: float

    @classmethod
    def create(cls, key: str, value: Any, ttl: float, now: float) -> "CacheEntry":
        """Create an entry expiring ``ttl`` seconds after ``now``.

        Args:
            key: Namespaced key
            value: Value to store
            ttl: TTL in seconds
            now: Current clock reading

        Returns:
            CacheEntry instance
        """
        return cls(key=key, value=value, expires_at=now + ttl)

    def is_expired(self, now: float) -> bool:
        """Check if entry has expired."""
        return now > self.expires_at

    def remaining_ttl(self, now: float) -> float:
        """Get remaining TTL in seconds."""
        return max(0.0, self.expires_at - now)

    def refresh(self, ttl: float, now: float) -> None:
        """Restart the TTL window from ``now``.

        Args:
            ttl: New TTL in seconds
            now: Current clock reading
        """
        self.expires_at = now + ttl

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "key": self.key,
            "value": self.value,
            "expires_at": self.expires_at,
        }

    def __repr__(self) -> str:
        return f"CacheEntry(key={self.key!r}, expires_at={self.expires_at:.3f})"


__all__ = ["CacheEntry"]
