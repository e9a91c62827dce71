"""VendorCache Namespace - Key Prefixing and Pattern Matching.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import re
from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from vendorcache.cache.cache import MemoryCache

SEPARATOR = ":"
WILDCARD = "*"


def make_key(key: str, prefix: str) -> str:
    """Make namespaced key.

    Args:
        key: Logical key
        prefix: Namespace prefix

    Returns:
        ``prefix:key``
    """
    return f"{prefix}{SEPARATOR}{key}"


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a glob-like pattern where ``*`` matches any run of characters.

    Everything other than ``*`` is matched literally, so ``v1.2+`` only
    matches the text ``v1.2+``. Use ``fullmatch`` on the result.

    Args:
        pattern: Pattern over full namespaced keys

    Returns:
        Compiled regular expression
    """
    parts = [re.escape(part) for part in pattern.split(WILDCARD)]
    return re.compile(".*".join(parts), re.DOTALL)


class Namespace:
    """Cache view with a bound prefix.

    Namespaces give logical separation of entries sharing one cache,
    e.g. vendors vs. search results. A namespace owns no storage; every
    call goes to the parent cache with the prefix filled in.

    Example:
        vendors = cache.namespace("vendors", default_ttl=1800)
        vendors.set("vendor:7", {"name": "Rose Hall"})
        vendors.clear()  # search:* entries are untouched
    """

    def __init__(
        self,
        cache: "MemoryCache",
        prefix: str,
        default_ttl: Optional[float] = None,
    ):
        """Initialize namespace.

        Args:
            cache: Parent cache
            prefix: Key prefix
            default_ttl: TTL used when a call passes none
        """
        self._cache = cache
        self.prefix = prefix
        self.default_ttl = default_ttl

    def _ttl(self, ttl: Optional[float]) -> Optional[float]:
        return ttl if ttl is not None else self.default_ttl

    def get(self, key: str, default: Any = None) -> Any:
        return self._cache.get(key, default, prefix=self.prefix)

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        self._cache.set(key, value, ttl=self._ttl(ttl), prefix=self.prefix)

    def delete(self, key: str) -> None:
        self._cache.delete(key, prefix=self.prefix)

    def delete_pattern(self, pattern: str) -> None:
        self._cache.delete_pattern(pattern, prefix=self.prefix)

    def exists(self, key: str) -> bool:
        return self._cache.exists(key, prefix=self.prefix)

    def increment(self, key: str, ttl: Optional[float] = None) -> int:
        return self._cache.increment(key, ttl=self._ttl(ttl), prefix=self.prefix)

    def expire(self, key: str, ttl: float) -> None:
        self._cache.expire(key, ttl, prefix=self.prefix)

    def clear(self) -> None:
        """Remove every entry in this namespace."""
        self._cache.delete_pattern(WILDCARD, prefix=self.prefix)

    def __contains__(self, key: str) -> bool:
        return self.exists(key)

    def __repr__(self) -> str:
        return f"Namespace(prefix={self.prefix!r})"


__all__ = ["Namespace", "make_key", "compile_pattern"]
