"""VendorCache Vendors - Directory-Specific Caching Helpers.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Mapping, Optional

from vendorcache.cache.cache import MemoryCache

logger = logging.getLogger(__name__)

VENDOR_LIST_TTL = 300
FEATURED_TTL = 600
VENDOR_TTL = 1800
SEARCH_TTL = 1800

VENDORS_PREFIX = "vendors"
SEARCH_PREFIX = "search"


def canonical_filters(filters: Optional[Mapping[str, Any]]) -> str:
    """Serialize filter criteria so equal criteria give equal keys.

    Keys are sorted and ``None`` values dropped, so
    ``{"location": "Austin", "category": None}`` and ``{"location": "Austin"}``
    serialize the same. Keys are stringified first, so mixed key types
    still sort.
    """
    cleaned = {str(k): v for k, v in (filters or {}).items() if v is not None}
    return json.dumps(cleaned, sort_keys=True, separators=(",", ":"), default=str)


class VendorCache:
    """Vendor listing, vendor detail and search caches.

    Everything here is built on the plain cache primitives; there is no
    separate storage. Updating one vendor invalidates every cached vendor
    list as well, since any list may hold stale data for it.

    Example:
        vendors = VendorCache(cache)
        found = vendors.get_vendors({"category": "florist"})
        if found is None:
            found = load_vendors(...)
            vendors.set_vendors({"category": "florist"}, found)
    """

    def __init__(self, cache: MemoryCache):
        self._vendors = cache.namespace(VENDORS_PREFIX)
        self._search = cache.namespace(SEARCH_PREFIX, default_ttl=SEARCH_TTL)

    @staticmethod
    def _list_key(filters: Optional[Mapping[str, Any]]) -> str:
        return f"vendors:{canonical_filters(filters)}"

    def get_vendors(self, filters: Optional[Mapping[str, Any]] = None) -> Optional[List[Any]]:
        return self._vendors.get(self._list_key(filters))

    def set_vendors(self, filters: Optional[Mapping[str, Any]], vendors: List[Any]) -> None:
        self._vendors.set(self._list_key(filters), vendors, ttl=VENDOR_LIST_TTL)

    def get_featured_vendors(self) -> Optional[List[Any]]:
        return self._vendors.get("featured")

    def set_featured_vendors(self, vendors: List[Any]) -> None:
        self._vendors.set("featured", vendors, ttl=FEATURED_TTL)

    def get_vendor(self, vendor_id: int) -> Any:
        return self._vendors.get(f"vendor:{vendor_id}")

    def set_vendor(self, vendor_id: int, vendor: Any) -> None:
        self._vendors.set(f"vendor:{vendor_id}", vendor, ttl=VENDOR_TTL)

    def invalidate_vendor(self, vendor_id: int) -> None:
        """Drop one vendor and every cached vendor list."""
        self._vendors.delete(f"vendor:{vendor_id}")
        self._vendors.delete_pattern("vendors:*")
        logger.debug(f"Invalidated vendor {vendor_id} and vendor lists")

    def invalidate_all_vendors(self) -> None:
        """Drop everything in the vendors namespace, featured slot included."""
        self._vendors.clear()

    @staticmethod
    def _search_key(query: str, filters: Optional[Mapping[str, Any]]) -> str:
        return f"search:{query}:{canonical_filters(filters)}"

    def get_search_results(
        self,
        query: str,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> Optional[List[Any]]:
        return self._search.get(self._search_key(query, filters))

    def set_search_results(
        self,
        query: str,
        filters: Optional[Mapping[str, Any]],
        results: List[Any],
    ) -> None:
        self._search.set(self._search_key(query, filters), results)


__all__ = ["VendorCache", "canonical_filters"]
