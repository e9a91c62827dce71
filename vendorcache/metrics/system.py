"""VendorCache System - Process Memory Figures.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import psutil

_MB = 1024 * 1024


@dataclass
class MemoryUsage:
    """Memory used by the current process.

    Attributes:
        used: Resident set size in bytes
        total: Virtual memory size in bytes
    """

    used: int
    total: int

    def to_dict(self) -> Dict[str, int]:
        return {"used": self.used, "total": self.total}

    def to_megabytes(self) -> Dict[str, str]:
        """Render as rounded megabyte strings, e.g. ``{"used": "42MB"}``."""
        return {
            "used": f"{round(self.used / _MB)}MB",
            "total": f"{round(self.total / _MB)}MB",
        }


def process_memory() -> MemoryUsage:
    """Read memory figures for the running process."""
    info = psutil.Process().memory_info()
    return MemoryUsage(used=info.rss, total=info.vms)


__all__ = ["MemoryUsage", "process_memory"]
