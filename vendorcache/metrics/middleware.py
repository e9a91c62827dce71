"""VendorCache Middleware - Request Tracking Hook for FastAPI.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, Response

from vendorcache.metrics.requests import PerformanceMonitor

logger = logging.getLogger(__name__)

ERROR_STATUS = 400


def install_request_tracking(app: FastAPI, monitor: PerformanceMonitor) -> None:
    """Register an HTTP middleware that feeds ``monitor`` after each request.

    Responses with status >= 400 count as errors, and so do requests whose
    handler raised. The exception is re-raised after recording.

    Args:
        app: FastAPI application
        monitor: Monitor receiving one sample per request
    """

    @app.middleware("http")
    async def track_request(request: Request, call_next):
        start = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception:
            monitor.record_request((time.perf_counter() - start) * 1000, has_error=True)
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000
        monitor.record_request(elapsed_ms, has_error=response.status_code >= ERROR_STATUS)
        return response

    logger.info("Request tracking installed")


__all__ = ["install_request_tracking"]
