"""Tests for metrics collection.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import threading

import psutil
import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from vendorcache.metrics.collector import CacheStatsCollector, Timer
from vendorcache.metrics.middleware import install_request_tracking
from vendorcache.metrics.requests import PerformanceMonitor
from vendorcache.metrics.system import MemoryUsage, process_memory


class TestCacheStatsCollector:
    """Tests for the cache stats collector."""

    def test_latency_window_is_bounded(self):
        """Test oldest samples are dropped."""
        collector = CacheStatsCollector(max_samples=3)
        for ms in (100.0, 1.0, 2.0, 3.0):
            collector.record_latency(ms)

        assert collector.sample_count == 3
        assert collector.snapshot().avg_response_time == pytest.approx(2.0)

    def test_hit_rate(self):
        """Test hit rate is a fraction of requests."""
        collector = CacheStatsCollector()
        collector.record_read(hit=True)
        for _ in range(3):
            collector.record_read(hit=False)

        stats = collector.snapshot()
        assert stats.hit_rate == pytest.approx(0.25)
        assert stats.to_dict()["total_requests"] == 4

    def test_concurrent_reads_stay_consistent(self):
        """Test hits plus misses always equals total requests."""
        collector = CacheStatsCollector()
        mismatches = []
        done = threading.Event()

        def reader():
            for i in range(2000):
                collector.record_read(hit=i % 2 == 0)

        def observer():
            while not done.is_set():
                stats = collector.snapshot()
                if stats.hits + stats.misses != stats.total_requests:
                    mismatches.append(stats)

        watcher = threading.Thread(target=observer)
        watcher.start()
        threads = [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        done.set()
        watcher.join()

        assert not mismatches
        assert collector.snapshot().total_requests == 8000

    def test_timer_records_on_error(self):
        """Test timer records even when the body raises."""
        collector = CacheStatsCollector()
        with pytest.raises(RuntimeError):
            with Timer(collector):
                raise RuntimeError("boom")

        assert collector.sample_count == 1


class TestPerformanceMonitor:
    """Tests for request metrics."""

    def test_empty(self):
        """Test stats before any request."""
        stats = PerformanceMonitor().get_stats()
        assert stats.request_count == 0
        assert stats.average_response_time == 0.0
        assert stats.error_rate == 0.0

    def test_average_and_error_rate(self):
        """Test derived figures."""
        monitor = PerformanceMonitor()
        monitor.record_request(100, False)
        monitor.record_request(300, True)

        stats = monitor.get_stats()
        assert stats.request_count == 2
        assert stats.average_response_time == pytest.approx(200)
        assert stats.error_rate == pytest.approx(50)

    def test_memory_usage(self):
        """Test snapshot includes process memory."""
        stats = PerformanceMonitor().get_stats()
        assert stats.memory_usage.used > 0
        assert stats.to_dict()["memory_usage"]["total"] >= stats.memory_usage.used

    @pytest.mark.parametrize("bad", [None, "fast", object(), float("nan"), float("inf")])
    def test_invalid_response_time_ignored(self, bad, caplog):
        """Test a bad response time is logged and leaves counters untouched."""
        monitor = PerformanceMonitor()
        monitor.record_request(100, False)

        monitor.record_request(bad, True)

        stats = monitor.get_stats()
        assert stats.request_count == 1
        assert stats.average_response_time == pytest.approx(100)
        assert stats.error_rate == 0.0
        assert "Ignoring request" in caplog.text

    def test_numeric_string_response_time(self):
        """Test numeric strings are accepted."""
        monitor = PerformanceMonitor()
        monitor.record_request("250")
        assert monitor.get_stats().average_response_time == pytest.approx(250)

    def test_memory_failure_falls_back(self, monkeypatch):
        """Test a psutil failure yields zero memory figures."""

        def denied():
            raise psutil.AccessDenied()

        monkeypatch.setattr("vendorcache.metrics.requests.process_memory", denied)
        monitor = PerformanceMonitor()
        monitor.record_request(10)

        stats = monitor.get_stats()
        assert stats.request_count == 1
        assert stats.memory_usage == MemoryUsage(0, 0)

    def test_reset(self):
        """Test reset."""
        monitor = PerformanceMonitor()
        monitor.record_request(50, True)
        monitor.reset()
        assert monitor.get_stats().request_count == 0

    def test_thread_safety(self):
        """Test concurrent recording loses no requests."""
        monitor = PerformanceMonitor()

        def worker():
            for _ in range(1000):
                monitor.record_request(1.0)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert monitor.get_stats().request_count == 8000


class TestMemoryUsage:
    """Tests for process memory figures."""

    def test_process_memory(self):
        """Test figures come from the running process."""
        usage = process_memory()
        assert usage.used > 0
        assert usage.total > 0

    def test_to_megabytes(self):
        """Test megabyte rendering."""
        usage = MemoryUsage(used=5 * 1024 * 1024, total=12 * 1024 * 1024)
        assert usage.to_megabytes() == {"used": "5MB", "total": "12MB"}


class TestRequestTracking:
    """Tests for the FastAPI middleware."""

    @pytest.fixture
    def monitor(self):
        return PerformanceMonitor()

    @pytest.fixture
    def client(self, monitor):
        app = FastAPI()
        install_request_tracking(app, monitor)

        @app.get("/vendors")
        async def list_vendors():
            return [{"id": 1}]

        @app.get("/vendors/{vendor_id}")
        async def get_vendor(vendor_id: int):
            raise HTTPException(status_code=404, detail="Vendor not found")

        @app.get("/boom")
        async def boom():
            raise RuntimeError("database down")

        return TestClient(app, raise_server_exceptions=False)

    def test_success_recorded(self, client, monitor):
        """Test a 200 counts as a request without error."""
        assert client.get("/vendors").status_code == 200

        stats = monitor.get_stats()
        assert stats.request_count == 1
        assert stats.error_rate == 0.0

    def test_client_error_recorded(self, client, monitor):
        """Test a 404 counts as an error."""
        assert client.get("/vendors/9").status_code == 404
        assert monitor.get_stats().error_rate == pytest.approx(100.0)

    def test_exception_recorded(self, client, monitor):
        """Test an unhandled exception counts once as an error."""
        client.get("/vendors")
        assert client.get("/boom").status_code == 500

        stats = monitor.get_stats()
        assert stats.request_count == 2
        assert stats.error_rate == pytest.approx(50.0)
