"""Metrics service for tracking API performance.

Singleton service to track image description calls, their latency, and
searches served.
"""

import threading
import time
from typing import Dict, Optional

from locallens.providers.description import ImageDescriptionProvider


class MetricsService:
    """Singleton service for tracking API metrics.

    Thread-safe counters and latency tracking for description calls.
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        """Create singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(MetricsService, cls).__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize metrics counters."""
        if self._initialized:
            return

        self._lock = threading.Lock()
        self._description_count = 0
        self._description_failures = 0
        self._total_latency_ms = 0.0
        self._min_latency_ms = float("inf")
        self._max_latency_ms = 0.0
        self._search_count = 0
        self._initialized = True

    def record_description(self, latency_ms: float, success: bool = True) -> None:
        """Record an image description call with its latency.

        Args:
            latency_ms: Latency in milliseconds
            success: Whether the call produced keywords
        """
        with self._lock:
            self._description_count += 1
            if not success:
                self._description_failures += 1
            self._total_latency_ms += latency_ms

            if latency_ms < self._min_latency_ms:
                self._min_latency_ms = latency_ms

            if latency_ms > self._max_latency_ms:
                self._max_latency_ms = latency_ms

    def record_search(self) -> None:
        """Record a completed catalog search."""
        with self._lock:
            self._search_count += 1

    def get_metrics(self) -> Dict:
        """Get current metrics.

        Returns:
            Dictionary with metrics including:
            - description_count: Total number of description calls
            - description_failures: Calls that raised
            - average_latency_ms: Average description latency in milliseconds
            - min_latency_ms: Minimum latency observed
            - max_latency_ms: Maximum latency observed
            - search_count: Completed searches
        """
        with self._lock:
            avg_latency = (
                self._total_latency_ms / self._description_count
                if self._description_count > 0
                else 0.0
            )

            return {
                "description_count": self._description_count,
                "description_failures": self._description_failures,
                "average_latency_ms": round(avg_latency, 2),
                "min_latency_ms": (
                    round(self._min_latency_ms, 2)
                    if self._min_latency_ms != float("inf")
                    else 0.0
                ),
                "max_latency_ms": round(self._max_latency_ms, 2),
                "search_count": self._search_count,
            }

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self._description_count = 0
            self._description_failures = 0
            self._total_latency_ms = 0.0
            self._min_latency_ms = float("inf")
            self._max_latency_ms = 0.0
            self._search_count = 0


class MeteredDescriptionProvider(ImageDescriptionProvider):
    """Wraps a description provider and records each call's latency."""

    def __init__(
        self,
        inner: ImageDescriptionProvider,
        metrics: Optional[MetricsService] = None,
    ):
        self.inner = inner
        self.metrics = metrics or metrics_service

    def describe(self, image_bytes: bytes, mime_type: str) -> str:
        start_time = time.time()
        try:
            description = self.inner.describe(image_bytes, mime_type)
        except Exception:
            self.metrics.record_description((time.time() - start_time) * 1000, success=False)
            raise
        self.metrics.record_description((time.time() - start_time) * 1000)
        return description


# Global singleton instance
metrics_service = MetricsService()
