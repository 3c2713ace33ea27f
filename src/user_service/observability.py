"""Logging and Prometheus metrics setup.

Logging:
    Standard library logging, configured once on startup via the lifespan.

Metrics:
    Each application gets its own CollectorRegistry carrying the default
    process/platform/GC collectors plus per-request counters. Nothing is
    registered on the prometheus_client global registry, so several apps
    (e.g. in tests) can coexist in one process.
"""

import logging
import time

from fastapi import FastAPI, Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    GCCollector,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

# Label value for requests that matched no route
UNMATCHED_PATH = "#unmatched"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for the application."""
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))


class RequestMetrics:
    """Prometheus registry and request instruments for one application."""

    content_type = CONTENT_TYPE_LATEST

    def __init__(self) -> None:
        self.registry = CollectorRegistry()
        ProcessCollector(registry=self.registry)
        PlatformCollector(registry=self.registry)
        GCCollector(registry=self.registry)

        labels = ("method", "path", "status_code")
        self.requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests handled.",
            labels,
            registry=self.registry,
        )
        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds.",
            labels,
            registry=self.registry,
        )

    def observe(self, method: str, path: str, status_code: int, duration: float) -> None:
        """Record one finished request."""
        label_values = (method, path, str(status_code))
        self.requests_total.labels(*label_values).inc()
        self.request_duration.labels(*label_values).observe(duration)

    def render(self) -> bytes:
        """Render the registry in the Prometheus text exposition format."""
        return generate_latest(self.registry)

    def attach(self, app: FastAPI) -> None:
        """Install the request timing middleware on ``app``."""

        @app.middleware("http")
        async def record_request_metrics(request: Request, call_next) -> Response:
            start = time.perf_counter()
            status_code = 500
            try:
                response = await call_next(request)
                status_code = response.status_code
                return response
            finally:
                route = request.scope.get("route")
                path = getattr(route, "path", None) or UNMATCHED_PATH
                self.observe(request.method, path, status_code, time.perf_counter() - start)
