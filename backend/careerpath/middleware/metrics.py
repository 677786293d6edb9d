"""
Prometheus Metrics Middleware

Provides request/response metrics for monitoring:
- HTTP request latency (p50, p95, p99)
- Request count by endpoint and status
- Active request gauge
- Request timeouts
- Recommendation generation and enrollment status transitions

Endpoint labels are route templates (/api/courses/{course_id}/enroll), read
from the route the router matched. Requests that match no route are
labelled with their raw path.

Usage:
    from careerpath.middleware.metrics import setup_metrics

    # In main.py
    app = FastAPI()
    setup_metrics(app)

Metrics Endpoint:
    GET /metrics - Prometheus-format metrics
"""

import time
import logging
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    CONTENT_TYPE_LATEST,
    generate_latest,
    REGISTRY,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import Scope

logger = logging.getLogger(__name__)

METRICS_PATH = "/metrics"

# ==================== Prometheus Metrics ====================

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint", "status"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

# The route is only known once the router has run, so in-flight requests
# are counted per method
ACTIVE_REQUESTS = Gauge(
    "http_requests_active",
    "Number of active HTTP requests",
    ["method"]
)

REQUEST_TIMEOUTS = Counter(
    "http_request_timeouts_total",
    "Requests cut off by the request timeout",
    ["method", "endpoint"]
)

RECOMMENDATIONS_GENERATED = Counter(
    "career_recommendations_generated_total",
    "Career recommendation rows inserted",
    ["strategy"]
)

COURSE_STATUS_TRANSITIONS = Counter(
    "course_status_transitions_total",
    "Enrollment status writes by resulting status",
    ["status"]
)


def endpoint_path(scope: Scope) -> str:
    """Route template the router matched, else the raw request path."""
    route = scope.get("route")
    template = getattr(route, "path", None)
    return template or scope.get("path", "")


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Records latency and count per (method, endpoint, status) for every
    request except the scrape endpoint itself.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == METRICS_PATH:
            return await call_next(request)

        method = request.method
        status = "500"
        ACTIVE_REQUESTS.labels(method=method).inc()
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            status = str(response.status_code)
            return response
        except Exception as e:
            logger.error(f"Unhandled error on {request.url.path}: {e}")
            raise
        finally:
            # The router has filled in scope["route"] by now
            observe_request(method, endpoint_path(request.scope), status, time.perf_counter() - start_time)
            ACTIVE_REQUESTS.labels(method=method).dec()


def metrics_endpoint(request: Request) -> Response:
    return PlainTextResponse(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


def setup_metrics(app: FastAPI) -> None:
    """Add the request metrics middleware and expose GET /metrics."""
    app.add_middleware(PrometheusMiddleware)
    app.add_route(METRICS_PATH, metrics_endpoint, methods=["GET"])

    logger.info("Prometheus metrics configured")


# ==================== Helper Functions ====================

def observe_request(method: str, endpoint: str, status: str, duration: float) -> None:
    REQUEST_LATENCY.labels(method=method, endpoint=endpoint, status=status).observe(duration)
    REQUEST_COUNT.labels(method=method, endpoint=endpoint, status=status).inc()


def record_request_timeout(method: str, endpoint: str) -> None:
    REQUEST_TIMEOUTS.labels(method=method, endpoint=endpoint).inc()


def record_recommendations_generated(strategy: str, count: int) -> None:
    """Record newly inserted recommendation rows for a strategy."""
    if count > 0:
        RECOMMENDATIONS_GENERATED.labels(strategy=strategy).inc(count)


def record_status_transition(status: str) -> None:
    COURSE_STATUS_TRANSITIONS.labels(status=status).inc()
