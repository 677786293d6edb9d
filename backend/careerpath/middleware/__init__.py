"""
Middleware Package

Contains FastAPI middleware for:
- Prometheus metrics collection
- Request/response logging
- Request timeouts
"""

from careerpath.middleware.metrics import (
    PrometheusMiddleware,
    setup_metrics,
    REQUEST_LATENCY,
    REQUEST_COUNT,
    ACTIVE_REQUESTS,
    RECOMMENDATIONS_GENERATED,
    COURSE_STATUS_TRANSITIONS,
)
from careerpath.middleware.requests import RequestLoggingMiddleware, RequestTimeoutMiddleware

__all__ = [
    "PrometheusMiddleware",
    "setup_metrics",
    "REQUEST_LATENCY",
    "REQUEST_COUNT",
    "ACTIVE_REQUESTS",
    "RECOMMENDATIONS_GENERATED",
    "COURSE_STATUS_TRANSITIONS",
    "RequestLoggingMiddleware",
    "RequestTimeoutMiddleware",
]
