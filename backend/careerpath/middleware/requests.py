"""
Request logging and timeout middleware
"""
import asyncio
import logging
import time

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from careerpath.middleware.metrics import endpoint_path, record_request_timeout

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per /api request: METHOD /path STATUS in Nms"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        if request.url.path.startswith("/api"):
            logger.info(
                f"{request.method} {request.url.path} {response.status_code} in {duration_ms:.0f}ms"
            )

        response.headers["X-Process-Time"] = f"{duration_ms / 1000:.4f}"
        return response


class RequestTimeoutMiddleware:
    """
    Bound every HTTP request by a wall-clock timeout.

    Plain ASGI, so the downstream app is awaited directly and is cancelled
    on timeout; uncommitted work is discarded and the client gets 504. If the
    response had already started it cannot be replaced and is cut off.
    The server never retries.
    """

    def __init__(self, app: ASGIApp, timeout_seconds: float):
        self.app = app
        self.timeout_seconds = timeout_seconds

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, receive, send_wrapper), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            method = scope["method"]
            record_request_timeout(method, endpoint_path(scope))
            logger.error(f"{method} {scope['path']} timed out after {self.timeout_seconds}s")

            if response_started:
                return
            response = JSONResponse(
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                content={"message": "Request timed out"},
            )
            await response(scope, receive, send)
