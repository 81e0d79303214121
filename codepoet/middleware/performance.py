"""Request timing middleware."""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from codepoet.utils.logger import get_logger

logger = get_logger("performance")


class PerformanceMiddleware(BaseHTTPMiddleware):
    """Adds ``X-Process-Time`` and logs slow requests.

    Generation requests wait on the AI provider, so they get their own,
    higher threshold before being reported as slow.
    """

    SLOW_REQUEST_THRESHOLD = 0.5
    SLOW_GENERATION_THRESHOLD = 10.0

    EXCLUDED_PATHS = {
        "/health",
        "/",
        "/docs",
        "/redoc",
        "/openapi.json",
    }

    def threshold_for(self, path: str) -> float:
        if "/generate" in path:
            return self.SLOW_GENERATION_THRESHOLD
        return self.SLOW_REQUEST_THRESHOLD

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        path = request.url.path
        if path in self.EXCLUDED_PATHS:
            return response

        line = f"{request.method} {path} {response.status_code} - {process_time:.3f}s"
        if process_time >= self.threshold_for(path):
            logger.warning(f"[SLOW REQUEST] {line}")
        else:
            logger.debug(f"[REQUEST] {line}")

        return response
