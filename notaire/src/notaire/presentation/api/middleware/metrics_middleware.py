"""
Prometheus metrics middleware for FastAPI.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from notaire.infrastructure.monitoring import metrics


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Middleware to collect HTTP metrics.

    Records:
    - Request count by method/endpoint/status
    - Request duration by method/endpoint
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request and collect metrics.

        Args:
            request: FastAPI request
            call_next: Next middleware/handler

        Returns:
            Response from handler
        """
        method = request.method
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception:
            self._record(request, method, 500, time.time() - start_time)
            raise

        self._record(request, method, response.status_code, time.time() - start_time)
        return response

    @staticmethod
    def _record(request: Request, method: str, status: int, duration: float) -> None:
        # Matched route template keeps ids out of the label
        route = request.scope.get("route")
        endpoint = getattr(route, "path", None) or request.url.path

        metrics.http_request_duration_seconds.labels(
            method=method,
            endpoint=endpoint,
        ).observe(duration)
        metrics.http_requests_total.labels(
            method=method,
            endpoint=endpoint,
            status=status,
        ).inc()
