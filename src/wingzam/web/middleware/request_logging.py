"""Structured request logging middleware for FastAPI."""

import logging
import time
import uuid
from collections.abc import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class StructuredRequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each HTTP request and bind a request id for log lines emitted while handling it."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Log request details in structured format."""
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        structlog.contextvars.bind_contextvars(request_id=request_id)
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        duration_ms = (time.perf_counter() - start_time) * 1000

        extra_fields = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
        }
        if request.url.query:
            extra_fields["query"] = str(request.url.query)
        if request.client:
            extra_fields["client_host"] = request.client.host

        logger.info(
            f"{request.method} {request.url.path} {response.status_code}", extra=extra_fields
        )

        response.headers["X-Request-ID"] = request_id
        return response
