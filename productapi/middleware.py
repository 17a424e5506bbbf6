"""
Request logging middleware.

Logs method, path, status and duration of every request, including ones
that fail with an unhandled exception (logged as 500). Exceptions are
not caught here; they continue to the application's exception handlers.
"""
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .logging_config import get_logger

logger = get_logger(__name__)


class RequestLogMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {status_code} "
                f"({duration_ms:.1f}ms)"
            )
