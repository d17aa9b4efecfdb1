"""
Request Log Middleware
Logs one line per handled request.
"""

import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware

from songs.middleware.request_id import get_request_id

logger = logging.getLogger(__name__)


class RequestLogMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs method, path, status code and duration.

    Must run inside RequestIDMiddleware so the request ID is available.
    """

    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        logger.info(
            "[%s] %s %s -> %d (%.1f ms)",
            get_request_id(request),
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response
