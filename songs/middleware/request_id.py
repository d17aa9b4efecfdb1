"""
Request ID Middleware
Assigns an identifier to every request for log correlation.
"""

import uuid
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that tags each request with an ID.

    An incoming X-Request-ID header is reused, otherwise a UUID4 is
    generated. The ID is stored in request.state.request_id and echoed
    back in the response header.
    """

    async def dispatch(self, request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def get_request_id(request) -> str:
    """Return the current request ID, or '-' outside the middleware."""
    return getattr(request.state, "request_id", "-")
