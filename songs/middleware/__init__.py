from songs.middleware.request_id import RequestIDMiddleware, get_request_id
from songs.middleware.request_log import RequestLogMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestLogMiddleware",
    "get_request_id",
]
