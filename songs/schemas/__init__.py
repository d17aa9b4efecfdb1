from songs.schemas.song import SongRequest, SongResponse, SongLyrics
from songs.schemas.pagination import PageResponse
from songs.schemas.errors import ErrorResponse, ValidationErrorResponse

__all__ = [
    # Song schemas
    "SongRequest",
    "SongResponse",
    "SongLyrics",
    # Envelope schemas
    "PageResponse",
    # Error schemas
    "ErrorResponse",
    "ValidationErrorResponse",
]
