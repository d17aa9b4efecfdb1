"""
Error types and client-facing error messages for the songs API.
"""

RESP_INVALID_URL_PARAM_ID = "Invalid URL param ID"
RESP_INVALID_LYRICS_QUERY = "Query params group and song are required"
RESP_DB_DATA_ACCESS_FAILURE = "Failed to access the data store"
RESP_LINK_BUILD_FAILURE = "Failed to build pagination links"
RESP_INTERNAL_ERROR = "Internal server error"
RESP_SONG_NOT_FOUND = "Song not found"


class PaginationLinkError(ValueError):
    """Raised when a pagination link cannot be built from the request URL."""
