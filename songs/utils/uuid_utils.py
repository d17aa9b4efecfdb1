"""
UUID Utilities - Helper functions for UUID handling in routes.
"""

from uuid import UUID

from fastapi import HTTPException

from songs.errors import RESP_INVALID_URL_PARAM_ID


def validate_uuid(id_str: str) -> UUID:
    """
    Validate and convert a path parameter to UUID.

    Args:
        id_str: String to convert to UUID

    Returns:
        UUID object

    Raises:
        HTTPException: 400 if the string is not a valid UUID

    Example:
        >>> validate_uuid("550e8400-e29b-41d4-a716-446655440000")
        UUID('550e8400-e29b-41d4-a716-446655440000')
    """
    try:
        return UUID(id_str)
    except ValueError:
        raise HTTPException(status_code=400, detail=RESP_INVALID_URL_PARAM_ID)
