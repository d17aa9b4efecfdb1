from fastapi import Depends, Request

from songs.config import settings
from songs.utils.pagination import (
    PageRequest,
    PaginationConfig,
    page_request_from_query,
)


def get_pagination_config() -> PaginationConfig:
    """Pagination defaults and bounds taken from application settings."""
    return PaginationConfig(
        default_per_page=settings.PAGINATION_DEFAULT_PER_PAGE,
        max_per_page=settings.PAGINATION_MAX_PER_PAGE,
    )


def get_page_request(
    request: Request, config: PaginationConfig = Depends(get_pagination_config)
) -> PageRequest:
    """
    Resolve `page` and `perPage` from the query string.

    Malformed or out-of-range values are clamped, never rejected.
    """
    return page_request_from_query(request.query_params, config)
