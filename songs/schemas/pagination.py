from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PageResponse(BaseModel, Generic[T]):
    """Pagination envelope as sent on the wire."""

    page: int
    per_page: int = Field(alias="perPage")
    total: int = Field(description="Total number of items, -1 if unknown")
    total_pages: int = Field(alias="totalPages")
    items: T

    model_config = ConfigDict(populate_by_name=True)
