"""
Generic pagination utilities for consistent pagination across the application.

This module provides reusable pagination calculation functions that are
independent of any specific domain model. The same windowing arithmetic is
used for database-backed song lists and for lyrics split into verses, so
both endpoints share one envelope and one Link header format.

For domain-specific paginated queries, see the appropriate repository:
- Song: songs.repositories.song_repository
"""

import math
from collections import abc
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence

from starlette.datastructures import URL

from songs.errors import PaginationLinkError

UNKNOWN_TOTAL = -1

# Largest offset a database driver accepts (signed 64-bit)
MAX_OFFSET = 2**63 - 1

PAGE_PARAM = "page"
PER_PAGE_PARAM = "perPage"

VERSE_SEPARATOR = "\\n"


@dataclass(frozen=True)
class PaginationConfig:
    """Defaults and bounds applied when resolving page parameters."""

    default_page: int = 1
    default_per_page: int = 10
    max_per_page: int = 100


@dataclass(frozen=True)
class PageRequest:
    """A resolved, always valid page request."""

    page: int
    per_page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page


def _to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def resolve_page_request(
    page: Any, per_page: Any, config: PaginationConfig = PaginationConfig()
) -> PageRequest:
    """
    Build a PageRequest from raw caller input.

    Missing or non-numeric values fall back to the configured defaults,
    non-positive values are raised to 1 and per_page is capped at
    config.max_per_page. page is capped so the resulting offset never
    exceeds MAX_OFFSET. Never raises.

    Example:
        >>> resolve_page_request("abc", "10000")
        PageRequest(page=1, per_page=100)
    """
    size = _to_int(per_page)
    if size is None:
        size = config.default_per_page
    size = min(max(size, 1), config.max_per_page)

    page_number = _to_int(page)
    if page_number is None:
        page_number = config.default_page
    page_number = min(max(page_number, 1), MAX_OFFSET // size + 1)

    return PageRequest(page=page_number, per_page=size)


def page_request_from_query(
    query_params: Mapping[str, Any], config: PaginationConfig = PaginationConfig()
) -> PageRequest:
    """Resolve `page` and `perPage` from request query parameters."""
    return resolve_page_request(
        query_params.get(PAGE_PARAM), query_params.get(PER_PAGE_PARAM), config
    )


def calculate_window(page: int, per_page: int) -> tuple[int, int]:
    """Return (offset, limit) for a 1-indexed page."""
    return (page - 1) * per_page, per_page


def window_sequence(offset: int, limit: int, sequence: Sequence[Any]) -> list[Any]:
    """Select the page window from an in-memory sequence."""
    if offset >= len(sequence):
        return []
    end = min(offset + limit, len(sequence))
    return list(sequence[offset:end])


def calculate_total_pages(total: int, per_page: int) -> int:
    if total < 0:
        return 0
    return math.ceil(total / per_page)


@dataclass
class PageResult:
    """Pagination envelope. The pager owns the metadata, the caller fills items."""

    page: int
    per_page: int
    total: int
    total_pages: int
    items: Any = field(default_factory=list)

    @classmethod
    def new(cls, page: int, per_page: int, total: int) -> "PageResult":
        return cls(
            page=page,
            per_page=per_page,
            total=total,
            total_pages=calculate_total_pages(total, per_page),
        )

    @property
    def total_known(self) -> bool:
        return self.total >= 0

    @property
    def last_page(self) -> Optional[int]:
        if not self.total_known:
            return None
        return max(self.total_pages, 1)

    def _item_count(self) -> int:
        # Only list-like items are counted. A single object (e.g. a lyrics
        # page) counts as 0 and never suggests another page.
        if isinstance(self.items, abc.Sequence) and not isinstance(self.items, str):
            return len(self.items)
        return 0

    def has_next(self) -> bool:
        if self.total_known:
            return self.page < self.total_pages
        # Unknown total: a full page suggests more pages follow.
        return self._item_count() >= self.per_page

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "perPage": self.per_page,
            "total": self.total,
            "totalPages": self.total_pages,
            "items": self.items,
        }

    def page_url(self, url: str, page: int, default_per_page: int) -> str:
        """Point `url` at `page`, keeping every other query parameter."""
        try:
            target = URL(url)
            if self.per_page != default_per_page:
                target = target.include_query_params(
                    **{PAGE_PARAM: page, PER_PAGE_PARAM: self.per_page}
                )
            else:
                target = target.remove_query_params(PER_PAGE_PARAM)
                target = target.include_query_params(**{PAGE_PARAM: page})
        except ValueError as exc:
            raise PaginationLinkError(f"Cannot build page link from {url!r}") from exc
        return str(target)

    def build_links(self, url: str, default_per_page: int) -> dict[str, str]:
        """Return relation -> URL for first, prev, next and last, in that order."""
        links = {"first": self.page_url(url, 1, default_per_page)}

        if self.page > 1:
            prev_page = self.page - 1
            if self.last_page is not None:
                prev_page = min(prev_page, self.last_page)
            links["prev"] = self.page_url(url, prev_page, default_per_page)

        if self.has_next():
            links["next"] = self.page_url(url, self.page + 1, default_per_page)

        if self.last_page is not None:
            links["last"] = self.page_url(url, self.last_page, default_per_page)

        return links

    def build_link_header(self, url: str, default_per_page: int) -> str:
        """Render the RFC 5988 `Link` header value for this page."""
        links = self.build_links(url, default_per_page)
        return ", ".join(f'<{href}>; rel="{rel}"' for rel, href in links.items())


def paginate(
    page_request: PageRequest,
    fetch: Callable[[int, int], Any],
    count: Optional[Callable[[], int]] = None,
) -> PageResult:
    """
    Window any item source behind a count and an offset/limit fetch.

    Args:
        page_request: Resolved page and page size
        fetch: Callable receiving (offset, limit) and returning the items
        count: Callable returning the total, or None when the total is
            not computed (the result then carries UNKNOWN_TOTAL)

    Returns:
        PageResult with items filled from fetch
    """
    total = count() if count is not None else UNKNOWN_TOTAL
    result = PageResult.new(page_request.page, page_request.per_page, total)
    offset, limit = calculate_window(result.page, result.per_page)
    result.items = fetch(offset, limit)
    return result


def split_verses(text: Optional[str]) -> list[str]:
    """
    Split stored lyrics into verses.

    Lyrics are stored with escaped newlines, so the separator is the
    two-character sequence backslash + n, not a newline character.
    """
    if not text:
        return []
    return text.split(VERSE_SEPARATOR)


def join_verses(verses: Sequence[str]) -> str:
    """Terminate every verse with a newline."""
    return "".join(f"{verse}\n" for verse in verses)
