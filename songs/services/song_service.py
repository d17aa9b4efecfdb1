"""
Song Service - Business logic for the songs library.

Builds paginated song lists and lyrics pages on top of the repository
layer. Both use the same pager, so the envelope and Link header are
identical whether items come from the database or from split lyrics.
"""

import logging
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from songs.models.song import Song
from songs.repositories import song_repository
from songs.schemas.song import SongLyrics, SongRequest
from songs.utils.pagination import (
    PageRequest,
    PageResult,
    join_verses,
    paginate,
    split_verses,
    window_sequence,
)

logger = logging.getLogger(__name__)


def build_song_filters(
    group: Optional[str] = None,
    song: Optional[str] = None,
    text: Optional[str] = None,
    release_date: Optional[str] = None,
    link: Optional[str] = None,
) -> dict[str, str]:
    """
    Map query parameters to repository filters, dropping empty values.

    Returns:
        Dict keyed by column name
    """
    candidates = {
        "group_name": group,
        "song_name": song,
        "text": text,
        "release_date": release_date,
        "link": link,
    }
    return {key: value for key, value in candidates.items() if value}


def list_songs(
    db: Session,
    page_request: PageRequest,
    filters: Optional[dict[str, Any]] = None,
    count_total: bool = True,
) -> PageResult:
    """
    Get a page of songs.

    Args:
        db: Database session
        page_request: Resolved page and page size
        filters: Repository filters from build_song_filters()
        count_total: When False the total is not counted and the result
            carries the unknown-total sentinel

    Returns:
        PageResult whose items are Song objects
    """
    logger.debug(
        "Listing songs page=%d per_page=%d filters=%s",
        page_request.page,
        page_request.per_page,
        filters,
    )

    total = song_repository.count_songs(db, filters) if count_total else None

    def fetch(offset: int, limit: int) -> list[Song]:
        if total is not None and offset >= total:
            return []
        return song_repository.get_songs_window(db, filters, offset, limit)

    return paginate(page_request, fetch, (lambda: total) if count_total else None)


def get_song_lyrics(
    db: Session, group: str, song: str, page_request: PageRequest
) -> Optional[PageResult]:
    """
    Get one page of verses of a song.

    Args:
        db: Database session
        group: Exact group name
        song: Exact song name
        page_request: Page and number of verses per page

    Returns:
        PageResult whose items is a SongLyrics holding the selected
        verses, or None if the song does not exist
    """
    record = song_repository.get_song_by_group_and_name(db, group, song)
    if record is None:
        return None

    verses = split_verses(record.text)
    logger.debug("Total verses found: %d", len(verses))

    def fetch(offset: int, limit: int) -> SongLyrics:
        return SongLyrics(
            release_date=record.release_date,
            text=join_verses(window_sequence(offset, limit, verses)),
            link=record.link,
        )

    return paginate(page_request, fetch, lambda: len(verses))


def get_song(db: Session, song_id: UUID) -> Optional[Song]:
    return song_repository.get_song_by_id(db, song_id)


def create_song(db: Session, payload: SongRequest) -> Song:
    """Create a song from a validated request body."""
    song = song_repository.create_song(db, _to_columns(payload))
    logger.info("New song created: %s", song.id)
    return song


def update_song(db: Session, song_id: UUID, payload: SongRequest) -> Optional[Song]:
    """
    Replace a song's fields.

    Returns:
        The updated Song, or None if it does not exist
    """
    rows = song_repository.update_song(db, song_id, _to_columns(payload))
    if rows == 0:
        return None
    return song_repository.get_song_by_id(db, song_id)


def delete_song(db: Session, song_id: UUID) -> bool:
    """Delete a song. Returns False if it does not exist."""
    return song_repository.delete_song(db, song_id) > 0


def _to_columns(payload: SongRequest) -> dict[str, str]:
    return {
        "group_name": payload.group,
        "song_name": payload.song,
        "text": payload.text,
        "release_date": payload.release_date,
        "link": payload.link,
    }
