"""
Song Repository - Data access layer for Song queries.

This module handles all database queries related to songs, including
filtered counting and windowed fetches used by pagination.

Filters:
- 'group_name', 'song_name', 'release_date', 'link': exact match
- 'text': substring match on the lyrics
"""

import logging
from typing import Any, Mapping, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from songs.models.song import Song

logger = logging.getLogger(__name__)

EXACT_FILTERS = {
    "group_name": Song.group_name,
    "song_name": Song.song_name,
    "release_date": Song.release_date,
    "link": Song.link,
}

SONG_FIELDS = ("group_name", "song_name", "text", "release_date", "link")


def apply_song_filters(query, filters: Optional[Mapping[str, Any]]):
    """
    Apply column filters to a song query.

    Args:
        query: SQLAlchemy query object
        filters: Mapping of column name to value; unknown keys are ignored

    Returns:
        Query with filters applied
    """
    for key, value in (filters or {}).items():
        if key == "text":
            query = query.filter(Song.text.like(f"%{value}%"))
            logger.debug("Applying filter: %s LIKE %s", key, value)
        elif key in EXACT_FILTERS:
            query = query.filter(EXACT_FILTERS[key] == value)
            logger.debug("Applying filter: %s = %s", key, value)

    return query


def count_songs(db: Session, filters: Optional[Mapping[str, Any]] = None) -> int:
    """Count songs matching the filters."""
    return apply_song_filters(db.query(func.count(Song.id)), filters).scalar() or 0


def get_songs_window(
    db: Session,
    filters: Optional[Mapping[str, Any]],
    offset: int,
    limit: int,
) -> list[Song]:
    """
    Fetch up to `limit` songs starting at `offset`.

    Ordering is stable (group, song, id) so consecutive pages never
    overlap.
    """
    return (
        apply_song_filters(db.query(Song), filters)
        .order_by(Song.group_name, Song.song_name, Song.id)
        .offset(offset)
        .limit(limit)
        .all()
    )


def get_song_by_id(db: Session, song_id: UUID) -> Optional[Song]:
    return db.query(Song).filter(Song.id == song_id).first()


def get_song_by_group_and_name(db: Session, group: str, song: str) -> Optional[Song]:
    """
    Exact lookup by group and song name.

    Returns:
        The first matching Song, or None if not found
    """
    return (
        db.query(Song)
        .filter(Song.group_name == group, Song.song_name == song)
        .first()
    )


def create_song(db: Session, data: Mapping[str, Any]) -> Song:
    """
    Insert a new song.

    Args:
        db: Database session
        data: Column values keyed by SONG_FIELDS

    Returns:
        The created Song, flushed so its id is available
    """
    song = Song(**{key: data[key] for key in SONG_FIELDS})
    db.add(song)
    db.flush()

    logger.debug("Created song with ID: %s", song.id)
    return song


def update_song(db: Session, song_id: UUID, data: Mapping[str, Any]) -> int:
    """
    Replace every field of a song.

    Returns:
        Number of rows affected (0 when the song does not exist)
    """
    rows = (
        db.query(Song)
        .filter(Song.id == song_id)
        .update({key: data[key] for key in SONG_FIELDS}, synchronize_session="fetch")
    )
    db.flush()

    logger.debug("Updated song with ID: %s, rows affected: %d", song_id, rows)
    return rows


def delete_song(db: Session, song_id: UUID) -> int:
    """
    Delete a song.

    Returns:
        Number of rows affected (0 when the song does not exist)
    """
    rows = (
        db.query(Song)
        .filter(Song.id == song_id)
        .delete(synchronize_session="fetch")
    )
    db.flush()

    logger.debug("Deleted song with ID: %s, rows affected: %d", song_id, rows)
    return rows
