"""
Repository layer for the songs library.

Repositories encapsulate database query logic; commits are left to the
session dependency.
"""

from songs.repositories.song_repository import (
    apply_song_filters,
    count_songs,
    get_songs_window,
    get_song_by_id,
    get_song_by_group_and_name,
    create_song,
    update_song,
    delete_song,
)

__all__ = [
    "apply_song_filters",
    "count_songs",
    "get_songs_window",
    "get_song_by_id",
    "get_song_by_group_and_name",
    "create_song",
    "update_song",
    "delete_song",
]
