from songs.models.song import Song

__all__ = [
    "Song",
]
