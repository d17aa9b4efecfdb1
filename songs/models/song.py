from uuid import UUID as PyUUID
from sqlalchemy import String, Text, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column
import uuid
from songs.database import Base


class Song(Base):
    """
    A song in the library with its metadata and lyrics.

    Lyrics are stored with escaped newlines (the two characters backslash
    and n), one escape per verse boundary.
    """

    __tablename__ = "songs"

    id: Mapped[PyUUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    group_name: Mapped[str] = mapped_column(String(255), nullable=False)
    song_name: Mapped[str] = mapped_column(String(255), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    release_date: Mapped[str] = mapped_column(String(50), nullable=False)
    link: Mapped[str] = mapped_column(String(500), nullable=False)

    # Exact lookup used by the lyrics endpoint
    __table_args__ = (Index("ix_songs_group_song", "group_name", "song_name"),)

    def __repr__(self):
        return f"<Song {self.group_name} - {self.song_name}>"
