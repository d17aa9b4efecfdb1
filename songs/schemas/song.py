from pydantic import AliasChoices, BaseModel, Field, field_validator
from uuid import UUID
from songs.schemas.base import BaseResponseSchema


class SongRequest(BaseModel):
    """Body for creating or replacing a song. Every field is required."""

    group: str
    song: str
    text: str
    release_date: str
    link: str

    @field_validator("group", "song", "text", "release_date", "link")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class SongResponse(BaseResponseSchema):
    """Full song with all fields"""

    id: UUID
    group: str = Field(validation_alias=AliasChoices("group_name", "group"))
    song: str = Field(validation_alias=AliasChoices("song_name", "song"))
    text: str
    release_date: str
    link: str


class SongLyrics(BaseResponseSchema):
    """Lyrics view of a song; text holds only the requested verses"""

    release_date: str
    text: str
    link: str
