from typing import Optional

from pydantic import Field, field_validator

from aniex.schemas.common import CamelModel, OptionalInt, OptionalText, RequiredInt, Title


class VideoSourceCreate(CamelModel):
    # Exactly one of these must be set; checked by the store against the merged row
    episode_id: OptionalInt = None
    movie_id: OptionalInt = None
    server_name: Title
    server_number: RequiredInt
    video_url: Title
    quality: OptionalText = None


class VideoSourceUpdate(CamelModel):
    episode_id: OptionalInt = None
    movie_id: OptionalInt = None
    server_name: Optional[Title] = None
    server_number: Optional[RequiredInt] = None
    video_url: Optional[Title] = None
    quality: OptionalText = None

    @field_validator("server_name", "server_number", "video_url")
    @classmethod
    def not_null_if_provided(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class VideoSourceRead(CamelModel):
    id: int
    episode_id: Optional[int] = None
    movie_id: Optional[int] = None
    server_name: str
    server_number: int
    video_url: str
    quality: Optional[str] = None
