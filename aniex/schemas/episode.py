from datetime import datetime
from typing import Optional

from pydantic import field_validator

from aniex.schemas.common import CamelModel, OptionalText, PositiveInt, RequiredInt, Title


class EpisodeCreate(CamelModel):
    anime_id: RequiredInt
    title: Title
    episode_number: PositiveInt
    description: OptionalText = None
    thumbnail: OptionalText = None


class EpisodeUpdate(CamelModel):
    anime_id: Optional[RequiredInt] = None
    title: Optional[Title] = None
    episode_number: Optional[PositiveInt] = None
    description: OptionalText = None
    thumbnail: OptionalText = None

    @field_validator("anime_id", "title", "episode_number")
    @classmethod
    def not_null_if_provided(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class EpisodeRead(CamelModel):
    id: int
    anime_id: int
    title: str
    episode_number: int
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    created_at: Optional[datetime] = None
