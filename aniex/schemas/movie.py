from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from aniex.schemas.common import (CamelModel, Description, Genres, OptionalInt, OptionalNonNegativeInt,
                                  OptionalText, Title)


class MovieCreate(CamelModel):
    title: Title
    description: Description
    cover_image: OptionalText = None
    banner_image: OptionalText = None
    genres: Genres = Field(default_factory=list)
    duration: OptionalNonNegativeInt = None
    year: OptionalInt = None
    rating: OptionalText = None


class MovieUpdate(CamelModel):
    title: Optional[Title] = None
    description: Optional[Description] = None
    cover_image: OptionalText = None
    banner_image: OptionalText = None
    genres: Optional[Genres] = None
    duration: OptionalNonNegativeInt = None
    year: OptionalInt = None
    rating: OptionalText = None

    @field_validator("title", "description")
    @classmethod
    def not_null_if_provided(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("genres")
    @classmethod
    def null_genres_means_none(cls, v):
        return v if v is not None else []


class MovieRead(CamelModel):
    id: int
    title: str
    description: str
    cover_image: Optional[str] = None
    banner_image: Optional[str] = None
    genres: list[str] = Field(default_factory=list)
    duration: Optional[int] = None
    year: Optional[int] = None
    rating: Optional[str] = None
    created_at: Optional[datetime] = None
