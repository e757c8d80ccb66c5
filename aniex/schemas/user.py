from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from aniex.schemas.common import CamelModel


class Credentials(CamelModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty")
        return v


class UserRead(CamelModel):
    id: int
    username: str
    is_admin: bool
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
