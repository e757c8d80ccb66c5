from typing import Optional

from pydantic import Field, field_validator

from aniex.models.server import ServerStatus
from aniex.schemas.common import INT_MAX, CamelModel, OptionalText, RequiredInt, Title, _strip

STORAGE_DEFAULTS = {"storage_used": 0, "total_storage": 100}


class _StorageFields(CamelModel):
    storage_used: int = Field(default=0, ge=0, le=INT_MAX)
    total_storage: int = Field(default=100, ge=0, le=INT_MAX)

    @field_validator("storage_used", "total_storage", mode="before")
    @classmethod
    def blank_to_default(cls, v, info):
        # An emptied form field means "use the default", not "unknown"
        v = _strip(v)
        if v is None or v == "":
            return STORAGE_DEFAULTS[info.field_name]
        return v


class ServerCreate(_StorageFields):
    name: Title
    number: RequiredInt
    region: OptionalText = None
    status: ServerStatus = ServerStatus.ONLINE


class ServerUpdate(_StorageFields):
    name: Optional[Title] = None
    number: Optional[RequiredInt] = None
    region: OptionalText = None
    status: Optional[ServerStatus] = None

    @field_validator("name", "number", "status")
    @classmethod
    def not_null_if_provided(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class ServerRead(CamelModel):
    id: int
    name: str
    number: int
    region: Optional[str] = None
    status: ServerStatus
    storage_used: Optional[int] = 0
    total_storage: Optional[int] = 100
