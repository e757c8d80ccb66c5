from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python. Accepts either on input."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# --- Coercion helpers for HTML form values ---

def _strip(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


def _blank_to_none(value: Any) -> Any:
    value = _strip(value)
    if value == "":
        return None
    return value


def _split_genres(value: Any) -> Any:
    """Accept a list or a comma separated string. Blank entries are dropped."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if isinstance(value, (list, tuple)):
        return [_strip(g) for g in value if _strip(g) != ""]
    return value


# Integer columns are 32-bit signed (PostgreSQL INTEGER); larger values are a 400, not a driver error
INT_MIN = -2**31
INT_MAX = 2**31 - 1

# Numeric text is coerced by pydantic; "abc" fails with a per-field error
RequiredInt = Annotated[int, BeforeValidator(_strip), Field(ge=INT_MIN, le=INT_MAX)]
PositiveInt = Annotated[int, BeforeValidator(_strip), Field(ge=1, le=INT_MAX)]
OptionalInt = Annotated[Optional[Annotated[int, Field(ge=INT_MIN, le=INT_MAX)]], BeforeValidator(_blank_to_none)]
OptionalNonNegativeInt = Annotated[Optional[Annotated[int, Field(ge=0, le=INT_MAX)]], BeforeValidator(_blank_to_none)]
OptionalText = Annotated[Optional[str], BeforeValidator(_blank_to_none)]
Genres = Annotated[list[str], BeforeValidator(_split_genres)]
Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, min_length=10)]


class MessageResponse(BaseModel):
    message: str
