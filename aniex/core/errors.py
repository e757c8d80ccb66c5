from typing import List, Optional


class StoreError(Exception):
    """The database refused or failed an operation. Mapped to a 500."""

    def __init__(self, message: str, original: Optional[Exception] = None):
        super().__init__(message)
        self.original = original


class InvalidData(Exception):
    """
    Payload passed schema validation but breaks a rule that needs the database
    (missing parent, ownership conflicts). Mapped to a 400 with field details.
    """

    def __init__(self, errors: List[dict]):
        super().__init__("Invalid data")
        self.errors = errors

    @classmethod
    def single(cls, field: str, message: str) -> "InvalidData":
        return cls([{"field": field, "message": message}])


def format_validation_errors(errors) -> List[dict]:
    """Flatten pydantic/FastAPI error dicts into [{field, message}] pairs."""
    formatted = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        formatted.append({
            "field": ".".join(loc) if loc else "body",
            "message": err.get("msg", "Invalid value"),
        })
    return formatted
