import logging
from typing import Any, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from aniex.core.errors import StoreError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
Payload = Union[BaseModel, dict]


class BaseStore(Generic[ModelT]):
    """
    CRUD over one table.

    get/update return None for unknown ids and delete returns False;
    absence is never an exception. Driver failures roll back and surface as StoreError.
    """
    model: Type[ModelT]
    entity_name: str = "record"

    def __init__(self, db: Session):
        self.db = db

    # --- ordering ---
    def _order_by(self) -> list:
        # Newest first; id breaks ties between rows created in the same tick
        return [self.model.created_at.desc(), self.model.id.desc()]

    # --- reads ---
    def list(self) -> List[ModelT]:
        return self.db.query(self.model).order_by(*self._order_by()).all()

    def get(self, entity_id: int) -> Optional[ModelT]:
        return self.db.get(self.model, entity_id)

    def count(self) -> int:
        return self.db.query(self.model).count()

    def latest(self, limit: int) -> List[ModelT]:
        return self.db.query(self.model).order_by(*self._order_by()).limit(limit).all()

    # --- writes ---
    def create(self, data: Payload) -> ModelT:
        values = self._values(data, partial=False)
        self._validate(values, current=None)

        obj = self.model(**values)
        self.db.add(obj)
        self._commit(f"create {self.entity_name}")
        self.db.refresh(obj)

        logger.info(f"Created {self.entity_name} #{obj.id}")
        return obj

    def update(self, entity_id: int, data: Payload) -> Optional[ModelT]:
        obj = self.get(entity_id)
        if obj is None:
            return None

        values = self._values(data, partial=True)
        self._validate(values, current=obj)

        for key, value in values.items():
            setattr(obj, key, value)

        self._commit(f"update {self.entity_name} #{entity_id}")
        self.db.refresh(obj)
        return obj

    def delete(self, entity_id: int) -> bool:
        obj = self.get(entity_id)
        if obj is None:
            return False

        # ORM cascades run inside this single commit
        self.db.delete(obj)
        self._commit(f"delete {self.entity_name} #{entity_id}")

        logger.info(f"Deleted {self.entity_name} #{entity_id}")
        return True

    # --- hooks ---
    def _validate(self, values: dict, current: Optional[ModelT]) -> None:
        """Rules that need the database. Raise InvalidData to reject."""

    def _values(self, data: Payload, partial: bool) -> dict:
        if isinstance(data, BaseModel):
            # json mode turns enums into their plain string values
            return data.model_dump(mode="json", exclude_unset=partial)
        return dict(data)

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except (SQLAlchemyError, OverflowError) as e:
            # sqlite3 raises OverflowError for out-of-range integers without wrapping it
            self.db.rollback()
            logger.error(f"Failed to {action}: {e}", exc_info=True)
            raise StoreError(f"Failed to {action}", e) from e


class SearchableStore(BaseStore[ModelT]):
    """Adds case-insensitive substring search over title, description and genres."""

    def search(self, query: Optional[str]) -> List[ModelT]:
        # An empty query is "no filter", not "match nothing"
        if not query:
            return self.list()

        needle = query.casefold()
        return [row for row in self.list() if self._matches(row, needle)]

    @staticmethod
    def _matches(row: Any, needle: str) -> bool:
        if needle in (row.title or "").casefold():
            return True
        if needle in (row.description or "").casefold():
            return True
        return any(needle in genre.casefold() for genre in (row.genres or []))
