"""Base repository with shared get-by-ID patterns.

Subclasses specify model_class, id_column, and not_found_error; the base
provides lookup, creation and deletion.
"""

from typing import TypeVar, Generic, Optional, Type
from sqlalchemy.orm import Session, Query

from ..core.result import Result, Ok, Err
from ..database import Base
from ..exceptions import NotFoundError

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Shared repository logic for SQLAlchemy models.

    Class variables to set in subclasses:
        model_class:     The SQLAlchemy model (e.g., Folder)
        id_column:       Name of the primary-key column (default "id")
        not_found_error: Exception class carried by find() on a miss
    """

    model_class: Type[ModelT]
    id_column: str = "id"
    not_found_error: Type[NotFoundError]

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self) -> Query:
        return self.db.query(self.model_class)

    def find(self, entity_id: str) -> Result[ModelT]:
        """Get entity by primary key, or an Err carrying not_found_error."""
        entity = self.get_by_id_optional(entity_id)
        if entity is None:
            return Err(self.not_found_error(entity_id))
        return Ok(entity)

    def get_by_id_optional(self, entity_id: str) -> Optional[ModelT]:
        """Get entity by primary key, or None if not found."""
        col = getattr(self.model_class, self.id_column)
        return self._base_query().filter(col == entity_id).first()

    def add(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        self.db.flush()
        return entity

    def delete_by_id(self, entity_id: str) -> int:
        """Delete by primary key. Returns 0 if a concurrent caller removed it first.

        Loaded instances are marked deleted in the session, so callers can still
        read their attributes after the commit.
        """
        col = getattr(self.model_class, self.id_column)
        count = self._base_query().filter(col == entity_id).delete(synchronize_session="auto")
        self.db.flush()
        return count
