"""
Base repository with standardized CRUD operations, transaction management, and error handling.

Provides foundation for all domain repositories with type safety.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
from contextlib import contextmanager

from sqlalchemy import select, update
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError, IntegrityError

from app.models.base import BaseModel
from app.models.base.types import utc_now
from app.config.logging import get_logger
from app.core.exceptions import (
    RepositoryError,
    EntityAlreadyExistsError,
)

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized operations.

    Provides CRUD operations, transaction management, and error handling
    for all domain repositories.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Transaction Management ====================

    @contextmanager
    def transaction(self):
        """
        Transaction context manager with automatic rollback.

        Usage:
            with repository.transaction():
                repository.create(entity, commit=False)
        """
        try:
            yield self.db
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Transaction rollback: {str(e)}", exc_info=True)
            raise RepositoryError(f"Transaction failed: {str(e)}") from e

    def commit(self):
        """Commit current transaction."""
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Commit failed: {str(e)}") from e

    def rollback(self):
        """Rollback current transaction."""
        self.db.rollback()

    # ==================== Create Operations ====================

    def create(self, entity: ModelType, commit: bool = True) -> ModelType:
        """
        Persist a new entity.

        Args:
            entity: Entity to create
            commit: Whether to commit immediately

        Returns:
            Created entity

        Raises:
            EntityAlreadyExistsError: If a unique constraint is violated
            RepositoryError: On any other database failure
        """
        try:
            self.db.add(entity)

            if commit:
                self.db.commit()
                self.db.refresh(entity)
            else:
                self.db.flush()

            logger.info(f"Created {self.model.__name__} with id: {entity.id}")
            return entity

        except IntegrityError as e:
            self.db.rollback()
            raise EntityAlreadyExistsError(
                f"{self.model.__name__} already exists"
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Create failed: {str(e)}") from e

    # ==================== Read Operations ====================

    def find_by_id(self, id: str) -> Optional[ModelType]:
        """
        Find entity by ID.

        Args:
            id: Entity ID

        Returns:
            Entity or None
        """
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find by ID failed: {str(e)}") from e

    def find_all(self, order_by: Optional[Any] = None) -> List[ModelType]:
        """Return every entity, optionally ordered."""
        query = select(self.model)
        if order_by is not None:
            query = query.order_by(order_by)
        try:
            return list(self.db.execute(query).scalars().all())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find all failed: {str(e)}") from e

    # ==================== Update Operations ====================

    def update_fields(
        self,
        id: str,
        values: Dict[str, Any],
        conditions: Optional[List[Any]] = None,
        commit: bool = True,
    ) -> int:
        """
        Apply a column-level UPDATE to a single row.

        Only the given columns are written, so concurrent writers touching
        other columns (or appending child rows) are never overwritten.

        Args:
            id: Entity ID
            values: Column values to set
            conditions: Extra WHERE clauses; the update is skipped if they fail
            commit: Whether to commit immediately

        Returns:
            Number of rows updated (0 or 1)
        """
        values = dict(values)
        if hasattr(self.model, "updated_at") and "updated_at" not in values:
            values["updated_at"] = utc_now()

        statement = update(self.model).where(self.model.id == id)
        for condition in conditions or []:
            statement = statement.where(condition)
        statement = statement.values(**values).execution_options(synchronize_session=False)

        try:
            result = self.db.execute(statement)
            if commit:
                self.db.commit()
            else:
                self.db.flush()
            return result.rowcount
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Update failed: {str(e)}") from e

    def reload(self, entity: ModelType) -> ModelType:
        """Refresh an entity from the database after a statement-level update."""
        self.db.expire(entity)
        self.db.refresh(entity)
        return entity
