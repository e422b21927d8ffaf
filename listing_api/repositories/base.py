"""
Base repository class with common operations using async SQLAlchemy.
Provides generic database operations that can be extended by specific repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from listing_api.database import Base
from listing_api.utils.exceptions import StoreError
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type, NoReturn
import uuid
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


async def handle_store_failure(db: AsyncSession, resource: str, operation: str, error: Exception) -> NoReturn:
    """Roll back and translate a backend failure."""
    await db.rollback()
    if isinstance(error, IntegrityError):
        logger.warning(f"Integrity violation during {operation} on {resource}: {error}")
        raise error
    logger.error(f"Failed to {operation} {resource}: {error}")
    if isinstance(error, SQLAlchemyError):
        raise StoreError("persistence") from error
    raise error


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing common operations.
    Backend failures surface as StoreError; integrity violations propagate unchanged.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository with model class and database session.

        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    async def _fail(self, operation: str, error: Exception) -> NoReturn:
        await handle_store_failure(self.db, self.model.__name__, operation, error)

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new record in the database.

        Args:
            obj_in: Dictionary of field values for the new record

        Returns:
            Created model instance
        """
        try:
            db_obj = self.model(**obj_in)
            self.db.add(db_obj)
            await self.db.commit()
            await self.db.refresh(db_obj)
            logger.debug(f"Created {self.model.__name__} with id: {db_obj.id}")
            return db_obj
        except SQLAlchemyError as e:
            await self._fail("create", e)

    async def get_by_id(self, id: uuid.UUID) -> Optional[ModelType]:
        """
        Get a record by its ID.

        Returns:
            Model instance if found, None otherwise
        """
        try:
            result = await self.db.execute(select(self.model).where(self.model.id == id))
            obj = result.scalar_one_or_none()

            if obj is None:
                logger.debug(f"{self.model.__name__} with id {id} not found")
            return obj
        except SQLAlchemyError as e:
            await self._fail("get", e)

    async def get_by_field(self, field: str, value: Any) -> Optional[ModelType]:
        """
        Get a record by a specific field value.

        Args:
            field: Field name to search by
            value: Value to search for

        Returns:
            Model instance if found, None otherwise
        """
        if not hasattr(self.model, field):
            raise ValueError(f"Field '{field}' does not exist on {self.model.__name__}")

        try:
            query = select(self.model).where(getattr(self.model, field) == value)
            result = await self.db.execute(query)
            return result.scalars().first()
        except SQLAlchemyError as e:
            await self._fail("get", e)

    async def get_many_by_ids(self, ids: List[uuid.UUID]) -> List[ModelType]:
        """Fetch every record whose id is in ``ids``; missing ids are simply absent."""
        if not ids:
            return []
        try:
            result = await self.db.execute(select(self.model).where(self.model.id.in_(ids)))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            await self._fail("get", e)
