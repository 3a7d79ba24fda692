"""Flush-only repository base shared by the order and settlement code."""

from typing import Generic, TypeVar, cast
from uuid import UUID

from sqlalchemy.orm import Session

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType]):
    """Generic repository with common persistence operations.

    Repositories never commit: the calling service owns the transaction, so
    several writes (an order update and its settlement, for example) commit
    or roll back together.

    Example:
        ```python
        class OrderRepository(BaseRepository[Order]):
            def __init__(self, db: Session):
                super().__init__(db, Order)

            def get_by_order_number(self, order_number: str) -> Order | None:
                return self.db.query(self.model).filter(...).first()
        ```
    """

    def __init__(self, db: Session, model: type[ModelType]):
        """Initialize repository with database session and model class.

        Args:
            db: SQLAlchemy session.
            model: The model class this repository operates on.
        """
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: UUID) -> ModelType | None:
        """Get a single entity by ID.

        Args:
            entity_id: The UUID of the entity.

        Returns:
            The entity if found, None otherwise.
        """
        result = self.db.query(self.model).filter(self.model.id == entity_id).first()  # type: ignore[attr-defined]
        return cast(ModelType | None, result)

    def add(self, **kwargs: object) -> ModelType:
        """Stage a new entity and flush it so defaults and the primary key are populated.

        Args:
            **kwargs: Entity attributes.

        Returns:
            The flushed entity.
        """
        instance = self.model(**kwargs)  # type: ignore[call-arg]
        self.db.add(instance)
        self.db.flush()
        return instance

    def apply(self, instance: ModelType, changes: dict[str, object]) -> ModelType:
        """Set attributes on an existing entity and flush.

        Args:
            instance: The entity to update.
            changes: Attribute values keyed by attribute name.

        Returns:
            The updated entity.
        """
        for key, value in changes.items():
            if hasattr(instance, key):
                setattr(instance, key, value)
        self.db.flush()
        return instance

    def exists(self, entity_id: UUID) -> bool:
        """Check if an entity exists by ID.

        Args:
            entity_id: The UUID to check.

        Returns:
            True if entity exists, False otherwise.
        """
        return self.get_by_id(entity_id) is not None
