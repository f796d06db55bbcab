"""Database query utility functions."""
from typing import Any, Optional, Type, TypeVar
from uuid import UUID
from sqlalchemy.orm import Session

T = TypeVar("T")


def get_by_id(
    db: Session,
    model: Type[T],
    id_value: str | UUID,
) -> Optional[T]:
    """
    Get a model instance by ID.

    Args:
        db: Database session
        model: SQLAlchemy model class
        id_value: ID value (UUID string or UUID object)

    Returns:
        Model instance or None

    Raises:
        ValueError: If a string ID is not a valid UUID
    """
    # Convert string to UUID if needed
    if isinstance(id_value, str):
        id_value = UUID(id_value)

    return db.get(model, id_value)


def get_by_field(
    db: Session,
    model: Type[T],
    field_name: str,
    field_value: Any,
) -> Optional[T]:
    """
    Get a model instance by a specific field.

    Args:
        db: Database session
        model: SQLAlchemy model class
        field_name: Name of the field to filter by
        field_value: Value to filter by

    Returns:
        Model instance or None
    """
    field = getattr(model, field_name)
    return db.query(model).filter(field == field_value).first()
