"""Category management."""
import re
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from pictureteam.constants import CATEGORY_NAME_PATTERN
from pictureteam.models import Category, image_categories
from pictureteam.utils.db import get_by_id
from pictureteam.utils.exceptions import (
    CategoryExistsError,
    CategoryNotFoundError,
    InvalidCategoryNameError,
    handle_database_error,
)
from pictureteam.utils.logger import logger

_name_re = re.compile(CATEGORY_NAME_PATTERN)


@dataclass
class CategoryWithCount:
    category: Category
    image_count: int


def validate_category_name(name: str) -> None:
    if not _name_re.fullmatch(name):
        raise InvalidCategoryNameError(CATEGORY_NAME_PATTERN)


def _name_taken(db: Session, name: str, exclude_id: Optional[uuid.UUID] = None) -> bool:
    query = db.query(Category).filter(func.lower(Category.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return query.first() is not None


class CategoryService(ABC):
    """Category ledger operations."""

    @abstractmethod
    def list(self) -> List[CategoryWithCount]:
        ...

    @abstractmethod
    def create(self, name: str) -> uuid.UUID:
        ...

    @abstractmethod
    def rename(self, category_id: uuid.UUID, name: str) -> None:
        ...

    @abstractmethod
    def delete(self, category_id: uuid.UUID) -> None:
        ...


class DefaultCategoryService(CategoryService):
    """CategoryService backed by the relational store."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def list(self) -> List[CategoryWithCount]:
        with self._session_factory() as db:
            try:
                rows = db.execute(
                    select(Category, func.count(image_categories.c.image_id))
                    .outerjoin(image_categories, image_categories.c.category_id == Category.id)
                    .group_by(Category.id)
                    .order_by(Category.name)
                ).all()
            except SQLAlchemyError as e:
                raise handle_database_error(e, "list_categories")

        return [CategoryWithCount(category=c, image_count=count) for c, count in rows]

    def create(self, name: str) -> uuid.UUID:
        validate_category_name(name)

        with self._session_factory() as db:
            try:
                if _name_taken(db, name):
                    raise CategoryExistsError()

                category = Category(id=uuid.uuid4(), name=name)
                db.add(category)
                db.commit()
            except IntegrityError:
                db.rollback()
                raise CategoryExistsError()
            except SQLAlchemyError as e:
                db.rollback()
                raise handle_database_error(e, "create_category")

        logger.info(f"Created category {category.id} ({name})")
        return category.id

    def rename(self, category_id: uuid.UUID, name: str) -> None:
        validate_category_name(name)

        with self._session_factory() as db:
            try:
                category = get_by_id(db, Category, category_id)
                if category is None:
                    raise CategoryNotFoundError(category_id)

                if _name_taken(db, name, exclude_id=category.id):
                    raise CategoryExistsError()

                category.name = name
                db.commit()
            except IntegrityError:
                db.rollback()
                raise CategoryExistsError()
            except SQLAlchemyError as e:
                db.rollback()
                raise handle_database_error(e, "rename_category")

        logger.info(f"Renamed category {category_id} to {name}")

    def delete(self, category_id: uuid.UUID) -> None:
        with self._session_factory() as db:
            try:
                if get_by_id(db, Category, category_id) is None:
                    raise CategoryNotFoundError(category_id)

                # Associations and the row go together or not at all
                self._remove_images(db, category_id)
                self._delete_row(db, category_id)
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                raise handle_database_error(e, "delete_category")

        logger.info(f"Deleted category {category_id}")

    def _remove_images(self, db: Session, category_id: uuid.UUID) -> None:
        db.execute(delete(image_categories).where(image_categories.c.category_id == category_id))

    def _delete_row(self, db: Session, category_id: uuid.UUID) -> None:
        db.execute(delete(Category).where(Category.id == category_id))
