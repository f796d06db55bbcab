"""Image lifecycle: create, categorize, upload, search."""
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence

from sqlalchemy import insert, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload, sessionmaker

from pictureteam.models import Category, Image, image_categories
from pictureteam.services.storage import ImageStorage
from pictureteam.utils.db import get_by_id
from pictureteam.utils.exceptions import (
    AlreadyUploadedError,
    CategoryNotFoundError,
    ExpectedFileError,
    ImageFileNotFoundError,
    ImageNotFoundError,
    InvalidImageIdError,
    NotAllowedError,
    handle_database_error,
)
from pictureteam.utils.logger import logger


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so search text matches literally (escape char ``\\``)."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass
class ImageWithCategories:
    image: Image
    categories: List[Category] = field(default_factory=list)


class ImageService(ABC):
    """Image lifecycle operations."""

    @abstractmethod
    def create(
        self,
        owner_id: uuid.UUID,
        title: str,
        description: Optional[str],
        category_ids: Sequence[uuid.UUID],
    ) -> uuid.UUID:
        ...

    @abstractmethod
    def bind_categories(
        self, image_id: uuid.UUID, owner_id: uuid.UUID, category_ids: Sequence[uuid.UUID]
    ) -> None:
        ...

    @abstractmethod
    def save_image(self, image_id: uuid.UUID, filename: Optional[str], stream: Optional[BinaryIO]) -> None:
        ...

    @abstractmethod
    def get_image(self, image_id: uuid.UUID) -> Path:
        ...

    @abstractmethod
    def get_image_info(self, image_id: uuid.UUID) -> ImageWithCategories:
        ...

    @abstractmethod
    def search(
        self, query: Optional[str] = None, offset: int = 0, limit: Optional[int] = None
    ) -> List[ImageWithCategories]:
        ...

    @abstractmethod
    def images_by_owner(self, owner_id: uuid.UUID) -> List[ImageWithCategories]:
        ...


class DefaultImageService(ImageService):
    """ImageService backed by the relational store and local file storage."""

    def __init__(self, session_factory: sessionmaker, storage: ImageStorage):
        self._session_factory = session_factory
        self._storage = storage

    def create(
        self,
        owner_id: uuid.UUID,
        title: str,
        description: Optional[str],
        category_ids: Sequence[uuid.UUID],
    ) -> uuid.UUID:
        with self._session_factory() as db:
            try:
                for category_id in category_ids:
                    if get_by_id(db, Category, category_id) is None:
                        raise CategoryNotFoundError(category_id)

                image = Image(id=uuid.uuid4(), owner_id=owner_id, title=title, description=description)
                db.add(image)
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                raise handle_database_error(e, "create_image")

        # Categories are bound one by one after the image row is committed;
        # a failure here leaves a partially categorized image that
        # bind_categories can repair.
        try:
            self._bind(image.id, category_ids)
        except SQLAlchemyError as e:
            logger.error(f"Image {image.id} created but category binding failed")
            raise handle_database_error(e, "bind_categories")

        logger.info(f"Created image {image.id} for user {owner_id}")
        return image.id

    def bind_categories(
        self, image_id: uuid.UUID, owner_id: uuid.UUID, category_ids: Sequence[uuid.UUID]
    ) -> None:
        with self._session_factory() as db:
            try:
                image = get_by_id(db, Image, image_id)
                if image is None:
                    raise ImageNotFoundError()
                if image.owner_id != owner_id:
                    raise NotAllowedError()
                for category_id in category_ids:
                    if get_by_id(db, Category, category_id) is None:
                        raise CategoryNotFoundError(category_id)
            except SQLAlchemyError as e:
                raise handle_database_error(e, "bind_categories")

        try:
            self._bind(image_id, category_ids)
        except SQLAlchemyError as e:
            raise handle_database_error(e, "bind_categories")

    def _bind(self, image_id: uuid.UUID, category_ids: Sequence[uuid.UUID]) -> None:
        """Add each missing association in its own commit."""
        for category_id in dict.fromkeys(category_ids):
            with self._session_factory() as db:
                exists = db.execute(
                    select(image_categories.c.image_id).where(
                        image_categories.c.image_id == image_id,
                        image_categories.c.category_id == category_id,
                    )
                ).first()
                if exists:
                    continue
                db.execute(insert(image_categories).values(image_id=image_id, category_id=category_id))
                db.commit()

    def save_image(self, image_id: uuid.UUID, filename: Optional[str], stream: Optional[BinaryIO]) -> None:
        with self._session_factory() as db:
            try:
                image = get_by_id(db, Image, image_id)
            except SQLAlchemyError as e:
                raise handle_database_error(e, "save_image")

        if image is None:
            raise InvalidImageIdError()
        if image.upload_date is not None:
            raise AlreadyUploadedError()
        if stream is None:
            raise ExpectedFileError()

        final_path = self._storage.path_for(image_id, self._storage.extension_for(filename))

        try:
            temp_path = self._storage.write_temp(image_id, stream)
        except OSError as e:
            raise handle_database_error(e, "save_image")

        with self._session_factory() as db:
            try:
                # Only one upload may claim the image; the row stays locked
                # until the file is in place and the claim commits.
                claimed = db.execute(
                    update(Image)
                    .where(Image.id == image_id, Image.upload_date.is_(None))
                    .values(upload_date=datetime.now(timezone.utc))
                    .execution_options(synchronize_session=False)
                ).rowcount
                if not claimed:
                    db.rollback()
                    self._storage.discard(temp_path)
                    raise AlreadyUploadedError()

                self._storage.commit(temp_path, final_path)
            except (SQLAlchemyError, OSError) as e:
                db.rollback()
                self._storage.discard(temp_path)
                raise handle_database_error(e, "save_image")

            try:
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                self._storage.discard(final_path)
                raise handle_database_error(e, "save_image")

        logger.info(f"Uploaded image {image_id} to {final_path}")

    def get_image(self, image_id: uuid.UUID) -> Path:
        path = self._storage.find(image_id)
        if path is None:
            raise ImageFileNotFoundError()
        return path

    def get_image_info(self, image_id: uuid.UUID) -> ImageWithCategories:
        with self._session_factory() as db:
            try:
                image = db.execute(
                    select(Image).options(selectinload(Image.categories)).where(Image.id == image_id)
                ).scalar_one_or_none()
            except SQLAlchemyError as e:
                raise handle_database_error(e, "get_image_info")

        if image is None:
            raise ImageNotFoundError()
        return ImageWithCategories(image=image, categories=list(image.categories))

    def search(
        self, query: Optional[str] = None, offset: int = 0, limit: Optional[int] = None
    ) -> List[ImageWithCategories]:
        stmt = select(Image).options(selectinload(Image.categories))
        if query:
            pattern = f"%{escape_like(query)}%"
            stmt = stmt.where(
                or_(Image.title.ilike(pattern, escape="\\"), Image.description.ilike(pattern, escape="\\"))
            )
        stmt = stmt.order_by(Image.created.desc(), Image.id).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        with self._session_factory() as db:
            try:
                images = db.execute(stmt).scalars().all()
            except SQLAlchemyError as e:
                raise handle_database_error(e, "search_images")

        # Filtered after paging, so a page can come back short
        return [
            ImageWithCategories(image=image, categories=list(image.categories))
            for image in images
            if self._storage.exists(image.id)
        ]

    def images_by_owner(self, owner_id: uuid.UUID) -> List[ImageWithCategories]:
        with self._session_factory() as db:
            try:
                images = db.execute(
                    select(Image)
                    .options(selectinload(Image.categories))
                    .where(Image.owner_id == owner_id)
                    .order_by(Image.created.desc(), Image.id)
                ).scalars().all()
            except SQLAlchemyError as e:
                raise handle_database_error(e, "images_by_owner")

        return [ImageWithCategories(image=image, categories=list(image.categories)) for image in images]
