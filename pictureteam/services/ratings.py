"""Image ratings."""
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from pictureteam.constants import MAX_RATING, MIN_RATING
from pictureteam.models import Image, Rating, User
from pictureteam.utils.db import get_by_id
from pictureteam.utils.exceptions import (
    ImageNotFoundError,
    InvalidRatingError,
    OwnImageError,
    handle_database_error,
)


@dataclass
class RatingSummary:
    ratings: List[Rating]

    @property
    def count(self) -> int:
        return len(self.ratings)

    @property
    def average(self) -> float:
        if not self.ratings:
            return 0.0
        return sum(r.rating for r in self.ratings) / len(self.ratings)


@dataclass
class UserRating:
    email: str
    average_rating: Optional[float]


class RatingService(ABC):
    """Rating operations."""

    @abstractmethod
    def rate(self, image_id: uuid.UUID, rater_id: uuid.UUID, value: int) -> None:
        ...

    @abstractmethod
    def ratings(self, image_id: uuid.UUID) -> RatingSummary:
        ...

    @abstractmethod
    def user_averages(self) -> List[UserRating]:
        ...


class DefaultRatingService(RatingService):
    """RatingService backed by the relational store."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def rate(self, image_id: uuid.UUID, rater_id: uuid.UUID, value: int) -> None:
        with self._session_factory() as db:
            try:
                image = get_by_id(db, Image, image_id)
                if image is None:
                    raise ImageNotFoundError()
                if image.owner_id == rater_id:
                    raise OwnImageError()
                if not MIN_RATING <= value <= MAX_RATING:
                    raise InvalidRatingError()

                self._upsert(db, image_id, rater_id, value)
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                raise handle_database_error(e, "rate_image")

    def _upsert(self, db: Session, image_id: uuid.UUID, rater_id: uuid.UUID, value: int) -> None:
        """Insert the rating or overwrite the user's earlier one in a single statement."""
        dialect = postgresql if db.get_bind().dialect.name == "postgresql" else sqlite
        stmt = dialect.insert(Rating).values(app_user_id=rater_id, image_id=image_id, rating=value)
        db.execute(
            stmt.on_conflict_do_update(
                index_elements=[Rating.app_user_id, Rating.image_id],
                set_={"rating": stmt.excluded.rating},
            )
        )

    def ratings(self, image_id: uuid.UUID) -> RatingSummary:
        with self._session_factory() as db:
            try:
                if get_by_id(db, Image, image_id) is None:
                    raise ImageNotFoundError()
                ratings = db.execute(
                    select(Rating).where(Rating.image_id == image_id)
                ).scalars().all()
            except SQLAlchemyError as e:
                raise handle_database_error(e, "get_image_ratings")

        return RatingSummary(ratings=list(ratings))

    def user_averages(self) -> List[UserRating]:
        """Average rating each user received across the images they own."""
        with self._session_factory() as db:
            try:
                rows = db.execute(
                    select(User.email, func.avg(Rating.rating))
                    .outerjoin(Image, Image.owner_id == User.id)
                    .outerjoin(Rating, Rating.image_id == Image.id)
                    .group_by(User.id, User.email)
                    .order_by(User.email)
                ).all()
            except SQLAlchemyError as e:
                raise handle_database_error(e, "user_averages")

        return [
            UserRating(email=email, average_rating=float(avg) if avg is not None else None)
            for email, avg in rows
        ]
