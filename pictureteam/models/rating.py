"""Rating model."""
from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Uuid
from sqlalchemy.orm import relationship
from pictureteam.database import Base


class Rating(Base):
    """A user's rating of an image, one per (rater, image) pair."""
    __tablename__ = "ratings"

    app_user_id = Column(Uuid, ForeignKey("users.id"), primary_key=True)
    image_id = Column(Uuid, ForeignKey("images.id"), primary_key=True, index=True)
    rating = Column(Integer, nullable=False)

    # Relationships
    image = relationship("Image", back_populates="ratings")

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_ratings_range"),
    )
