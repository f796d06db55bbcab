"""Image model."""
from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.orm import relationship
import uuid
from pictureteam.database import Base
from pictureteam.models.category import image_categories


class Image(Base):
    """Image metadata; the binary lives in image storage once uploaded."""
    __tablename__ = "images"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    created = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    upload_date = Column(DateTime(timezone=True), nullable=True)  # Set once, on upload
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    owner_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    owner = relationship("User", backref="images")
    categories = relationship("Category", secondary=image_categories, back_populates="images")
    ratings = relationship("Rating", back_populates="image")
