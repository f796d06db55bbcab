"""Category model and image association table."""
from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Table, Uuid, func
from sqlalchemy.orm import relationship
import uuid
from pictureteam.database import Base


image_categories = Table(
    "image_categories",
    Base.metadata,
    Column("image_id", Uuid, ForeignKey("images.id"), primary_key=True),
    Column("category_id", Uuid, ForeignKey("categories.id"), primary_key=True, index=True),
)


class Category(Base):
    """Image category; names are unique case-insensitively."""
    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    created = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    name = Column(String, nullable=False)

    # Relationships
    images = relationship("Image", secondary=image_categories, back_populates="categories")


Index("ix_categories_name_lower", func.lower(Category.name), unique=True)
