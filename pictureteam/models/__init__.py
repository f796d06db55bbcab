"""Models package."""
from pictureteam.models.user import User
from pictureteam.models.category import Category, image_categories
from pictureteam.models.image import Image
from pictureteam.models.rating import Rating

__all__ = ["User", "Category", "Image", "Rating", "image_categories"]
