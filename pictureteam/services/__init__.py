"""Services package.

Each service is an abstract contract with a ``Default*`` implementation that
receives its collaborators explicitly; ``build_services`` wires them together
at startup.
"""
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.orm import sessionmaker

from pictureteam.auth.tokens import TokenIssuer
from pictureteam.config import Settings
from pictureteam.services.auth import AuthService, DefaultAuthService
from pictureteam.services.categories import CategoryService, DefaultCategoryService
from pictureteam.services.images import DefaultImageService, ImageService
from pictureteam.services.ratings import DefaultRatingService, RatingService
from pictureteam.services.storage import ImageStorage


@dataclass
class Services:
    auth: AuthService
    categories: CategoryService
    images: ImageService
    ratings: RatingService


def build_services(settings: Settings, session_factory: sessionmaker) -> Services:
    """Construct the default services from settings and a session factory."""
    tokens = TokenIssuer(settings.secret_key, ttl=timedelta(hours=settings.token_ttl_hours))
    storage = ImageStorage(settings.image_storage_path)
    return Services(
        auth=DefaultAuthService(session_factory, tokens),
        categories=DefaultCategoryService(session_factory),
        images=DefaultImageService(session_factory, storage),
        ratings=DefaultRatingService(session_factory),
    )


__all__ = [
    "AuthService",
    "CategoryService",
    "ImageService",
    "RatingService",
    "Services",
    "build_services",
]
