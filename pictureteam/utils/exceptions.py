"""Custom exceptions and error handling utilities."""
from typing import Optional
from uuid import UUID

from fastapi import status

from pictureteam.constants import GENERIC_ERROR_MESSAGE
from pictureteam.utils.logger import logger


class AppException(Exception):
    """Base exception for application errors.

    Carries the HTTP status the API layer responds with and a message that is
    safe to return to clients.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = GENERIC_ERROR_MESSAGE

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a resource is not found."""
    status_code = status.HTTP_404_NOT_FOUND
    message = "resource not found"


class ValidationError(AppException):
    """Raised when validation fails."""
    status_code = status.HTTP_400_BAD_REQUEST
    message = "invalid request"


class ConflictError(AppException):
    """Raised when a unique value already exists."""
    status_code = status.HTTP_400_BAD_REQUEST
    message = "resource already exists"


class AuthenticationError(AppException):
    """Raised when authentication fails."""
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "invalid credentials"


class ForbiddenError(AppException):
    """Raised when the caller may not perform the operation."""
    status_code = status.HTTP_403_FORBIDDEN
    message = "access denied"


class UnexpectedError(AppException):
    """Opaque internal failure; details are logged, never returned."""
    pass


# Auth

class MissingTokenError(AuthenticationError):
    message = "authorization token is missing"


class InvalidTokenError(AuthenticationError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "invalid authorization token"


class IncorrectPasswordError(AuthenticationError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "incorrect password"


class NotAllowedError(ForbiddenError):
    message = "this operation is not allowed"


class UserNotFoundError(NotFoundError):
    message = "user was not found"


class InvalidEmailError(ValidationError):
    message = "the given e-mail is invalid"


class EmailExistsError(ConflictError):
    message = "the given e-mail address already exists"


# Categories

class InvalidCategoryNameError(ValidationError):
    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(f"invalid category name, the name must match the pattern: {pattern}")


class CategoryExistsError(ConflictError):
    message = "a category with the given name already exists"


class CategoryNotFoundError(NotFoundError):
    def __init__(self, category_id: Optional[UUID] = None):
        self.category_id = category_id
        message = "category was not found"
        if category_id:
            message += f": {category_id}"
        super().__init__(message)


# Images

class ImageNotFoundError(NotFoundError):
    message = "image was not found"


class ImageFileNotFoundError(NotFoundError):
    message = "image file was not found"


class InvalidImageIdError(ValidationError):
    message = "the given identifier is invalid"


class AlreadyUploadedError(ValidationError):
    message = "the image was already uploaded"


class ExpectedFileError(ValidationError):
    message = "expected a file, but got none"


# Ratings

class OwnImageError(ValidationError):
    message = "own image cannot be rated"


class InvalidRatingError(ValidationError):
    message = "the rating must be between 1 and 5"


def handle_database_error(error: Exception, operation: str) -> UnexpectedError:
    """
    Log a store/I-O failure and convert it to an opaque error.

    Args:
        error: The underlying error
        operation: Description of the operation that failed

    Returns:
        UnexpectedError safe to surface to the client
    """
    logger.error(f"Unexpected error during {operation}: {error}", exc_info=error)
    return UnexpectedError()
