"""Registration, login and token validation."""
import re
import uuid
from abc import ABC, abstractmethod

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from pictureteam.auth.tokens import TokenIssuer, UserInfo
from pictureteam.constants import EMAIL_REGEX
from pictureteam.models import User
from pictureteam.utils.db import get_by_field, get_by_id
from pictureteam.utils.exceptions import (
    EmailExistsError,
    IncorrectPasswordError,
    InvalidEmailError,
    UserNotFoundError,
    handle_database_error,
)
from pictureteam.utils.hashing import hash_password, verify_password
from pictureteam.utils.logger import logger

_email_re = re.compile(EMAIL_REGEX)


def normalize_email(email: str) -> str:
    """Trim and lowercase an e-mail address."""
    return email.strip().lower()


def validate_email(email: str) -> bool:
    """Check an e-mail address against the structural pattern."""
    return _email_re.match(email) is not None


class AuthService(ABC):
    """Credential operations."""

    @abstractmethod
    def register(self, email: str, password: str) -> uuid.UUID:
        """Create a non-admin user and return its id."""

    @abstractmethod
    def login(self, email: str, password: str) -> str:
        """Check credentials and return a signed token."""

    @abstractmethod
    def validate_token(self, token: str) -> UserInfo:
        """Return the identity carried by a token."""

    @abstractmethod
    def is_admin(self, user_id: uuid.UUID) -> bool:
        """Whether the stored user currently holds the admin flag."""


class DefaultAuthService(AuthService):
    """AuthService backed by the relational store."""

    def __init__(self, session_factory: sessionmaker, tokens: TokenIssuer):
        self._session_factory = session_factory
        self._tokens = tokens

    def register(self, email: str, password: str) -> uuid.UUID:
        final_email = normalize_email(email)

        if not validate_email(final_email):
            raise InvalidEmailError()

        password_hash = hash_password(password.strip())

        with self._session_factory() as db:
            try:
                if get_by_field(db, User, "email", final_email) is not None:
                    raise EmailExistsError()

                user = User(
                    id=uuid.uuid4(),
                    email=final_email,
                    password_hash=password_hash,
                    is_admin=False,
                )
                db.add(user)
                db.commit()
            except IntegrityError:
                # Lost a race with a concurrent registration of the same e-mail
                db.rollback()
                raise EmailExistsError()
            except SQLAlchemyError as e:
                db.rollback()
                raise handle_database_error(e, "register")

        logger.info(f"Registered user {user.id}")
        return user.id

    def login(self, email: str, password: str) -> str:
        final_email = normalize_email(email)

        with self._session_factory() as db:
            try:
                user = get_by_field(db, User, "email", final_email)
            except SQLAlchemyError as e:
                raise handle_database_error(e, "login")

        if user is None:
            raise UserNotFoundError()

        if not verify_password(user.password_hash, password.strip()):
            raise IncorrectPasswordError()

        return self._tokens.issue(UserInfo(id=user.id, admin=user.is_admin))

    def validate_token(self, token: str) -> UserInfo:
        return self._tokens.validate(token)

    def is_admin(self, user_id: uuid.UUID) -> bool:
        with self._session_factory() as db:
            try:
                user = get_by_id(db, User, user_id)
            except SQLAlchemyError as e:
                raise handle_database_error(e, "is_admin")

        return user is not None and user.is_admin
