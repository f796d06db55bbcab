"""Bearer token issuing and validation."""
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from pictureteam.constants import TOKEN_ALGORITHM, TOKEN_ISSUER, TOKEN_SUBJECT
from pictureteam.utils.exceptions import InvalidTokenError, UnexpectedError
from pictureteam.utils.logger import logger


@dataclass(frozen=True)
class UserInfo:
    """Identity carried inside a user token."""
    id: uuid.UUID
    admin: bool


class TokenIssuer:
    """Signs and verifies HS256 tokens with a single process-wide secret."""

    def __init__(
        self,
        secret: str,
        ttl: timedelta = timedelta(hours=24),
        issuer: str = TOKEN_ISSUER,
        subject: str = TOKEN_SUBJECT,
    ):
        self._secret = secret
        self.ttl = ttl
        self.issuer = issuer
        self.subject = subject

    def issue(self, user: UserInfo) -> str:
        """
        Issue a token for the given identity.

        Args:
            user: Identity to embed

        Returns:
            Encoded JWT
        """
        claims = {
            "exp": datetime.now(timezone.utc) + self.ttl,
            "iss": self.issuer,
            "sub": self.subject,
            "user": {"id": str(user.id), "admin": user.admin},
        }
        try:
            return jwt.encode(claims, self._secret, algorithm=TOKEN_ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            logger.error(f"Unexpected jwt error for user {user.id}: {e}", exc_info=True)
            raise UnexpectedError()

    def validate(self, token: str) -> UserInfo:
        """
        Validate a token and return the identity it carries.

        Any failure (bad signature, expired, malformed claims) raises the same
        InvalidTokenError.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[TOKEN_ALGORITHM],
                issuer=self.issuer,
                options={"require": ["exp", "iss", "sub"]},
            )
            if claims["sub"] != self.subject:
                raise InvalidTokenError()
            user = claims["user"]
            admin = user["admin"]
            if not isinstance(admin, bool):
                raise InvalidTokenError()
            return UserInfo(id=uuid.UUID(user["id"]), admin=admin)
        except (jwt.PyJWTError, KeyError, TypeError, ValueError, AttributeError):
            raise InvalidTokenError()
