"""Bearer token authentication dependencies."""
from typing import Optional

from fastapi import Depends, Header, Request

from pictureteam.auth.tokens import UserInfo
from pictureteam.services import AuthService, Services
from pictureteam.utils.exceptions import MissingTokenError, NotAllowedError

BEARER_PREFIX = "Bearer "


def get_services(request: Request) -> Services:
    """Services constructed at startup and attached to the app."""
    return request.app.state.services


def get_auth_service(services: Services = Depends(get_services)) -> AuthService:
    return services.auth


def get_current_user(
    authorization: Optional[str] = Header(None, description="Bearer token"),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserInfo:
    """
    Resolve the caller's identity from the Authorization header.

    Raises:
        MissingTokenError: If no header was sent
        InvalidTokenError: If the token does not validate
    """
    if authorization is None:
        raise MissingTokenError()

    token = authorization.strip()
    if token.startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX):].strip()

    return auth_service.validate_token(token)


def require_admin(
    user: UserInfo = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserInfo:
    """
    Require an admin caller.

    The admin claim in the token is re-checked against the stored user so a
    revoked admin cannot keep using an older token.
    """
    if not user.admin or not auth_service.is_admin(user.id):
        raise NotAllowedError()
    return user
