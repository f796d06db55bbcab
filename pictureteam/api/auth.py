"""Authentication API endpoints."""
from fastapi import APIRouter, Depends

from pictureteam.auth.bearer import get_auth_service
from pictureteam.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from pictureteam.services import AuthService
from pictureteam.utils.serialization import serialize_uuid

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse)
def register(
    request: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> RegisterResponse:
    """
    Register a new user.

    Args:
        request: E-mail and password
        auth_service: Credential store

    Returns:
        ID of the new user
    """
    user_id = auth_service.register(request.email, request.password)
    return RegisterResponse(id=serialize_uuid(user_id))


@router.post("/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """
    Login for existing users.

    Args:
        request: Login credentials
        auth_service: Credential store

    Returns:
        Bearer token valid for 24 hours
    """
    token = auth_service.login(request.email, request.password)
    return LoginResponse(token=token)
