"""Schemas for registration and login."""
from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Request schema for /api/auth/register endpoint."""
    email: str = Field(..., description="E-mail address, case-insensitive")
    password: str


class RegisterResponse(BaseModel):
    id: str


class LoginRequest(BaseModel):
    """Request schema for /api/auth/login endpoint."""
    email: str
    password: str


class LoginResponse(BaseModel):
    token: str
