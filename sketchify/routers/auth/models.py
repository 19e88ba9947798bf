"""Pydantic models for authentication endpoints."""

from typing import Optional

from pydantic import BaseModel, EmailStr


class LoginRequest(BaseModel):
    """Request payload for user login."""

    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    """Response payload for successful authentication."""

    success: bool
    message: str
    token: str
    refresh_token: Optional[str] = None
    user: dict


class MessageResponse(BaseModel):
    """Generic success response with message."""

    success: bool
    message: str


class UserResponse(BaseModel):
    """Response payload for current user information."""

    success: bool
    signed_in: bool
    user: Optional[dict] = None
