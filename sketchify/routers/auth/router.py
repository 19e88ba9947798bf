"""FastAPI router providing authentication endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from sketchify.config import logger
from sketchify.core import auth

from .dependencies import get_current_user, get_optional_user, parse_bearer
from .models import AuthResponse, LoginRequest, MessageResponse, UserResponse

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest) -> AuthResponse:
    """Sign a user in with Supabase Auth and return access tokens."""
    try:
        logger.info("Login request", extra={"email": payload.email})

        user = await auth.sign_in(payload.email, payload.password)
        if not user:
            raise HTTPException(status_code=401, detail="Invalid email or password")

        session_data = user.pop("session", {})

        return AuthResponse(
            success=True,
            message="Login successful",
            token=session_data.get("access_token", ""),
            refresh_token=session_data.get("refresh_token", ""),
            user=user,
        )

    except HTTPException:
        raise
    except Exception as exc:
        logger.error("Login failed", extra={"error": str(exc)})
        raise HTTPException(status_code=500, detail=f"Login failed: {exc}")


@router.post("/logout", response_model=MessageResponse)
async def logout(
    user: dict = Depends(get_current_user),
    authorization: Optional[str] = Header(default=None),
) -> MessageResponse:
    """Sign the current user out."""
    signed_out = await auth.sign_out(parse_bearer(authorization) or "")
    if not signed_out:
        raise HTTPException(status_code=500, detail="Logout failed")

    logger.info("User signed out", extra={"user_id": user["id"]})
    return MessageResponse(success=True, message="Logged out")


@router.get("/me", response_model=UserResponse)
async def me(user: Optional[dict] = Depends(get_optional_user)) -> UserResponse:
    """Report whether the caller is signed in, and as whom."""
    return UserResponse(success=True, signed_in=auth.is_signed_in(user), user=user)
