"""Authentication-related FastAPI dependencies."""

from typing import Optional

from fastapi import Header, HTTPException

from sketchify.core import auth


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    """Return the token from a ``Bearer <token>`` header, or None."""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


async def get_current_user(authorization: Optional[str] = Header(default=None)) -> dict:
    """Retrieve the authenticated user from a Supabase Auth Bearer token."""
    if not authorization:
        raise HTTPException(status_code=401, detail="Authorization header required")

    access_token = parse_bearer(authorization)
    if not access_token:
        raise HTTPException(
            status_code=401, detail="Invalid authorization header format"
        )

    user = await auth.verify_access_token(access_token)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return user


async def get_optional_user(
    authorization: Optional[str] = Header(default=None),
) -> Optional[dict]:
    """Retrieve the authenticated user if the bearer token is valid, else None."""
    return await auth.get_current_user(parse_bearer(authorization))
