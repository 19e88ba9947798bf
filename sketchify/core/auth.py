"""
Identity module for sign-in, sign-out and current-user lookup.
Uses Supabase Auth; tokens are Supabase JWT access tokens.
"""

from typing import Any, Dict, Optional

from sketchify.config import logger
from sketchify.db import get_supabase_client


def _user_payload(user: Any) -> Dict[str, Any]:
    user_email = user.email or ""
    metadata = user.user_metadata or {}
    return {
        "id": user.id,
        "email": user_email,
        "username": metadata.get(
            "username", user_email.split("@")[0] if user_email else "user"
        ),
        "created_at": user.created_at,
    }


def is_signed_in(user: Optional[Dict[str, Any]]) -> bool:
    return bool(user and user.get("id"))


async def sign_in(email: str, password: str) -> Optional[Dict[str, Any]]:
    """
    Authenticate a user with email and password using Supabase Auth.

    Args:
        email: User email
        password: Plain text password

    Returns:
        Dict containing user data and session tokens if authentication successful, None otherwise
    """
    try:
        client = get_supabase_client()

        logger.info(f"Signing in user with Supabase Auth: {email}")

        response = client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )

        if response.user and response.session:
            user_data = _user_payload(response.user)
            user_data["session"] = {
                "access_token": response.session.access_token,
                "refresh_token": response.session.refresh_token,
                "expires_in": response.session.expires_in,
                "token_type": response.session.token_type,
            }
            logger.info(f"Successfully signed in user: {response.user.id}")
            return user_data

        logger.warning(f"Sign-in failed for user: {email}")
        return None

    except Exception as e:
        logger.error(f"Error signing in user: {e}")
        return None


async def sign_out(access_token: str) -> bool:
    """
    Revoke the session behind ``access_token``.

    Returns:
        True if Supabase accepted the sign-out, False otherwise
    """
    try:
        client = get_supabase_client()
        client.auth.admin.sign_out(access_token)
        logger.info("User signed out")
        return True

    except Exception as e:
        logger.error(f"Error signing out user: {e}")
        return False


async def verify_access_token(access_token: str) -> Optional[Dict[str, Any]]:
    """
    Verify a Supabase Auth access token and return user data.

    Args:
        access_token: JWT access token from Supabase Auth

    Returns:
        User dict if token is valid, None otherwise
    """
    try:
        client = get_supabase_client()

        logger.debug("Verifying Supabase Auth access token")

        response = client.auth.get_user(access_token)

        if response and getattr(response, "user", None):
            logger.debug(f"Token verified for user: {response.user.id}")
            return _user_payload(response.user)

        logger.warning("Invalid or expired access token")
        return None

    except Exception as e:
        logger.error(f"Error verifying access token: {e}")
        return None


async def get_current_user(access_token: Optional[str]) -> Optional[Dict[str, Any]]:
    """Return the signed-in user for ``access_token``; any failure yields None."""
    if not access_token:
        return None
    try:
        return await verify_access_token(access_token)
    except Exception as e:
        logger.debug(f"Current user lookup failed: {e}")
        return None
