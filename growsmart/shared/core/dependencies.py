"""
Common FastAPI dependencies for the Grow Smart application.
Provides Supabase access and bearer-token user resolution.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client

from .exceptions import AuthenticationError
from ..config.supabase import get_supabase_client

logger = logging.getLogger(__name__)

# auto_error=False so anonymous callers reach endpoints with optional auth
security = HTTPBearer(auto_error=False)


class CurrentUser:
    """User information resolved from a Supabase access token."""

    def __init__(
        self,
        user_id: str,
        email: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.user_id = user_id
        self.email = email
        self.metadata = metadata or {}


def get_database() -> Client:
    """Dependency for the Supabase client used by repositories."""
    return get_supabase_client()


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[CurrentUser]:
    """
    Resolve the caller from an optional bearer token.

    Args:
        credentials: Bearer credentials, if any were sent

    Returns:
        CurrentUser when a valid token was sent, otherwise None

    Raises:
        AuthenticationError: If a token was sent but Supabase rejects it
    """
    if credentials is None:
        return None

    try:
        response = get_database().auth.get_user(credentials.credentials)
    except Exception as e:
        logger.warning(f"Token validation failed: {e}")
        raise AuthenticationError("Invalid or expired access token")

    user = getattr(response, "user", None)
    if user is None:
        raise AuthenticationError("Invalid or expired access token")

    return CurrentUser(
        user_id=str(user.id),
        email=getattr(user, "email", None),
        metadata=getattr(user, "user_metadata", None) or {},
    )


async def get_current_user(
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
) -> CurrentUser:
    """
    Require an authenticated caller.

    Raises:
        AuthenticationError: If no bearer token was sent
    """
    if current_user is None:
        raise AuthenticationError("Not authenticated")
    return current_user
