"""
Session authentication dependencies.

The session token is read from the `accessToken` cookie, falling back to
an `Authorization: Bearer` header for API clients.
"""

from typing import Optional

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import InsufficientPermissionsError
from modules.auth.interfaces import IAuthService
from modules.auth.models import AuthContext
from shared.exceptions import AuthenticationError, NotFoundError

from ..dependencies import get_auth_service

SESSION_COOKIE = "accessToken"

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


def extract_session_token(
    cookie_token: Optional[str],
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    """Pick the session token from the cookie, else the bearer header."""
    if cookie_token:
        return cookie_token
    if credentials is not None:
        return credentials.credentials
    return None


async def get_current_user(
    access_token: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthContext:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthContext = Depends(get_current_user)):
            return {"email": user.identity}
    """
    token = extract_session_token(access_token, credentials)
    try:
        return await auth.authenticate(token)
    except (AuthenticationError, NotFoundError) as e:
        raise AuthError(e.message)


async def require_admin(
    user: AuthContext = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthContext:
    """Dependency that requires an authenticated admin."""
    try:
        return auth.require_admin(user)
    except InsufficientPermissionsError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)

