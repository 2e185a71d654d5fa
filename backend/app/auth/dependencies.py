"""
Authentication dependencies for FastAPI routes.

A token is accepted from, in order:
- Authorization header (Bearer token)
- x-auth-token header
- HttpOnly cookie (access_token)

The decoded identity is trusted as-is; the user row is not re-read, so a
token stays usable against profile routes after its account is deleted.
"""

from dataclasses import dataclass

from fastapi import Cookie, Depends, Header, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from core.logging import bind_context

from .jwt import decode_access_token, subject_user_id

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Caller identity taken from a verified access token."""

    id: int


def get_token_from_request(
    token_header: str | None = Depends(oauth2_scheme),
    x_auth_token: str | None = Header(None, alias="x-auth-token"),
    access_token_cookie: str | None = Cookie(None, alias="access_token"),
) -> str:
    """Extract the raw JWT from the request or raise 401."""
    token = token_header or x_auth_token or access_token_cookie
    if token:
        return token

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="No token, authorization denied",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(token: str = Depends(get_token_from_request)) -> AuthenticatedUser:
    """Resolve the caller's identity from a bearer token, header or cookie."""
    try:
        user_id = subject_user_id(decode_access_token(token))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is not valid",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    bind_context(user_id=user_id)
    return AuthenticatedUser(id=user_id)
