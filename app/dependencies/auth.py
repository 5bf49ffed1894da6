"""
Authentication dependencies for FastAPI
Accepts a Bearer JWT or HTTP Basic credentials for the service account,
and provides role checks on top of the resolved principal.
"""

import secrets
from typing import Callable, Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import (
    HTTPAuthorizationCredentials,
    HTTPBasic,
    HTTPBasicCredentials,
    HTTPBearer,
)

from app.core.config import config
from app.core.logger import logger
from app.models.user import User

# Both schemes read the Authorization header; each yields None for the other's scheme
basic_security = HTTPBasic(auto_error=False, realm="documents")
bearer_security = HTTPBearer(auto_error=False)


class AuthError(Exception):
    """Custom authentication error"""
    def __init__(self, message: str, status_code: int = 401):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": 'Bearer, Basic realm="documents"'},
    )


def decode_jwt(token: str) -> dict:
    """
    Decode and validate JWT token

    Raises:
        AuthError: If token is invalid or expired
    """
    try:
        return jwt.decode(token, config.jwt_secret, algorithms=[config.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise AuthError("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid token: {str(e)}")
        raise AuthError("Invalid token")


def user_from_token(token: str) -> User:
    payload = decode_jwt(token)

    user_id = payload.get("id") or payload.get("user_id") or payload.get("sub")
    if not user_id:
        raise AuthError("Invalid token: Missing user identifier")

    roles = payload.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]
    return User(id=str(user_id), email=payload.get("email"), roles=list(roles))


def user_from_basic(credentials: HTTPBasicCredentials) -> User:
    """Check basic credentials against the configured service account"""
    valid_user = secrets.compare_digest(
        credentials.username.encode("utf-8"), config.basic_auth_username.encode("utf-8")
    )
    valid_password = secrets.compare_digest(
        credentials.password.encode("utf-8"),
        config.basic_auth_password.get_secret_value().encode("utf-8"),
    )
    if not (valid_user and valid_password):
        raise AuthError("Invalid username or password")

    return User(id=credentials.username, roles=config.basic_auth_role_list)


async def get_current_user(
    basic: Optional[HTTPBasicCredentials] = Depends(basic_security),
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(bearer_security),
) -> User:
    """
    Dependency resolving the calling principal.
    Raises 401 if no valid credentials are supplied.
    """
    if basic is None and bearer is None:
        logger.warning("Authentication required: No credentials provided")
        raise _unauthorized("Authentication required")

    try:
        if bearer is not None:
            user = user_from_token(bearer.credentials)
        else:
            user = user_from_basic(basic)
    except AuthError as e:
        logger.warning(f"Authentication failed: {e.message}")
        raise _unauthorized(e.message)

    logger.debug(f"Authentication successful for user: {user.id}")
    return user


def require_role(role: str) -> Callable:
    """
    Dependency factory requiring the principal to hold ``role``.

    Usage:
        @router.post("")
        async def create_item(user: User = Depends(require_role("DOCUMENT"))):
            ...
    """
    async def dependency(user: User = Depends(get_current_user)) -> User:
        if not user.has_role(role):
            logger.warning(
                f"Role {role} required, access denied for user: {user.id}",
                metadata={"event": "authorization_denied", "role": role, "user_roles": user.roles}
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role {role} required",
            )
        return user

    return dependency


require_document_role = require_role("DOCUMENT")
require_author_role = require_role("AUTHOR")
