"""Application dependencies for dependency injection."""
from typing import Annotated, Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.database import get_db
from app.core.exceptions import AuthenticationError, PermissionDeniedError
from app.core.security import decode_token, TokenPayload
from app.core.logging import get_logger
from app.models.user import User


# auto_error=False so a missing header reaches our own 401 instead of FastAPI's default
security = HTTPBearer(auto_error=False)
logger = get_logger(__name__)


class Principal:
    """Identity established by the ``protect`` gate for the current request."""

    def __init__(self, token: TokenPayload):
        self.token = token
        self.user_id = token.sub
        self.role = token.role

    def __repr__(self) -> str:
        return f"<Principal user_id={self.user_id} role={self.role}>"


async def protect(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Principal:
    """Capability gate: every protected route requires a valid access token."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise AuthenticationError("Invalid or expired token")

    if payload.type != "access":
        raise AuthenticationError("Invalid token type. Access token required.")

    return Principal(payload)


async def get_current_user(
    principal: Principal = Depends(protect),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Load the account behind the token; unknown or inactive users are unauthenticated."""
    result = await db.execute(
        select(User).where(User.id == principal.user_id)
    )
    user = result.scalar_one_or_none()

    if user is None or not user.is_active:
        logger.warning(f"Token for unknown or inactive user {principal.user_id}")
        raise AuthenticationError("User not found or inactive")

    return user


# Type aliases for cleaner dependency injection
CurrentPrincipal = Annotated[Principal, Depends(protect)]
CurrentUser = Annotated[User, Depends(get_current_user)]
DbSession = Annotated[AsyncSession, Depends(get_db)]


def require_role(*roles: str):
    """Dependency factory to require specific roles."""
    async def role_checker(principal: CurrentPrincipal) -> Principal:
        if principal.role not in roles:
            raise PermissionDeniedError(
                f"User role '{principal.role}' is not authorized to access this route"
            )
        return principal
    return role_checker
