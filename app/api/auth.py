"""Authentication API endpoints."""
from fastapi import APIRouter
from sqlalchemy import select

from app.core.config import settings
from app.core.database import utcnow
from app.core.dependencies import CurrentUser, DbSession
from app.core.exceptions import AuthenticationError, PermissionDeniedError
from app.core.logging import get_logger
from app.core.security import (
    verify_password, create_access_token, create_refresh_token, decode_token
)
from app.models.user import User
from app.schemas.auth import (
    LoginRequest, LoginResponse, TokenResponse, UserResponse, RefreshTokenRequest
)
from app.schemas.common import ApiResponse


router = APIRouter()
logger = get_logger(__name__)


def _issue_tokens(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user_id=user.id, role=user.role.value),
        refresh_token=create_refresh_token(user_id=user.id, role=user.role.value),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    request: LoginRequest,
    db: DbSession,
):
    """Authenticate with mobile number and password and return JWT tokens."""
    result = await db.execute(
        select(User).where(User.mobile == request.mobile)
    )
    user = result.scalar_one_or_none()

    if user is None or not verify_password(request.password, user.hashed_password):
        logger.warning(f"Failed login attempt for mobile: {request.mobile}")
        raise AuthenticationError("Invalid mobile number or password")

    if not user.is_active:
        raise PermissionDeniedError("User account is inactive")

    user.last_login = utcnow()
    await db.commit()
    await db.refresh(user)

    logger.info("User logged in", extra={"user_id": user.id})

    return ApiResponse(
        data=LoginResponse(
            user=UserResponse.model_validate(user),
            tokens=_issue_tokens(user),
        )
    )


@router.post("/refresh", response_model=ApiResponse[TokenResponse])
async def refresh_token(
    request: RefreshTokenRequest,
    db: DbSession,
):
    """Exchange a valid refresh token for a new token pair."""
    payload = decode_token(request.refresh_token)

    if payload is None:
        raise AuthenticationError("Invalid or expired refresh token")

    if payload.type != "refresh":
        raise AuthenticationError("Invalid token type. Refresh token required.")

    result = await db.execute(
        select(User).where(User.id == payload.sub)
    )
    user = result.scalar_one_or_none()

    if user is None or not user.is_active:
        raise AuthenticationError("User not found or inactive")

    return ApiResponse(data=_issue_tokens(user))


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_current_user_info(
    current_user: CurrentUser,
):
    """Get current authenticated user information."""
    return ApiResponse(data=UserResponse.model_validate(current_user))
