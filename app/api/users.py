"""User profile API endpoints."""
from fastapi import APIRouter
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import CurrentPrincipal, DbSession
from app.core.exceptions import NotFoundError
from app.core.logging import get_logger
from app.models.user import User
from app.schemas.auth import UserResponse, ProfileUpdateRequest
from app.schemas.common import ApiResponse


router = APIRouter()
logger = get_logger(__name__)


async def get_user_or_404(db: AsyncSession, user_id: str) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.get("/profile", response_model=ApiResponse[UserResponse])
async def get_profile(
    principal: CurrentPrincipal,
    db: DbSession,
):
    """Get the caller's profile."""
    user = await get_user_or_404(db, principal.user_id)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.put("/profile", response_model=ApiResponse[UserResponse])
async def update_profile(
    request: ProfileUpdateRequest,
    principal: CurrentPrincipal,
    db: DbSession,
):
    """Patch name and/or device id. Fields missing from the request are kept."""
    user = await get_user_or_404(db, principal.user_id)

    if request.name:
        user.name = request.name.strip()
    if request.device_id:
        user.device_id = request.device_id

    await db.commit()
    await db.refresh(user)

    logger.info("Profile updated", extra={"user_id": user.id})
    return ApiResponse(data=UserResponse.model_validate(user))
