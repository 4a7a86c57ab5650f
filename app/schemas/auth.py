"""Authentication and user schemas."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import UserRole


MOBILE_PATTERN = r"^[6-9]\d{9}$"


class LoginRequest(BaseModel):
    """Login request schema."""
    mobile: str = Field(..., pattern=MOBILE_PATTERN, description="10-digit mobile number")
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Token response schema."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class UserResponse(BaseModel):
    """User as returned to clients. The password hash is never included."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    mobile: str
    name: Optional[str] = None
    role: UserRole
    is_active: bool
    device_id: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class LoginResponse(BaseModel):
    """Login response with user and tokens."""
    user: UserResponse
    tokens: TokenResponse


class RefreshTokenRequest(BaseModel):
    """Refresh token request schema."""
    refresh_token: str


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; omitted fields are left untouched."""
    name: Optional[str] = Field(None, max_length=255)
    device_id: Optional[str] = Field(None, max_length=100)
