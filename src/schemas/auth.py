"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.models.enums import AuthProvider


class ProviderLogin(BaseModel):
    """Login with an identity asserted by an external provider."""

    provider: AuthProvider
    provider_id: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    avatar: str | None = Field(None, max_length=2048)


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    avatar: str | None
    is_premium: bool


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse


class VerifyResponse(BaseModel):
    """Token verification response."""

    user: UserResponse
