"""User profile schemas."""

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field

from src.schemas.auth import UserResponse


class ProfileUpdate(BaseModel):
    """Update the caller's profile."""

    name: str | None = Field(None, min_length=1, max_length=100)
    avatar: AnyHttpUrl | None = None


class PublicUserResponse(BaseModel):
    """User as seen by other users (no plan information).

    ``email`` is withheld from viewers who are not members of a shared list.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str | None
    name: str
    avatar: str | None


class ProfileEnvelope(BaseModel):
    user: UserResponse


class UserSearchEnvelope(BaseModel):
    user: PublicUserResponse
