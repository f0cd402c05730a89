"""List schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.models.enums import MemberRole
from src.schemas.content import ContentDetailResponse, ContentResponse
from src.schemas.user import PublicUserResponse


class ListCreate(BaseModel):
    """Create a new list."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    is_public: bool = False


class ListUpdate(BaseModel):
    """Update a list."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    is_public: bool | None = None


class ListResponse(BaseModel):
    """List response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    owner_id: int
    is_public: bool
    created_at: datetime
    updated_at: datetime


class ListSummaryResponse(ListResponse):
    """List as shown on the caller's home screen."""

    role: MemberRole
    latest_content: ContentResponse | None = None


class MemberResponse(BaseModel):
    """Membership of a user in a list."""

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    role: MemberRole
    joined_at: datetime
    user: PublicUserResponse


class ListDetailResponse(ListResponse):
    """A list with its members and feed-ordered contents."""

    owner: PublicUserResponse
    members: list[MemberResponse]
    contents: list[ContentDetailResponse]
    user_role: MemberRole | None  # None when viewing a public list as a non-member


class ListInvite(BaseModel):
    """Invite a user to a list by email."""

    email: EmailStr = Field(..., max_length=255)


class ListEnvelope(BaseModel):
    list: ListResponse


class ListsEnvelope(BaseModel):
    lists: list[ListSummaryResponse]


class ListDetailEnvelope(BaseModel):
    list: ListDetailResponse
