"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, ProviderLogin, UserResponse, VerifyResponse
from src.schemas.common import MessageResponse
from src.schemas.content import (
    ContentCreate,
    ContentEnvelope,
    ContentResponse,
    FeedPage,
    ReactionCreate,
    ReactionEnvelope,
    ReactionResponse,
)
from src.schemas.list import (
    ListCreate,
    ListDetailEnvelope,
    ListEnvelope,
    ListInvite,
    ListsEnvelope,
    ListUpdate,
)
from src.schemas.user import ProfileEnvelope, ProfileUpdate, UserSearchEnvelope

__all__ = [
    "ProviderLogin",
    "AuthResponse",
    "UserResponse",
    "VerifyResponse",
    "MessageResponse",
    "ProfileUpdate",
    "ProfileEnvelope",
    "UserSearchEnvelope",
    "ListCreate",
    "ListUpdate",
    "ListInvite",
    "ListEnvelope",
    "ListsEnvelope",
    "ListDetailEnvelope",
    "ContentCreate",
    "ContentResponse",
    "ContentEnvelope",
    "FeedPage",
    "ReactionCreate",
    "ReactionResponse",
    "ReactionEnvelope",
]
