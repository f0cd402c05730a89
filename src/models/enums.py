"""Enums for model fields."""

from enum import Enum


class AuthProvider(str, Enum):
    """Identity providers a user can sign in with."""

    GOOGLE = "google"
    APPLE = "apple"
    ANONYMOUS = "anonymous"


class MemberRole(str, Enum):
    """Role of a user within a list."""

    OWNER = "owner"
    MEMBER = "member"


class ContentType(str, Enum):
    """Kinds of content that can be added to a list feed."""

    IMAGE = "image"
    VIDEO = "video"
    URL = "url"


class ReactionType(str, Enum):
    """Reactions a member can leave on a piece of content."""

    LIKE = "like"
    LOVE = "love"
    DISLIKE = "dislike"
