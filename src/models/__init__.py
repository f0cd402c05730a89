"""SQLAlchemy models."""

from src.models.content import Content, Reaction
from src.models.list import List, ListMember
from src.models.user import User

__all__ = [
    "User",
    "List",
    "ListMember",
    "Content",
    "Reaction",
]
