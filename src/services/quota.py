"""Free plan limits and premium upgrade."""

import logging
from enum import Enum

from sqlalchemy import func
from sqlalchemy.orm import Session

from src.config import get_settings
from src.errors import ConflictError, QuotaExceededError
from src.models.content import Content
from src.models.list import List
from src.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()


class ResourceClass(str, Enum):
    LIST = "list"
    CONTENT = "content"


def count_owned_lists(db: Session, user_id: int) -> int:
    """Lists owned by the user; memberships in other lists do not count."""
    return db.query(func.count(List.id)).filter(List.owner_id == user_id).scalar() or 0


def count_list_contents(db: Session, list_id: int) -> int:
    """Contents in the list, whoever added them."""
    return db.query(func.count(Content.id)).filter(Content.list_id == list_id).scalar() or 0


def is_quota_exceeded(
    db: Session, actor: User, resource_class: ResourceClass, list_id: int | None = None
) -> bool:
    """Check whether creating one more resource would break the free plan ceiling.

    The content ceiling applies to the whole target list but is gated on the
    adder's plan: a premium member may grow a shared list past the limit, while
    any free member is blocked once the list is full.
    """
    if actor.is_premium:
        return False
    if resource_class == ResourceClass.LIST:
        return count_owned_lists(db, actor.id) >= settings.free_list_limit
    if list_id is None:
        raise ValueError("list_id is required for content quota checks")
    return count_list_contents(db, list_id) >= settings.free_content_limit


def enforce_quota(
    db: Session, actor: User, resource_class: ResourceClass, list_id: int | None = None
) -> None:
    """Raise QuotaExceededError if the free plan ceiling is reached."""
    if is_quota_exceeded(db, actor, resource_class, list_id=list_id):
        logger.info(f"Quota exceeded for user {actor.id}: {resource_class.value}")
        if resource_class == ResourceClass.LIST:
            message = f"Free plan users can own up to {settings.free_list_limit} lists"
        else:
            message = f"Free plan lists can hold up to {settings.free_content_limit} contents"
        raise QuotaExceededError(message)


def upgrade_to_premium(db: Session, user: User) -> User:
    """Flip the premium flag. Upgrading twice is rejected, not ignored."""
    if user.is_premium:
        raise ConflictError("User is already on the premium plan", reason="already-premium")
    user.is_premium = True
    db.commit()
    db.refresh(user)
    logger.info(f"Upgraded user {user.id} to premium")
    return user
