"""Access control for lists, memberships, contents and reactions.

``authorize`` is a pure function over the facts relevant to one request; the
first matching rule decides. ``AccessControl`` gathers those facts from the
database and turns a denial into the matching application error.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.orm import Session

from src.errors import (
    AccessDeniedError,
    AppError,
    CannotRemoveOwnerError,
    ConflictError,
    NotFoundError,
)
from src.models.content import Content
from src.models.enums import MemberRole
from src.models.list import List, ListMember

logger = logging.getLogger(__name__)


class Action(str, Enum):
    """Things an actor can try to do to a list or its content."""

    READ_LIST = "read_list"
    READ_CONTENT = "read_content"
    REACT = "react"
    ADD_CONTENT = "add_content"
    UPDATE_LIST = "update_list"
    DELETE_LIST = "delete_list"
    INVITE_MEMBER = "invite_member"
    REMOVE_MEMBER = "remove_member"
    DELETE_CONTENT = "delete_content"
    LEAVE_LIST = "leave_list"


OWNER_ACTIONS = {
    Action.UPDATE_LIST,
    Action.DELETE_LIST,
    Action.INVITE_MEMBER,
    Action.REMOVE_MEMBER,
}

NOT_A_MEMBER = "not-a-member"
NOT_OWNER = "not-owner"
CANNOT_REMOVE_OWNER = "cannot-remove-owner"
NOT_CONTENT_AUTHOR_OR_OWNER = "not-content-author-or-owner"
OWNER_CANNOT_LEAVE = "owner-cannot-leave"
USER_NOT_FOUND = "user-not-found"
ALREADY_MEMBER = "already-member"


@dataclass(frozen=True)
class AccessFacts:
    """What is known about the actor and the resource at decision time."""

    actor_id: int
    owner_id: int
    is_public: bool = False
    actor_role: MemberRole | None = None
    content_author_id: int | None = None
    # Member being removed, or user being invited (None if the email matched nobody)
    target_user_id: int | None = None
    target_role: MemberRole | None = None


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str | None = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "Decision":
        return cls(allowed=False, reason=reason)


def authorize(action: Action, facts: AccessFacts) -> Decision:
    """Decide whether the actor may perform the action."""
    is_member = facts.actor_role is not None
    is_owner = facts.actor_id == facts.owner_id

    if action in (Action.READ_LIST, Action.READ_CONTENT):
        # Public lists are readable by anyone signed in, never writable
        if is_member or facts.is_public:
            return Decision.allow()
        return Decision.deny(NOT_A_MEMBER)

    if action in (Action.REACT, Action.ADD_CONTENT):
        return Decision.allow() if is_member else Decision.deny(NOT_A_MEMBER)

    if action in OWNER_ACTIONS:
        if not is_owner:
            return Decision.deny(NOT_OWNER)
        if action == Action.REMOVE_MEMBER and facts.target_user_id == facts.owner_id:
            return Decision.deny(CANNOT_REMOVE_OWNER)
        if action == Action.INVITE_MEMBER:
            if facts.target_user_id is None:
                return Decision.deny(USER_NOT_FOUND)
            if facts.target_role is not None:
                return Decision.deny(ALREADY_MEMBER)
        return Decision.allow()

    if action == Action.DELETE_CONTENT:
        if facts.actor_id == facts.content_author_id or is_owner:
            return Decision.allow()
        return Decision.deny(NOT_CONTENT_AUTHOR_OR_OWNER)

    if action == Action.LEAVE_LIST:
        if not is_member:
            return Decision.deny(NOT_A_MEMBER)
        if is_owner:
            return Decision.deny(OWNER_CANNOT_LEAVE)
        return Decision.allow()

    raise ValueError(f"Unknown action: {action}")


def denial_error(reason: str) -> AppError:
    """Map a denial reason to the error returned to the client."""
    if reason == USER_NOT_FOUND:
        return NotFoundError("User", reason=USER_NOT_FOUND)
    if reason == ALREADY_MEMBER:
        return ConflictError("User is already a member of this list", reason=ALREADY_MEMBER)
    if reason == CANNOT_REMOVE_OWNER:
        return CannotRemoveOwnerError("The list owner cannot be removed")
    return AccessDeniedError(f"Access denied: {reason}", reason=reason)


class AccessControl:
    """Evaluates access rules against the current database state."""

    def __init__(self, db: Session):
        self.db = db

    def get_role(self, list_id: int, user_id: int) -> MemberRole | None:
        """Role the user holds in the list, or None if not a member."""
        membership = (
            self.db.query(ListMember)
            .filter(ListMember.list_id == list_id, ListMember.user_id == user_id)
            .first()
        )
        return MemberRole(membership.role) if membership else None

    def facts_for(
        self,
        actor_id: int,
        lst: List,
        content: Content | None = None,
        target_user_id: int | None = None,
    ) -> AccessFacts:
        return AccessFacts(
            actor_id=actor_id,
            owner_id=lst.owner_id,
            is_public=bool(lst.is_public),
            actor_role=self.get_role(lst.id, actor_id),
            content_author_id=content.added_by if content is not None else None,
            target_user_id=target_user_id,
            target_role=(
                self.get_role(lst.id, target_user_id) if target_user_id is not None else None
            ),
        )

    def require(
        self,
        actor_id: int,
        action: Action,
        lst: List,
        content: Content | None = None,
        target_user_id: int | None = None,
    ) -> AccessFacts:
        """Raise the matching error unless the action is allowed.

        Returns the facts used so callers can reuse the actor's role.
        """
        facts = self.facts_for(actor_id, lst, content=content, target_user_id=target_user_id)
        decision = authorize(action, facts)
        if not decision.allowed:
            logger.info(
                f"Denied {action.value} on list {lst.id} for user {actor_id}: {decision.reason}"
            )
            raise denial_error(decision.reason)
        return facts
