"""List service: creation, sharing and membership management."""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.errors import NotFoundError
from src.models.content import Content
from src.models.enums import MemberRole
from src.models.list import List, ListMember
from src.models.user import User
from src.services import ordering
from src.services.access import AccessControl, Action
from src.services.auth import get_user_by_email
from src.services.quota import ResourceClass, enforce_quota

logger = logging.getLogger(__name__)


@dataclass
class ListOverview:
    """A list on the caller's home screen."""

    list: List
    role: MemberRole
    latest_content: Content | None


@dataclass
class ListDetail:
    list: List
    members: list[ListMember]
    contents: list[Content]
    user_role: MemberRole | None


class ListService:
    """Service for list-related operations.

    Every method takes the acting user explicitly.
    """

    def __init__(self, db: Session):
        self.db = db
        self.access = AccessControl(db)

    def get_list(self, list_id: int) -> List:
        """Get a list by id or raise NotFoundError."""
        lst = self.db.get(List, list_id)
        if lst is None:
            raise NotFoundError("List", list_id)
        return lst

    def create_list(
        self, actor: User, title: str, description: str | None = None, is_public: bool = False
    ) -> List:
        """Create a list and its owner membership in one transaction."""
        # Serialize concurrent creations by the same user so the quota count holds
        self.db.query(User).filter(User.id == actor.id).with_for_update().first()
        enforce_quota(self.db, actor, ResourceClass.LIST)

        new_list = List(
            title=title,
            description=description,
            is_public=is_public,
            owner_id=actor.id,
        )
        try:
            self.db.add(new_list)
            self.db.flush()
            self.db.add(
                ListMember(list_id=new_list.id, user_id=actor.id, role=MemberRole.OWNER.value)
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(new_list)
        logger.info(f"User {actor.id} created list {new_list.id}")
        return new_list

    def get_lists_for(self, actor: User) -> list[ListOverview]:
        """Lists the actor belongs to, most recently joined first."""
        memberships = (
            self.db.query(ListMember)
            .filter(ListMember.user_id == actor.id)
            .order_by(ListMember.joined_at.desc(), ListMember.id.desc())
            .all()
        )
        latest = ordering.latest_contents(self.db, [m.list_id for m in memberships])
        return [
            ListOverview(
                list=membership.list,
                role=MemberRole(membership.role),
                latest_content=latest.get(membership.list_id),
            )
            for membership in memberships
        ]

    def get_list_detail(self, actor: User, list_id: int) -> ListDetail:
        """A list with members and feed-ordered contents."""
        lst = self.get_list(list_id)
        facts = self.access.require(actor.id, Action.READ_LIST, lst)
        members = (
            self.db.query(ListMember)
            .filter(ListMember.list_id == list_id)
            .order_by(ListMember.joined_at.asc(), ListMember.id.asc())
            .all()
        )
        contents = list(ordering.feed_order(self.db, list_id))
        return ListDetail(
            list=lst, members=members, contents=contents, user_role=facts.actor_role
        )

    def update_list(
        self,
        actor: User,
        list_id: int,
        title: str | None = None,
        description: str | None = None,
        is_public: bool | None = None,
    ) -> List:
        """Update a list (owner only)."""
        lst = self.get_list(list_id)
        self.access.require(actor.id, Action.UPDATE_LIST, lst)

        if title is not None:
            lst.title = title
        if description is not None:
            lst.description = description
        if is_public is not None:
            lst.is_public = is_public

        self.db.commit()
        self.db.refresh(lst)
        return lst

    def delete_list(self, actor: User, list_id: int) -> None:
        """Delete a list with its memberships, contents and reactions (owner only)."""
        lst = self.get_list(list_id)
        self.access.require(actor.id, Action.DELETE_LIST, lst)
        self.db.delete(lst)
        self.db.commit()
        logger.info(f"User {actor.id} deleted list {list_id}")

    def invite_member(self, actor: User, list_id: int, email: str) -> ListMember:
        """Add the user with the given email as a member (owner only)."""
        lst = self.get_list(list_id)
        invitee = get_user_by_email(self.db, email)
        self.access.require(
            actor.id,
            Action.INVITE_MEMBER,
            lst,
            target_user_id=invitee.id if invitee else None,
        )

        membership = ListMember(list_id=list_id, user_id=invitee.id, role=MemberRole.MEMBER.value)
        self.db.add(membership)
        self.db.commit()
        logger.info(f"User {actor.id} invited user {invitee.id} to list {list_id}")
        return membership

    def remove_member(self, actor: User, list_id: int, user_id: int) -> None:
        """Remove a member from a list.

        The owner can remove anyone but themself. A member naming themself
        leaves the list instead.
        """
        lst = self.get_list(list_id)
        if user_id == actor.id and lst.owner_id != actor.id:
            self.leave_list(actor, list_id)
            return

        self.access.require(actor.id, Action.REMOVE_MEMBER, lst, target_user_id=user_id)
        membership = self._get_membership(list_id, user_id)
        self.db.delete(membership)
        self.db.commit()
        logger.info(f"User {actor.id} removed user {user_id} from list {list_id}")

    def leave_list(self, actor: User, list_id: int) -> None:
        """Remove the actor's own membership; the owner must delete the list instead."""
        lst = self.get_list(list_id)
        self.access.require(actor.id, Action.LEAVE_LIST, lst)
        membership = self._get_membership(list_id, actor.id)
        self.db.delete(membership)
        self.db.commit()
        logger.info(f"User {actor.id} left list {list_id}")

    def _get_membership(self, list_id: int, user_id: int) -> ListMember:
        membership = (
            self.db.query(ListMember)
            .filter(ListMember.list_id == list_id, ListMember.user_id == user_id)
            .first()
        )
        if membership is None:
            raise NotFoundError("Member", user_id)
        return membership
