"""Content service for adding, removing and reacting to feed content."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.errors import AppError, NotFoundError
from src.models.content import Content, Reaction
from src.models.enums import ContentType, ReactionType
from src.models.list import List
from src.models.user import User
from src.services import ordering
from src.services.access import AccessControl, Action
from src.services.quota import ResourceClass, enforce_quota
from src.services.thumbnails import derive_thumbnail

logger = logging.getLogger(__name__)


class ContentService:
    """Service for content-related operations."""

    def __init__(self, db: Session):
        self.db = db
        self.access = AccessControl(db)

    def get_content(self, content_id: int) -> Content:
        """Get a content by id or raise NotFoundError."""
        content = self.db.get(Content, content_id)
        if content is None:
            raise NotFoundError("Content", content_id)
        return content

    def add_content(
        self,
        actor: User,
        list_id: int,
        content_type: ContentType,
        url: str,
        title: str | None = None,
        description: str | None = None,
        thumbnail_url: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Content:
        """Append content to the end of a list's feed.

        The list row stays locked from the quota count until commit, so the
        count and the order key are computed against a stable set of rows.
        """
        lst = ordering.lock_list(self.db, list_id)
        if lst is None:
            self.db.rollback()
            raise NotFoundError("List", list_id)

        try:
            self.access.require(actor.id, Action.ADD_CONTENT, lst)
            enforce_quota(self.db, actor, ResourceClass.CONTENT, list_id=list_id)
        except AppError:
            self.db.rollback()
            raise

        if thumbnail_url is None and content_type == ContentType.URL:
            thumbnail_url = derive_thumbnail(url)

        content = Content(
            list_id=list_id,
            added_by=actor.id,
            type=content_type.value,
            title=title,
            description=description,
            url=url,
            thumbnail_url=thumbnail_url,
            content_metadata=metadata,
            order=ordering.next_order(self.db, list_id),
        )
        try:
            self.db.add(content)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(content)
        logger.info(f"User {actor.id} added content {content.id} to list {list_id}")
        return content

    def delete_content(self, actor: User, content_id: int) -> None:
        """Delete content (its author or the list owner only)."""
        content = self.get_content(content_id)
        self.access.require(actor.id, Action.DELETE_CONTENT, content.list, content=content)
        self.db.delete(content)
        self.db.commit()
        logger.info(f"User {actor.id} deleted content {content_id}")

    def react(self, actor: User, content_id: int, reaction_type: ReactionType) -> Reaction:
        """Set the actor's reaction to the content, replacing any earlier one."""
        content = self.get_content(content_id)
        self.access.require(actor.id, Action.REACT, content.list, content=content)

        reaction = self._find_reaction(content_id, actor.id)
        if reaction is not None:
            reaction.type = reaction_type.value
            self.db.commit()
            self.db.refresh(reaction)
            return reaction

        reaction = Reaction(content_id=content_id, user_id=actor.id, type=reaction_type.value)
        self.db.add(reaction)
        try:
            self.db.commit()
        except IntegrityError:
            # A concurrent request inserted the row first; update it instead
            self.db.rollback()
            reaction = self._find_reaction(content_id, actor.id)
            if reaction is None:
                raise
            reaction.type = reaction_type.value
            self.db.commit()
        self.db.refresh(reaction)
        return reaction

    def remove_reaction(self, actor: User, content_id: int) -> None:
        """Remove the actor's own reaction, if any."""
        self.get_content(content_id)
        reaction = self._find_reaction(content_id, actor.id)
        if reaction is not None:
            self.db.delete(reaction)
            self.db.commit()

    def _find_reaction(self, content_id: int, user_id: int) -> Reaction | None:
        return (
            self.db.query(Reaction)
            .filter(Reaction.content_id == content_id, Reaction.user_id == user_id)
            .first()
        )

    def get_feed_page(
        self, actor: User, list_id: int, skip: int, limit: int
    ) -> tuple[list[Content], int]:
        """A page of the list's swipe feed."""
        lst = self.db.get(List, list_id)
        if lst is None:
            raise NotFoundError("List", list_id)
        self.access.require(actor.id, Action.READ_CONTENT, lst)
        return ordering.feed_page(self.db, list_id, skip, limit)
