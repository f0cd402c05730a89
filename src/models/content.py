"""Content and reaction models."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin, utcnow


class Content(Base, TimestampMixin):
    """An image, video or URL shown in a list's swipe feed."""

    __tablename__ = "contents"

    id = Column(Integer, primary_key=True, index=True)
    list_id = Column(
        Integer, ForeignKey("lists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    added_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)  # 'image', 'video', 'url'
    title = Column(String(200), nullable=True)
    description = Column(String, nullable=True)
    url = Column(String(2048), nullable=False)
    thumbnail_url = Column(String(2048), nullable=True)
    # Keys allowed per type are enforced by src.schemas.content
    content_metadata = Column("metadata", JSON, nullable=True)
    order = Column(Integer, nullable=False, default=0)

    # Relationships
    list = relationship("List", back_populates="contents")
    added_by_user = relationship("User", foreign_keys=[added_by])
    reactions = relationship(
        "Reaction",
        back_populates="content",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Reaction(Base):
    """A single user's reaction to a piece of content."""

    __tablename__ = "reactions"
    __table_args__ = (UniqueConstraint("content_id", "user_id", name="uq_reaction_content_user"),)

    id = Column(Integer, primary_key=True, index=True)
    content_id = Column(
        Integer, ForeignKey("contents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(20), default="like", nullable=False)  # 'like', 'love', 'dislike'
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationships
    content = relationship("Content", back_populates="reactions")
    user = relationship("User")
