"""List and membership models."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin, utcnow


class List(Base, TimestampMixin):
    """A named, shareable collection of feed content."""

    __tablename__ = "lists"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(String, nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    is_public = Column(Boolean, default=False, nullable=False)

    # Relationships
    owner = relationship("User", backref="owned_lists")
    members = relationship(
        "ListMember",
        back_populates="list",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    contents = relationship(
        "Content",
        back_populates="list",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ListMember(Base):
    """Membership of a user in a list, carrying their role."""

    __tablename__ = "list_members"
    __table_args__ = (UniqueConstraint("list_id", "user_id", name="uq_list_member"),)

    id = Column(Integer, primary_key=True, index=True)
    list_id = Column(
        Integer, ForeignKey("lists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    role = Column(String(20), default="member", nullable=False)  # 'owner', 'member'
    joined_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationships
    list = relationship("List", back_populates="members")
    user = relationship("User", backref="memberships")
