"""User model."""

from sqlalchemy import Boolean, Column, Integer, String

from src.database import Base
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    avatar = Column(String(2048), nullable=True)
    provider = Column(String(20), nullable=False)  # 'google', 'apple', 'anonymous'
    provider_id = Column(String(255), unique=True, nullable=False, index=True)
    is_premium = Column(Boolean, default=False, nullable=False)
