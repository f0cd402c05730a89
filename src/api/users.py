"""User profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import EmailStr
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user
from src.database import get_db
from src.errors import NotFoundError
from src.models.user import User
from src.schemas.auth import UserResponse
from src.schemas.user import ProfileEnvelope, ProfileUpdate, PublicUserResponse, UserSearchEnvelope
from src.services.auth import get_user_by_email
from src.services.quota import upgrade_to_premium

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/profile", response_model=ProfileEnvelope)
def get_profile(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get the caller's profile."""
    return ProfileEnvelope(user=UserResponse.model_validate(current_user))


@router.put("/profile", response_model=ProfileEnvelope)
def update_profile(
    profile_data: ProfileUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update the caller's name or avatar."""
    if profile_data.name is not None:
        current_user.name = profile_data.name
    if profile_data.avatar is not None:
        current_user.avatar = str(profile_data.avatar)

    db.commit()
    db.refresh(current_user)
    return ProfileEnvelope(user=UserResponse.model_validate(current_user))


@router.post("/upgrade", response_model=ProfileEnvelope)
def upgrade(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Upgrade to the premium plan (no billing involved)."""
    user = upgrade_to_premium(db, current_user)
    return ProfileEnvelope(user=UserResponse.model_validate(user))


@router.get("/search", response_model=UserSearchEnvelope)
def search_user(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    email: EmailStr = Query(..., description="Exact email of the user to invite"),
):
    """Find a user by email, for inviting to a list."""
    user = get_user_by_email(db, email)
    if user is None:
        raise NotFoundError("User", reason="user-not-found")
    return UserSearchEnvelope(user=PublicUserResponse.model_validate(user))
