"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user
from src.database import get_db
from src.models.user import User
from src.schemas.auth import AuthResponse, ProviderLogin, UserResponse, VerifyResponse
from src.schemas.common import MessageResponse
from src.services.auth import create_access_token, login_anonymous, login_with_provider

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse)
def login(
    login_data: ProviderLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login or sign up with an external identity provider."""
    user = login_with_provider(
        db,
        provider=login_data.provider,
        provider_id=login_data.provider_id,
        email=login_data.email,
        name=login_data.name,
        avatar=login_data.avatar,
    )
    return AuthResponse(token=create_access_token(user), user=UserResponse.model_validate(user))


@router.post("/anonymous", response_model=AuthResponse)
def anonymous_login(
    db: Annotated[Session, Depends(get_db)],
):
    """Start a guest session with a brand new user."""
    user = login_anonymous(db)
    return AuthResponse(token=create_access_token(user), user=UserResponse.model_validate(user))


@router.post("/verify", response_model=VerifyResponse)
def verify(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Check that the bearer token is still valid."""
    return VerifyResponse(user=UserResponse.model_validate(current_user))


@router.post("/logout", response_model=MessageResponse)
def logout():
    """Logout (client should discard token; nothing is revoked server-side)."""
    return MessageResponse(message="Logged out successfully")
