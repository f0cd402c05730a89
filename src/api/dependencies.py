"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.errors import InvalidCredentialError
from src.models.user import User
from src.services.auth import authenticate_token
from src.services.content_service import ContentService
from src.services.list_service import ListService

# Missing headers are reported as invalid credentials rather than FastAPI's default
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    if credentials is None:
        raise InvalidCredentialError()
    return authenticate_token(db, credentials.credentials)


def get_list_service(
    db: Annotated[Session, Depends(get_db)],
) -> ListService:
    """Get list service with dependencies."""
    return ListService(db)


def get_content_service(
    db: Annotated[Session, Depends(get_db)],
) -> ContentService:
    """Get content service with dependencies."""
    return ContentService(db)
