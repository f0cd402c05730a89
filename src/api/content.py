"""Content and reaction API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_content_service, get_current_user
from src.models.user import User
from src.schemas.common import MessageResponse
from src.schemas.content import (
    ContentCreate,
    ContentEnvelope,
    ContentResponse,
    ReactionCreate,
    ReactionEnvelope,
    ReactionResponse,
)
from src.services.content_service import ContentService

router = APIRouter(prefix="/api/v1/content", tags=["content"])


@router.post("", response_model=ContentEnvelope)
def add_content(
    content_data: ContentCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ContentService, Depends(get_content_service)],
):
    """Add an image, video or URL to the end of a list's feed."""
    content = service.add_content(
        current_user,
        list_id=content_data.list_id,
        content_type=content_data.type,
        url=str(content_data.url),
        title=content_data.title,
        description=content_data.description,
        thumbnail_url=str(content_data.thumbnail_url) if content_data.thumbnail_url else None,
        metadata=content_data.metadata,
    )
    return ContentEnvelope(content=ContentResponse.model_validate(content))


@router.delete("/{content_id}", response_model=MessageResponse)
def delete_content(
    content_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ContentService, Depends(get_content_service)],
):
    """Delete content (author or list owner only)."""
    service.delete_content(current_user, content_id)
    return MessageResponse(message="Content deleted")


@router.post("/{content_id}/reaction", response_model=ReactionEnvelope)
def react(
    content_id: int,
    reaction_data: ReactionCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ContentService, Depends(get_content_service)],
):
    """Add or change the current user's reaction."""
    reaction = service.react(current_user, content_id, reaction_data.type)
    return ReactionEnvelope(reaction=ReactionResponse.model_validate(reaction))


@router.delete("/{content_id}/reaction", response_model=MessageResponse)
def remove_reaction(
    content_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ContentService, Depends(get_content_service)],
):
    """Remove the current user's reaction."""
    service.remove_reaction(current_user, content_id)
    return MessageResponse(message="Reaction removed")
