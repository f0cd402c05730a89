"""List API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_content_service, get_current_user, get_list_service
from src.models.user import User
from src.schemas.common import MessageResponse
from src.schemas.content import ContentDetailResponse, ContentResponse, FeedPage
from src.schemas.list import (
    ListCreate,
    ListDetailEnvelope,
    ListDetailResponse,
    ListEnvelope,
    ListInvite,
    ListResponse,
    ListsEnvelope,
    ListSummaryResponse,
    ListUpdate,
    MemberResponse,
)
from src.schemas.user import PublicUserResponse
from src.services.content_service import ContentService
from src.services.list_service import ListService

router = APIRouter(prefix="/api/v1/lists", tags=["lists"])


@router.get("", response_model=ListsEnvelope)
def get_lists(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ListService, Depends(get_list_service)],
):
    """Get all lists the current user belongs to, with their role and latest content."""
    result = []
    for overview in service.get_lists_for(current_user):
        list_response = ListResponse.model_validate(overview.list)
        latest = overview.latest_content
        result.append(
            ListSummaryResponse(
                **list_response.model_dump(),
                role=overview.role,
                latest_content=ContentResponse.model_validate(latest) if latest else None,
            )
        )
    return ListsEnvelope(lists=result)


@router.post("", response_model=ListEnvelope)
def create_list(
    list_data: ListCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ListService, Depends(get_list_service)],
):
    """Create a new list owned by the current user."""
    new_list = service.create_list(
        current_user,
        title=list_data.title,
        description=list_data.description,
        is_public=list_data.is_public,
    )
    return ListEnvelope(list=ListResponse.model_validate(new_list))


@router.get("/{list_id}", response_model=ListDetailEnvelope)
def get_list(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ListService, Depends(get_list_service)],
):
    """Get a list with its members and contents in feed order."""
    detail = service.get_list_detail(current_user, list_id)
    list_response = ListResponse.model_validate(detail.list)
    owner = PublicUserResponse.model_validate(detail.list.owner)
    members = [MemberResponse.model_validate(m) for m in detail.members]
    if detail.user_role is None:
        # Public list viewed by a non-member: no contact details
        owner = owner.model_copy(update={"email": None})
        members = [
            m.model_copy(update={"user": m.user.model_copy(update={"email": None})})
            for m in members
        ]
    return ListDetailEnvelope(
        list=ListDetailResponse(
            **list_response.model_dump(),
            owner=owner,
            members=members,
            contents=[ContentDetailResponse.model_validate(c) for c in detail.contents],
            user_role=detail.user_role,
        )
    )


@router.get("/{list_id}/feed", response_model=FeedPage)
def get_feed(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ContentService, Depends(get_content_service)],
    skip: int = Query(0, ge=0, description="Number of items to skip"),
    limit: int = Query(20, ge=1, le=100, description="Number of items to return"),
):
    """Get one page of the list's swipe feed."""
    items, total = service.get_feed_page(current_user, list_id, skip=skip, limit=limit)
    return FeedPage(
        items=[ContentResponse.model_validate(c) for c in items],
        skip=skip,
        limit=limit,
        total=total,
    )


@router.put("/{list_id}", response_model=ListEnvelope)
def update_list(
    list_id: int,
    list_data: ListUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ListService, Depends(get_list_service)],
):
    """Update a list (owner only)."""
    updated = service.update_list(
        current_user,
        list_id,
        title=list_data.title,
        description=list_data.description,
        is_public=list_data.is_public,
    )
    return ListEnvelope(list=ListResponse.model_validate(updated))


@router.delete("/{list_id}", response_model=MessageResponse)
def delete_list(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ListService, Depends(get_list_service)],
):
    """Delete a list and everything in it (owner only)."""
    service.delete_list(current_user, list_id)
    return MessageResponse(message="List deleted")


@router.post("/{list_id}/invite", response_model=MessageResponse)
def invite_member(
    list_id: int,
    invite_data: ListInvite,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ListService, Depends(get_list_service)],
):
    """Invite a user to a list by email (owner only)."""
    service.invite_member(current_user, list_id, invite_data.email)
    return MessageResponse(message=f"Invited {invite_data.email}")


@router.delete("/{list_id}/members/{user_id}", response_model=MessageResponse)
def remove_member(
    list_id: int,
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ListService, Depends(get_list_service)],
):
    """Remove a member (owner only), or leave the list when removing yourself."""
    service.remove_member(current_user, list_id, user_id)
    return MessageResponse(message="Member removed")


@router.post("/{list_id}/leave", response_model=MessageResponse)
def leave_list(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ListService, Depends(get_list_service)],
):
    """Leave a list you were invited to."""
    service.leave_list(current_user, list_id)
    return MessageResponse(message="Left list")
