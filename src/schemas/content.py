"""Content and reaction schemas."""

from datetime import datetime
from typing import Any

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, ValidationError, model_validator

from src.models.enums import ContentType, ReactionType


class ImageMetadata(BaseModel):
    """Metadata accepted for image content."""

    model_config = ConfigDict(extra="forbid")

    width: int | None = Field(None, ge=1)
    height: int | None = Field(None, ge=1)
    size_bytes: int | None = Field(None, ge=0)
    mime_type: str | None = Field(None, max_length=100)


class VideoMetadata(ImageMetadata):
    """Metadata accepted for video content."""

    duration_seconds: float | None = Field(None, ge=0)


class UrlMetadata(BaseModel):
    """Metadata accepted for URL content."""

    model_config = ConfigDict(extra="forbid")

    site_name: str | None = Field(None, max_length=200)
    provider: str | None = Field(None, max_length=100)


METADATA_SCHEMAS: dict[ContentType, type[BaseModel]] = {
    ContentType.IMAGE: ImageMetadata,
    ContentType.VIDEO: VideoMetadata,
    ContentType.URL: UrlMetadata,
}


class ContentCreate(BaseModel):
    """Add content to a list."""

    list_id: int
    type: ContentType
    title: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=2000)
    url: AnyHttpUrl
    thumbnail_url: AnyHttpUrl | None = None
    metadata: dict[str, Any] | None = None

    @model_validator(mode="after")
    def validate_metadata_keys(self) -> "ContentCreate":
        """Only the keys defined for the content type are accepted."""
        if self.metadata is not None:
            schema = METADATA_SCHEMAS[self.type]
            try:
                parsed = schema.model_validate(self.metadata)
            except ValidationError as e:
                raise ValueError(f"invalid metadata for {self.type.value} content: {e}") from e
            self.metadata = parsed.model_dump(exclude_none=True)
        return self


class ContentResponse(BaseModel):
    """Content response."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    list_id: int
    added_by: int
    type: ContentType
    title: str | None
    description: str | None
    url: str
    thumbnail_url: str | None
    metadata: dict[str, Any] | None = Field(None, validation_alias="content_metadata")
    order: int
    created_at: datetime
    updated_at: datetime


class ReactionCreate(BaseModel):
    """React to a piece of content."""

    type: ReactionType = ReactionType.LIKE


class ReactionResponse(BaseModel):
    """Reaction response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    content_id: int
    user_id: int
    type: ReactionType
    created_at: datetime


class ContentDetailResponse(ContentResponse):
    """Content with its reactions, as rendered in the swipe feed."""

    reactions: list[ReactionResponse] = []


class FeedPage(BaseModel):
    """One page of a list's swipe feed."""

    items: list[ContentResponse]
    skip: int
    limit: int
    total: int


class ContentEnvelope(BaseModel):
    content: ContentResponse


class ReactionEnvelope(BaseModel):
    reaction: ReactionResponse
