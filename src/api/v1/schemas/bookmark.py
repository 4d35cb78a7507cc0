"""Pydantic schemas for Bookmark API."""

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field

from api.v1.schemas.common import ApiModel


class BookmarkCreate(ApiModel):
    """Schema for creating a Bookmark.

    Field rules (required fields, lengths, URL format) are enforced by the
    domain layer so that every violation is reported together.
    """

    url: str | None = None
    name: str | None = None
    description: str | None = None
    tags: str | list[str] | None = Field(
        None, description="List of tags or a single comma-separated string"
    )
    favicon: str | None = None
    is_favorite: bool | None = None


class BookmarkUpdate(BookmarkCreate):
    """Schema for updating a Bookmark (all fields optional, partial update)."""


class BookmarkResponse(ApiModel):
    """Schema for Bookmark response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "url": "https://example.com",
                "name": "Example",
                "description": "An example site",
                "tags": ["reference", "demo"],
                "favicon": "",
                "isFavorite": False,
                "createdAt": "2026-01-28T10:00:00",
                "updatedAt": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    url: str
    name: str
    description: str
    tags: list[str] = []
    favicon: str
    is_favorite: bool
    created_at: datetime
    updated_at: datetime


class BookmarkListResponse(ApiModel):
    """Schema for list of Bookmarks response."""

    success: bool = True
    count: int
    data: list[BookmarkResponse]


class BookmarkDetailResponse(ApiModel):
    """Schema for single Bookmark response."""

    success: bool = True
    message: str | None = None
    data: BookmarkResponse


class BookmarkDeleteResponse(ApiModel):
    """Schema for a deleted Bookmark (empty payload)."""

    success: bool = True
    message: str
    data: dict[str, str] = Field(default_factory=dict)
