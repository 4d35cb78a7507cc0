"""Bookmark API routes."""

from types import EllipsisType
from typing import Any

from fastapi import APIRouter, Depends, Query, status

from api.v1.dependencies import get_bookmark_service
from api.v1.schemas.bookmark import (
    BookmarkCreate,
    BookmarkDeleteResponse,
    BookmarkDetailResponse,
    BookmarkListResponse,
    BookmarkResponse,
    BookmarkUpdate,
)
from domain.entities.bookmark import Bookmark
from domain.services.bookmark_service import BookmarkService
from domain.services.query_builder import build_bookmark_query

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.get(
    "",
    response_model=BookmarkListResponse,
    summary="List bookmarks",
    responses={
        200: {"description": "Matching bookmarks, newest first by default"},
        400: {"description": "Unknown sort field"},
    },
)
@router.get("/", response_model=BookmarkListResponse, include_in_schema=False)
async def list_bookmarks(
    service: BookmarkService = Depends(get_bookmark_service),
    tag: str | None = Query(None, description="Only bookmarks carrying this tag"),
    search: str | None = Query(
        None, description="Case-insensitive substring of name, tag or description"
    ),
    favorite: str | None = Query(None, description="'true' to list favorites only"),
    sort: str | None = Query(
        None,
        description=(
            "Sort keys separated by spaces or commas, '-' prefix for descending "
            "(createdAt, updatedAt, name, url, isFavorite). Default: -createdAt"
        ),
    ),
) -> BookmarkListResponse:
    """Get all bookmarks, optionally filtered by tag, favorite flag and search text."""
    query = build_bookmark_query(tag=tag, search=search, favorite=favorite, sort=sort)
    bookmarks = await service.get_all(query)
    return BookmarkListResponse(
        count=len(bookmarks),
        data=[_build_bookmark_response(b) for b in bookmarks],
    )


@router.get(
    "/{bookmark_id}",
    response_model=BookmarkDetailResponse,
    response_model_exclude_none=True,
    summary="Get a bookmark",
    responses={
        200: {"description": "Bookmark details"},
        400: {"description": "Malformed bookmark ID"},
        404: {"description": "Bookmark not found"},
    },
)
async def get_bookmark(
    bookmark_id: str,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkDetailResponse:
    """Get a specific bookmark by ID."""
    bookmark = await service.get_by_id(bookmark_id)
    return BookmarkDetailResponse(data=_build_bookmark_response(bookmark))


@router.post(
    "",
    response_model=BookmarkDetailResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a bookmark",
    responses={
        201: {"description": "Bookmark created successfully"},
        400: {"description": "Validation error or duplicate URL"},
    },
)
@router.post(
    "/",
    response_model=BookmarkDetailResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_bookmark(
    body: BookmarkCreate,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkDetailResponse:
    """
    Create a new bookmark.

    URLs without a scheme get `https://`. Tags may be a list or a
    comma-separated string; they are lowercased and trimmed.
    A URL already stored (ignoring case) is rejected with the existing bookmark.
    """
    bookmark = await service.create(
        url=body.url,
        name=body.name,
        description=body.description,
        tags=body.tags,
        favicon=body.favicon,
        is_favorite=body.is_favorite,
    )
    return BookmarkDetailResponse(
        message="Bookmark created successfully",
        data=_build_bookmark_response(bookmark),
    )


@router.put(
    "/{bookmark_id}",
    response_model=BookmarkDetailResponse,
    response_model_exclude_none=True,
    summary="Update a bookmark",
    responses={
        200: {"description": "Bookmark updated successfully"},
        400: {"description": "Validation error, malformed ID or duplicate URL"},
        404: {"description": "Bookmark not found"},
    },
)
async def update_bookmark(
    bookmark_id: str,
    body: BookmarkUpdate,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkDetailResponse:
    """
    Update an existing bookmark. All fields are optional (partial update).

    Empty `url` or `name` values are ignored. `description`, `favicon`,
    `tags` and `isFavorite` apply whenever present, so `tags: []` clears tags.
    """
    bookmark = await service.update(
        bookmark_id,
        url=body.url,
        name=body.name,
        description=_if_set(body, "description"),
        tags=_if_set(body, "tags"),
        favicon=_if_set(body, "favicon"),
        is_favorite=_if_set(body, "is_favorite"),
    )
    return BookmarkDetailResponse(
        message="Bookmark updated successfully",
        data=_build_bookmark_response(bookmark),
    )


@router.delete(
    "/{bookmark_id}",
    response_model=BookmarkDeleteResponse,
    summary="Delete a bookmark",
    responses={
        200: {"description": "Bookmark deleted successfully"},
        400: {"description": "Malformed bookmark ID"},
        404: {"description": "Bookmark not found"},
    },
)
async def delete_bookmark(
    bookmark_id: str,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkDeleteResponse:
    """Delete a bookmark."""
    await service.delete(bookmark_id)
    return BookmarkDeleteResponse(message="Bookmark deleted successfully")


@router.patch(
    "/{bookmark_id}/favorite",
    response_model=BookmarkDetailResponse,
    summary="Toggle favorite",
    responses={
        200: {"description": "Favorite flag flipped"},
        400: {"description": "Malformed bookmark ID"},
        404: {"description": "Bookmark not found"},
    },
)
async def toggle_favorite(
    bookmark_id: str,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkDetailResponse:
    """Add the bookmark to favorites, or remove it if it already is one."""
    result = await service.toggle_favorite(bookmark_id)
    return BookmarkDetailResponse(
        message=result.message,
        data=_build_bookmark_response(result.bookmark),
    )


def _if_set(body: BookmarkUpdate, field: str) -> Any | EllipsisType:
    """Return the field value if the client sent it, otherwise ``...``."""
    return getattr(body, field) if field in body.model_fields_set else ...


def _build_bookmark_response(bookmark: Bookmark) -> BookmarkResponse:
    """Convert domain entity to response schema."""
    return BookmarkResponse.model_validate(bookmark)
