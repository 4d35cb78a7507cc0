"""Bookmark repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.bookmark import Bookmark, TagCount
from domain.entities.bookmark_query import BookmarkQuery


class IBookmarkRepository(Protocol):
    """Repository interface for Bookmark entities.

    The repository assigns ``id``, ``created_at`` and ``updated_at``.
    """

    async def get(self, id: UUID) -> Bookmark | None:
        """Get a bookmark by ID."""
        ...

    async def get_by_url_key(
        self, url_key: str, exclude_id: UUID | None = None
    ) -> Bookmark | None:
        """Get the bookmark whose lowercased URL equals ``url_key``."""
        ...

    async def find(self, query: BookmarkQuery) -> list[Bookmark]:
        """Get all bookmarks matching the query, in the requested order."""
        ...

    async def create(self, bookmark: Bookmark) -> Bookmark:
        """Create a new bookmark."""
        ...

    async def update(self, bookmark: Bookmark) -> Bookmark:
        """Update an existing bookmark."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a bookmark and return success status."""
        ...

    async def count_tags(self) -> list[TagCount]:
        """Count tag usage across all bookmarks, most used first."""
        ...
