"""Bookmark service layer with business logic."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from types import EllipsisType
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    BookmarkNotFoundError,
    BookmarkValidationError,
    DuplicateUrlError,
    InvalidIdentifierError,
)
from domain.entities.bookmark import (
    Bookmark,
    TagCount,
    normalize_tags,
    normalize_text,
    normalize_url,
    validate_bookmark,
)
from domain.entities.bookmark_query import BookmarkQuery
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

TagsInput = str | Sequence[str] | None


@dataclass(frozen=True, slots=True)
class FavoriteToggle:
    """Result of flipping a bookmark's favorite flag."""

    bookmark: Bookmark
    message: str


class BookmarkService:
    """Service layer for Bookmark business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_all(self, query: BookmarkQuery) -> list[Bookmark]:
        """Get all bookmarks matching the query."""
        async with self._uow_factory() as uow:
            return await uow.bookmarks.find(query)

    async def get_by_id(self, bookmark_id: str | UUID) -> Bookmark:
        """Get a specific bookmark."""
        id = parse_bookmark_id(bookmark_id)
        async with self._uow_factory() as uow:
            bookmark = await uow.bookmarks.get(id)
            if not bookmark:
                raise BookmarkNotFoundError(str(id))
            return bookmark

    async def create(
        self,
        url: str | None,
        name: str | None,
        description: str | None = None,
        tags: TagsInput = None,
        favicon: str | None = None,
        is_favorite: bool | None = None,
    ) -> Bookmark:
        """Create a new bookmark.

        Fails with DuplicateUrlError when another bookmark has the same
        normalized URL (case-insensitive), whether detected up front or by
        the store's unique index during insert.
        """
        bookmark = Bookmark(
            url=normalize_url(url),
            name=normalize_text(name),
            description=normalize_text(description),
            tags=normalize_tags(tags),
            favicon=favicon or "",
            is_favorite=bool(is_favorite),
        )
        _ensure_valid(bookmark)

        async with self._uow_factory() as uow:
            await self._ensure_url_available(uow, bookmark)
            try:
                created = await uow.bookmarks.create(bookmark)
                await uow.commit()
            except IntegrityError as exc:
                await self._raise_duplicate_on_conflict(uow, exc, bookmark)
                raise

        logger.info("bookmark_created", bookmark_id=str(created.id), url=created.url)
        return created

    async def update(
        self,
        bookmark_id: str | UUID,
        url: str | None = None,
        name: str | None = None,
        description: str | None | EllipsisType = ...,
        tags: TagsInput | EllipsisType = ...,
        favicon: str | None | EllipsisType = ...,
        is_favorite: bool | None | EllipsisType = ...,
    ) -> Bookmark:
        """Partially update a bookmark.

        ``url`` and ``name`` are ignored when falsy. The remaining fields use
        ``...`` for "not supplied", so explicit falsy values still apply.
        A ``None`` description or favicon clears it; ``None`` tags or
        favorite flag keep the current value.
        """
        id = parse_bookmark_id(bookmark_id)
        async with self._uow_factory() as uow:
            bookmark = await uow.bookmarks.get(id)
            if not bookmark:
                raise BookmarkNotFoundError(str(id))

            if url:
                bookmark.url = normalize_url(url)
            if name:
                bookmark.name = normalize_text(name)
            if not isinstance(description, EllipsisType):
                bookmark.description = normalize_text(description)
            if not isinstance(tags, EllipsisType) and tags is not None:
                bookmark.tags = normalize_tags(tags)
            if not isinstance(favicon, EllipsisType):
                bookmark.favicon = favicon or ""
            if not isinstance(is_favorite, EllipsisType) and is_favorite is not None:
                bookmark.is_favorite = is_favorite

            _ensure_valid(bookmark)
            if url:
                await self._ensure_url_available(uow, bookmark)

            try:
                updated = await uow.bookmarks.update(bookmark)
                await uow.commit()
            except IntegrityError as exc:
                await self._raise_duplicate_on_conflict(uow, exc, bookmark)
                raise

        logger.info("bookmark_updated", bookmark_id=str(updated.id))
        return updated

    async def delete(self, bookmark_id: str | UUID) -> None:
        """Delete a bookmark (its tags go with it)."""
        id = parse_bookmark_id(bookmark_id)
        async with self._uow_factory() as uow:
            bookmark = await uow.bookmarks.get(id)
            if not bookmark:
                raise BookmarkNotFoundError(str(id))

            await uow.bookmarks.delete(id)
            await uow.commit()

        logger.info("bookmark_deleted", bookmark_id=str(id))

    async def toggle_favorite(self, bookmark_id: str | UUID) -> FavoriteToggle:
        """Flip the favorite flag and describe the new state."""
        id = parse_bookmark_id(bookmark_id)
        async with self._uow_factory() as uow:
            bookmark = await uow.bookmarks.get(id)
            if not bookmark:
                raise BookmarkNotFoundError(str(id))

            bookmark.toggle_favorite()
            updated = await uow.bookmarks.update(bookmark)
            await uow.commit()

        logger.info(
            "bookmark_favorite_toggled",
            bookmark_id=str(id),
            is_favorite=updated.is_favorite,
        )
        state = "added to" if updated.is_favorite else "removed from"
        return FavoriteToggle(bookmark=updated, message=f"Bookmark {state} favorites")

    async def list_tags(self) -> list[TagCount]:
        """Get every tag with its usage count, most used first.

        Tags with equal counts are ordered alphabetically.
        """
        async with self._uow_factory() as uow:
            return await uow.bookmarks.count_tags()

    async def _ensure_url_available(self, uow: IUnitOfWork, bookmark: Bookmark) -> None:
        """Raise DuplicateUrlError if another bookmark already uses this URL."""
        existing = await uow.bookmarks.get_by_url_key(bookmark.url_key, exclude_id=bookmark.id)
        if existing:
            logger.warning(
                "bookmark_duplicate_url",
                url=bookmark.url,
                existing_id=str(existing.id),
            )
            raise DuplicateUrlError(bookmark.url, existing)

    async def _raise_duplicate_on_conflict(
        self, uow: IUnitOfWork, exc: IntegrityError, bookmark: Bookmark
    ) -> None:
        """Turn a unique-index violation on the URL into DuplicateUrlError.

        Any other integrity error (NOT NULL, FK, ...) is left for the caller
        to re-raise.
        """
        await uow.rollback()
        orig = str(exc.orig).lower() if exc.orig else ""
        if "unique" not in orig and "duplicate" not in orig:
            return

        existing = await uow.bookmarks.get_by_url_key(bookmark.url_key, exclude_id=bookmark.id)
        logger.warning("bookmark_duplicate_url", url=bookmark.url, race=True)
        raise DuplicateUrlError(bookmark.url, existing) from exc


def parse_bookmark_id(bookmark_id: str | UUID) -> UUID:
    """Parse a raw identifier, raising InvalidIdentifierError if malformed."""
    if isinstance(bookmark_id, UUID):
        return bookmark_id
    try:
        return UUID(str(bookmark_id))
    except ValueError:
        raise InvalidIdentifierError(str(bookmark_id)) from None


def _ensure_valid(bookmark: Bookmark) -> None:
    violations = validate_bookmark(bookmark)
    if violations:
        raise BookmarkValidationError(violations)
