"""SQLAlchemy implementation of Bookmark repository."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Select, exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.bookmark import Bookmark, TagCount
from domain.entities.bookmark_query import BookmarkQuery, SortField
from infrastructure.database.models import BookmarkModel, BookmarkTagModel

_SORT_COLUMNS = {
    SortField.CREATED_AT: BookmarkModel.created_at,
    SortField.UPDATED_AT: BookmarkModel.updated_at,
    SortField.NAME: BookmarkModel.name,
    SortField.URL: BookmarkModel.url,
    SortField.IS_FAVORITE: BookmarkModel.is_favorite,
}


def escape_like(value: str) -> str:
    r"""Escape LIKE wildcards so ``%``, ``_`` and ``\`` match literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLAlchemyBookmarkRepository:
    """SQLAlchemy implementation of IBookmarkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Bookmark | None:
        """Get a bookmark by ID."""
        model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def get_by_url_key(
        self, url_key: str, exclude_id: UUID | None = None
    ) -> Bookmark | None:
        """Get the bookmark with this lowercased URL, optionally skipping one ID."""
        stmt = select(BookmarkModel).where(BookmarkModel.url_key == url_key)
        if exclude_id is not None:
            stmt = stmt.where(BookmarkModel.id != exclude_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find(self, query: BookmarkQuery) -> list[Bookmark]:
        """Get all bookmarks matching the query."""
        result = await self._session.execute(self._build_statement(query))
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, bookmark: Bookmark) -> Bookmark:
        """Create a new bookmark, assigning its ID and timestamps."""
        now = datetime.utcnow()
        model = BookmarkModel(
            id=uuid4(),
            url=bookmark.url,
            url_key=bookmark.url_key,
            name=bookmark.name,
            description=bookmark.description,
            favicon=bookmark.favicon,
            is_favorite=bookmark.is_favorite,
            created_at=now,
            updated_at=now,
            tags=self._to_tag_models(bookmark.tags),
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, bookmark: Bookmark) -> Bookmark:
        """Update an existing bookmark and refresh its ``updated_at``."""
        model = await self._get_model(bookmark.id) if bookmark.id else None

        if not model:
            raise ValueError(f"Bookmark {bookmark.id} not found")

        model.url = bookmark.url
        model.url_key = bookmark.url_key
        model.name = bookmark.name
        model.description = bookmark.description
        model.favicon = bookmark.favicon
        model.is_favorite = bookmark.is_favorite
        if [t.name for t in model.tags] != bookmark.tags:
            model.tags = self._to_tag_models(bookmark.tags)
        model.updated_at = datetime.utcnow()

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a bookmark and its tags."""
        model = await self._get_model(id)

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def count_tags(self) -> list[TagCount]:
        """Count tag usage, most used first, ties broken alphabetically."""
        usage_count = func.count().label("usage_count")
        stmt = (
            select(BookmarkTagModel.name, usage_count)
            .group_by(BookmarkTagModel.name)
            .order_by(usage_count.desc(), BookmarkTagModel.name)
        )
        result = await self._session.execute(stmt)
        return [TagCount(tag=row.name, count=row.usage_count) for row in result]

    async def _get_model(self, id: UUID) -> BookmarkModel | None:
        stmt = select(BookmarkModel).where(BookmarkModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _build_statement(self, query: BookmarkQuery) -> Select[tuple[BookmarkModel]]:
        """Compile a BookmarkQuery into a SELECT; all filters are ANDed."""
        stmt = select(BookmarkModel)

        if query.tag:
            stmt = stmt.where(
                exists().where(
                    BookmarkTagModel.bookmark_id == BookmarkModel.id,
                    BookmarkTagModel.name == query.tag,
                )
            )

        if query.favorites_only:
            stmt = stmt.where(BookmarkModel.is_favorite.is_(True))

        if query.search:
            pattern = f"%{escape_like(query.search)}%"
            stmt = stmt.where(
                or_(
                    BookmarkModel.name.ilike(pattern, escape="\\"),
                    BookmarkModel.description.ilike(pattern, escape="\\"),
                    exists().where(
                        BookmarkTagModel.bookmark_id == BookmarkModel.id,
                        BookmarkTagModel.name.ilike(pattern, escape="\\"),
                    ),
                )
            )

        order_by = [
            _SORT_COLUMNS[key.field].desc() if key.descending else _SORT_COLUMNS[key.field].asc()
            for key in query.sort
        ]
        # Stable order for equal sort values
        order_by.append(BookmarkModel.id.asc())
        return stmt.order_by(*order_by)

    def _to_tag_models(self, tags: list[str]) -> list[BookmarkTagModel]:
        return [BookmarkTagModel(position=i, name=tag) for i, tag in enumerate(tags)]

    def _to_entity(self, model: BookmarkModel) -> Bookmark:
        """Convert ORM model to domain entity."""
        return Bookmark(
            id=model.id,
            url=model.url,
            name=model.name,
            description=model.description,
            tags=[tag.name for tag in model.tags],
            favicon=model.favicon,
            is_favorite=model.is_favorite,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
