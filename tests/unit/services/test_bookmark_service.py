"""Unit tests for BookmarkService."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    BookmarkNotFoundError,
    BookmarkValidationError,
    DuplicateUrlError,
    InvalidIdentifierError,
)
from domain.entities.bookmark import Bookmark, TagCount
from domain.entities.bookmark_query import BookmarkQuery
from domain.services.bookmark_service import BookmarkService, parse_bookmark_id
from tests.unit.conftest import FakeUnitOfWork, make_bookmark


@pytest.fixture
def service(uow: FakeUnitOfWork) -> BookmarkService:
    return BookmarkService(lambda: uow)


def _echo(bookmark: Bookmark) -> Bookmark:
    return bookmark


def _integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO bookmarks ...", {}, Exception(message))


# --- parse_bookmark_id ---


class TestParseBookmarkId:
    def test_parses_uuid_string(self):
        bookmark_id = uuid4()
        assert parse_bookmark_id(str(bookmark_id)) == bookmark_id

    def test_passes_uuid_through(self):
        bookmark_id = uuid4()
        assert parse_bookmark_id(bookmark_id) is bookmark_id

    def test_malformed_id_raises(self):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            parse_bookmark_id("abc")

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Invalid ID format"


# --- get_all / get_by_id ---


class TestGetAll:
    @pytest.mark.asyncio
    async def test_delegates_query_to_repository(
        self, service: BookmarkService, uow: FakeUnitOfWork
    ):
        bookmark = make_bookmark()
        uow.bookmarks.find.return_value = [bookmark]
        query = BookmarkQuery(tag="python")

        result = await service.get_all(query)

        assert result == [bookmark]
        uow.bookmarks.find.assert_called_once_with(query)


class TestGetById:
    @pytest.mark.asyncio
    async def test_returns_bookmark(self, service: BookmarkService, uow: FakeUnitOfWork):
        bookmark = make_bookmark()
        uow.bookmarks.get.return_value = bookmark

        result = await service.get_by_id(str(bookmark.id))

        assert result is bookmark
        uow.bookmarks.get.assert_called_once_with(bookmark.id)

    @pytest.mark.asyncio
    async def test_not_found(self, service: BookmarkService, uow: FakeUnitOfWork):
        uow.bookmarks.get.return_value = None

        with pytest.raises(BookmarkNotFoundError):
            await service.get_by_id(uuid4())

    @pytest.mark.asyncio
    async def test_malformed_id_skips_repository(
        self, service: BookmarkService, uow: FakeUnitOfWork
    ):
        with pytest.raises(InvalidIdentifierError):
            await service.get_by_id("not-a-uuid")

        uow.bookmarks.get.assert_not_called()


# --- create ---


class TestCreate:
    @pytest.mark.asyncio
    async def test_normalizes_and_commits(self, service: BookmarkService, uow: FakeUnitOfWork):
        uow.bookmarks.create.side_effect = _echo

        result = await service.create(
            url="  example.com ",
            name="  Example  ",
            description=" An example ",
            tags="Work, Python",
        )

        assert result.url == "https://example.com"
        assert result.name == "Example"
        assert result.description == "An example"
        assert result.tags == ["work", "python"]
        assert result.favicon == ""
        assert result.is_favorite is False
        uow.bookmarks.get_by_url_key.assert_called_once_with(
            "https://example.com", exclude_id=None
        )
        assert uow.committed

    @pytest.mark.asyncio
    async def test_validation_errors_reported_together(
        self, service: BookmarkService, uow: FakeUnitOfWork
    ):
        with pytest.raises(BookmarkValidationError) as exc_info:
            await service.create(url="", name="")

        assert exc_info.value.message == "URL is required, Name is required"
        uow.bookmarks.create.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_duplicate_url_includes_existing(
        self, service: BookmarkService, uow: FakeUnitOfWork
    ):
        existing = make_bookmark(url="https://example.com")
        uow.bookmarks.get_by_url_key.return_value = existing

        with pytest.raises(DuplicateUrlError) as exc_info:
            await service.create(url="EXAMPLE.com", name="Again")

        assert exc_info.value.existing is existing
        uow.bookmarks.get_by_url_key.assert_called_once_with(
            "https://example.com", exclude_id=None
        )
        uow.bookmarks.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unique_violation_on_insert_becomes_duplicate(
        self, service: BookmarkService, uow: FakeUnitOfWork
    ):
        existing = make_bookmark(url="https://example.com")
        # Pre-check sees nothing; a concurrent insert wins the race
        uow.bookmarks.get_by_url_key.side_effect = [None, existing]
        uow.bookmarks.create.side_effect = _integrity_error(
            "UNIQUE constraint failed: bookmarks.url_key"
        )

        with pytest.raises(DuplicateUrlError) as exc_info:
            await service.create(url="https://example.com", name="Example")

        assert exc_info.value.existing is existing
        assert uow.rolled_back
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_other_integrity_errors_propagate(
        self, service: BookmarkService, uow: FakeUnitOfWork
    ):
        uow.bookmarks.create.side_effect = _integrity_error("NOT NULL constraint failed")

        with pytest.raises(IntegrityError):
            await service.create(url="https://example.com", name="Example")

        assert uow.rolled_back


# --- update ---


class TestUpdate:
    @pytest.mark.asyncio
    async def test_updates_supplied_fields_only(
        self, service: BookmarkService, uow: FakeUnitOfWork
    ):
        bookmark = make_bookmark(description="Keep me", tags=["a"], is_favorite=True)
        uow.bookmarks.get.return_value = bookmark
        uow.bookmarks.update.side_effect = _echo

        result = await service.update(bookmark.id, name="  Renamed ")

        assert result.name == "Renamed"
        assert result.description == "Keep me"
        assert result.tags == ["a"]
        assert result.is_favorite is True
        assert uow.committed

    @pytest.mark.asyncio
    async def test_empty_url_and_name_are_ignored(
        self, service: BookmarkService, uow: FakeUnitOfWork
    ):
        bookmark = make_bookmark(url="https://example.com", name="Example")
        uow.bookmarks.get.return_value = bookmark
        uow.bookmarks.update.side_effect = _echo

        result = await service.update(bookmark.id, url="", name="")

        assert result.url == "https://example.com"
        assert result.name == "Example"
        uow.bookmarks.get_by_url_key.assert_not_called()

    @pytest.mark.asyncio
    async def test_explicit_falsy_values_apply(
        self, service: BookmarkService, uow: FakeUnitOfWork
    ):
        bookmark = make_bookmark(
            description="Old", tags=["a", "b"], favicon="https://example.com/f.ico", is_favorite=True
        )
        uow.bookmarks.get.return_value = bookmark
        uow.bookmarks.update.side_effect = _echo

        result = await service.update(
            bookmark.id, description="", tags=[], favicon="", is_favorite=False
        )

        assert result.description == ""
        assert result.tags == []
        assert result.favicon == ""
        assert result.is_favorite is False

    @pytest.mark.asyncio
    async def test_null_tags_and_favorite_keep_current(
        self, service: BookmarkService, uow: FakeUnitOfWork
    ):
        bookmark = make_bookmark(description="Old", tags=["a"], is_favorite=True)
        uow.bookmarks.get.return_value = bookmark
        uow.bookmarks.update.side_effect = _echo

        result = await service.update(
            bookmark.id, description=None, tags=None, is_favorite=None
        )

        assert result.description == ""
        assert result.tags == ["a"]
        assert result.is_favorite is True

    @pytest.mark.asyncio
    async def test_new_url_checked_against_other_bookmarks(
        self, service: BookmarkService, uow: FakeUnitOfWork
    ):
        bookmark = make_bookmark(url="https://one.com")
        uow.bookmarks.get.return_value = bookmark
        uow.bookmarks.update.side_effect = _echo

        result = await service.update(bookmark.id, url="Two.com")

        assert result.url == "https://Two.com"
        uow.bookmarks.get_by_url_key.assert_called_once_with(
            "https://two.com", exclude_id=bookmark.id
        )

    @pytest.mark.asyncio
    async def test_url_taken_by_another_bookmark(
        self, service: BookmarkService, uow: FakeUnitOfWork
    ):
        bookmark = make_bookmark(url="https://one.com")
        other = make_bookmark(url="https://two.com")
        uow.bookmarks.get.return_value = bookmark
        uow.bookmarks.get_by_url_key.return_value = other

        with pytest.raises(DuplicateUrlError) as exc_info:
            await service.update(bookmark.id, url="https://two.com")

        assert exc_info.value.existing is other
        uow.bookmarks.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_result_rejected(self, service: BookmarkService, uow: FakeUnitOfWork):
        bookmark = make_bookmark()
        uow.bookmarks.get.return_value = bookmark

        with pytest.raises(BookmarkValidationError) as exc_info:
            await service.update(bookmark.id, description="d" * 501)

        assert exc_info.value.details[0]["field"] == "description"
        uow.bookmarks.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_not_found(self, service: BookmarkService, uow: FakeUnitOfWork):
        uow.bookmarks.get.return_value = None

        with pytest.raises(BookmarkNotFoundError):
            await service.update(uuid4(), name="Anything")


# --- delete ---


class TestDelete:
    @pytest.mark.asyncio
    async def test_deletes_and_commits(self, service: BookmarkService, uow: FakeUnitOfWork):
        bookmark = make_bookmark()
        uow.bookmarks.get.return_value = bookmark

        await service.delete(str(bookmark.id))

        uow.bookmarks.delete.assert_called_once_with(bookmark.id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_not_found(self, service: BookmarkService, uow: FakeUnitOfWork):
        uow.bookmarks.get.return_value = None

        with pytest.raises(BookmarkNotFoundError):
            await service.delete(uuid4())

        uow.bookmarks.delete.assert_not_called()


# --- toggle_favorite ---


class TestToggleFavorite:
    @pytest.mark.asyncio
    async def test_adds_to_favorites(self, service: BookmarkService, uow: FakeUnitOfWork):
        bookmark = make_bookmark(is_favorite=False)
        uow.bookmarks.get.return_value = bookmark
        uow.bookmarks.update.side_effect = _echo

        result = await service.toggle_favorite(bookmark.id)

        assert result.bookmark.is_favorite is True
        assert result.message == "Bookmark added to favorites"
        assert uow.committed

    @pytest.mark.asyncio
    async def test_removes_from_favorites(self, service: BookmarkService, uow: FakeUnitOfWork):
        bookmark = make_bookmark(is_favorite=True)
        uow.bookmarks.get.return_value = bookmark
        uow.bookmarks.update.side_effect = _echo

        result = await service.toggle_favorite(bookmark.id)

        assert result.bookmark.is_favorite is False
        assert result.message == "Bookmark removed from favorites"

    @pytest.mark.asyncio
    async def test_malformed_id(self, service: BookmarkService):
        with pytest.raises(InvalidIdentifierError):
            await service.toggle_favorite("abc")


# --- list_tags ---


class TestListTags:
    @pytest.mark.asyncio
    async def test_returns_repository_counts(
        self, service: BookmarkService, uow: FakeUnitOfWork
    ):
        counts = [TagCount(tag="python", count=2), TagCount(tag="web", count=1)]
        uow.bookmarks.count_tags.return_value = counts

        assert await service.list_tags() == counts
