"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from domain.services.bookmark_service import BookmarkService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_bookmark_service() -> BookmarkService:
    """Get Bookmark service instance."""
    return BookmarkService(get_uow_factory())
