"""Shared fixtures for unit tests."""

from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from domain.entities.bookmark import Bookmark


class FakeUnitOfWork:
    """Fake Unit of Work with a bookmark repository mock for unit testing."""

    def __init__(self) -> None:
        self.bookmarks = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


def make_bookmark(**overrides: Any) -> Bookmark:
    """Build a stored-looking bookmark (ID and timestamps set)."""
    now = datetime(2026, 1, 28, 10, 0, 0)
    fields: dict[str, Any] = {
        "id": uuid4(),
        "url": "https://example.com",
        "name": "Example",
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return Bookmark(**fields)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    uow = FakeUnitOfWork()
    # No URL conflicts unless a test says otherwise
    uow.bookmarks.get_by_url_key.return_value = None
    return uow
