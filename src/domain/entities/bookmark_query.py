"""Store-independent query value objects for listing bookmarks."""

from dataclasses import dataclass
from enum import StrEnum


class SortField(StrEnum):
    """Fields a bookmark listing may be ordered by."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    NAME = "name"
    URL = "url"
    IS_FAVORITE = "is_favorite"


@dataclass(frozen=True, slots=True)
class SortKey:
    """One ordering term."""

    field: SortField
    descending: bool = False


DEFAULT_SORT: tuple[SortKey, ...] = (SortKey(SortField.CREATED_AT, descending=True),)


@dataclass(frozen=True, slots=True)
class BookmarkQuery:
    """Filters for a bookmark listing, combined with logical AND.

    ``search`` matches name, any tag, or description (logical OR), as a
    case-insensitive substring.
    """

    tag: str | None = None
    search: str | None = None
    favorites_only: bool = False
    sort: tuple[SortKey, ...] = DEFAULT_SORT
