"""Translate listing request parameters into a BookmarkQuery."""

import re

from core.exceptions import BookmarkValidationError
from domain.entities.bookmark import FieldViolation
from domain.entities.bookmark_query import DEFAULT_SORT, BookmarkQuery, SortField, SortKey

# Public (camelCase) and snake_case spellings both map to the same field.
SORTABLE_FIELDS: dict[str, SortField] = {
    "createdAt": SortField.CREATED_AT,
    "created_at": SortField.CREATED_AT,
    "updatedAt": SortField.UPDATED_AT,
    "updated_at": SortField.UPDATED_AT,
    "name": SortField.NAME,
    "url": SortField.URL,
    "isFavorite": SortField.IS_FAVORITE,
    "is_favorite": SortField.IS_FAVORITE,
}

_SORT_SEPARATOR = re.compile(r"[\s,]+")


def parse_sort(sort: str | None) -> tuple[SortKey, ...]:
    """Parse a sort string such as ``-createdAt name``.

    Keys are separated by spaces or commas; a leading ``-`` means descending.
    Only whitelisted fields are accepted. Blank input yields the default
    (newest first).
    """
    if sort is None or not sort.strip():
        return DEFAULT_SORT

    keys: list[SortKey] = []
    for token in _SORT_SEPARATOR.split(sort.strip()):
        if not token:
            continue
        descending = token.startswith("-")
        name = token.lstrip("-+")
        sort_field = SORTABLE_FIELDS.get(name)
        if sort_field is None:
            allowed = ", ".join(sorted({k for k in SORTABLE_FIELDS if "_" not in k}))
            raise BookmarkValidationError(
                [FieldViolation("sort", f"Cannot sort by '{name}'. Allowed fields: {allowed}")]
            )
        keys.append(SortKey(sort_field, descending=descending))
    return tuple(keys) or DEFAULT_SORT


def build_bookmark_query(
    tag: str | None = None,
    search: str | None = None,
    favorite: str | None = None,
    sort: str | None = None,
) -> BookmarkQuery:
    """Build the listing query from raw request parameters.

    Only the literal string ``"true"`` turns on the favorites filter.
    Empty ``tag``/``search`` values are treated as absent.
    """
    normalized_tag = tag.strip().lower() if tag else None
    return BookmarkQuery(
        tag=normalized_tag or None,
        search=search or None,
        favorites_only=favorite == "true",
        sort=parse_sort(sort),
    )
