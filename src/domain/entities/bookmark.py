"""Bookmark domain entity and its normalization rules."""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500

# Optional scheme, host.tld, optional port, optional path/query/fragment.
URL_PATTERN = re.compile(
    r"^(https?://)?[\da-z.-]+\.[a-z.]{2,6}(:\d{1,5})?([/?#][^\r\n]*)?$",
    re.IGNORECASE,
)
_SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


@dataclass
class Bookmark:
    """Domain entity for a Bookmark.

    ``id``, ``created_at`` and ``updated_at`` stay ``None`` until the store
    adapter persists the bookmark.
    """

    url: str
    name: str
    description: str = ""
    tags: list[str] = field(default_factory=list)
    favicon: str = ""
    is_favorite: bool = False
    id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def url_key(self) -> str:
        """Case-insensitive uniqueness key for this bookmark's URL."""
        return url_key(self.url)

    def toggle_favorite(self) -> None:
        """Flip the favorite flag."""
        self.is_favorite = not self.is_favorite


@dataclass(frozen=True, slots=True)
class TagCount:
    """Read-only value object: a tag and the number of times it is used."""

    tag: str
    count: int


@dataclass(frozen=True, slots=True)
class FieldViolation:
    """A single failed validation rule."""

    field: str
    message: str


def normalize_url(raw: str | None) -> str:
    """Trim the URL and prefix ``https://`` when no http(s) scheme is present."""
    url = (raw or "").strip()
    if url and not _SCHEME_PATTERN.match(url):
        url = f"https://{url}"
    return url


def url_key(url: str) -> str:
    """Lowercased form of a normalized URL, used for duplicate detection."""
    return url.lower()


def normalize_tags(raw: str | Sequence[str] | None) -> list[str]:
    """Lowercase and trim tags, dropping empties and keeping order.

    Accepts a comma-delimited string or a sequence of strings. Duplicates
    are kept as given.
    """
    if raw is None:
        return []
    items = raw.split(",") if isinstance(raw, str) else raw
    tags = []
    for item in items:
        tag = str(item).lower().strip()
        if tag:
            tags.append(tag)
    return tags


def normalize_text(raw: str | None) -> str:
    """Trim free text, treating ``None`` as empty."""
    return (raw or "").strip()


def validate_bookmark(bookmark: Bookmark) -> list[FieldViolation]:
    """Check a normalized bookmark against every field rule.

    Returns all violations at once; an empty list means the bookmark is valid.
    """
    violations: list[FieldViolation] = []

    if not bookmark.url:
        violations.append(FieldViolation("url", "URL is required"))
    elif not URL_PATTERN.match(bookmark.url):
        violations.append(FieldViolation("url", "Please enter a valid URL"))

    if not bookmark.name:
        violations.append(FieldViolation("name", "Name is required"))
    elif len(bookmark.name) > MAX_NAME_LENGTH:
        violations.append(
            FieldViolation("name", f"Name cannot be more than {MAX_NAME_LENGTH} characters")
        )

    if len(bookmark.description) > MAX_DESCRIPTION_LENGTH:
        violations.append(
            FieldViolation(
                "description",
                f"Description cannot be more than {MAX_DESCRIPTION_LENGTH} characters",
            )
        )

    return violations
