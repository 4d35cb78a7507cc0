"""SQLAlchemy ORM models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class BookmarkModel(Base):
    """Bookmark model."""

    __tablename__ = "bookmarks"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    # Lowercased url; the unique index enforces case-insensitive uniqueness
    url_key: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    favicon: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_favorite: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    # Relationships
    tags: Mapped[list["BookmarkTagModel"]] = relationship(
        "BookmarkTagModel",
        back_populates="bookmark",
        cascade="all, delete-orphan",
        order_by="BookmarkTagModel.position",
        lazy="selectin",
    )


class BookmarkTagModel(Base):
    """One tag of a bookmark, kept in the order it was given."""

    __tablename__ = "bookmark_tags"
    __table_args__ = (Index("ix_bookmark_tags_bookmark_position", "bookmark_id", "position"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    bookmark_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("bookmarks.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False, index=True)

    # Relationships
    bookmark: Mapped["BookmarkModel"] = relationship(
        "BookmarkModel",
        back_populates="tags",
    )
