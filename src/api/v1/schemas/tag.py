"""Pydantic schemas for Tag API."""

from pydantic import ConfigDict

from api.v1.schemas.common import ApiModel


class TagCountResponse(ApiModel):
    """A tag and how many bookmarks use it."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"tag": "python", "count": 5}},
    )

    tag: str
    count: int


class TagListResponse(ApiModel):
    """Schema for list of Tags, most used first."""

    success: bool = True
    count: int
    data: list[TagCountResponse]
