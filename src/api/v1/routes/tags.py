"""Tag API routes."""

from fastapi import APIRouter, Depends

from api.v1.dependencies import get_bookmark_service
from api.v1.schemas.tag import TagCountResponse, TagListResponse
from domain.services.bookmark_service import BookmarkService

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get(
    "",
    response_model=TagListResponse,
    summary="List all tags",
)
@router.get("/", response_model=TagListResponse, include_in_schema=False)
async def list_tags(
    service: BookmarkService = Depends(get_bookmark_service),
) -> TagListResponse:
    """Get every tag in use with its bookmark count, most used first."""
    tag_counts = await service.list_tags()
    return TagListResponse(
        count=len(tag_counts),
        data=[TagCountResponse(tag=item.tag, count=item.count) for item in tag_counts],
    )
