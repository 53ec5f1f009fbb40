"""
Literature Search API Endpoints
Paper search proxied to Semantic Scholar.
"""

from fastapi import APIRouter, Query

from bidwriter.api.deps import LiteratureSearchDep
from bidwriter.schemas.literature import PaperSearchResponse
from bidwriter.services.literature_search import DEFAULT_LIMIT, MAX_LIMIT

router = APIRouter(prefix="/api/search", tags=["Literature"])


@router.get("/papers", response_model=PaperSearchResponse)
async def search_papers(
    service: LiteratureSearchDep,
    query: str = Query("", description="Search terms"),
    offset: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
) -> PaperSearchResponse:
    """Search academic papers. An empty query is rejected with a 400."""
    return await service.search_papers(query, offset=offset, limit=limit)
