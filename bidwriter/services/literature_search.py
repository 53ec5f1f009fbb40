"""
Literature Search Service for finding academic papers via Semantic Scholar.
"""

import logging
from typing import Any, Optional

import httpx
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from bidwriter.core.config import settings
from bidwriter.core.exceptions import ExternalServiceError, ValidationError
from bidwriter.schemas.literature import PaperSearchResponse

logger = logging.getLogger(__name__)

PAPER_FIELDS = "title,authors,year,citationCount,abstract,url,externalIds"
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class LiteratureSearchService:
    """
    Service for searching the Semantic Scholar Graph API.

    Results are passed through with paging metadata; nothing is cached.
    """

    SERVICE_NAME = "Semantic Scholar"

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = (base_url or settings.semantic_scholar_api_url).rstrip("/")
        self.http_client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self.http_client is None:
            self.http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(settings.semantic_scholar_timeout),
                headers={
                    "Accept": "application/json",
                    "User-Agent": f"{settings.app_name}/{settings.app_version} (literature-search)",
                },
            )
        return self.http_client

    async def close(self):
        """Close HTTP client."""
        if self.http_client:
            await self.http_client.aclose()
            self.http_client = None

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
    )
    async def _query_papers(self, params: dict) -> httpx.Response:
        client = await self._get_client()
        logger.debug(f"Semantic Scholar query: {params}")
        return await client.get(f"{self.base_url}/paper/search", params=params)

    async def search_papers(
        self,
        query: str,
        offset: int = 0,
        limit: int = DEFAULT_LIMIT,
    ) -> PaperSearchResponse:
        """
        Search papers by free-text query.

        Args:
            query: Search terms
            offset: Starting offset for paging
            limit: Number of results (1-100)

        Returns:
            A page of matching papers
        """
        query = (query or "").strip()
        if not query:
            raise ValidationError("Query parameter is required")

        params: dict[str, Any] = {
            "query": query,
            "offset": max(offset, 0),
            "limit": min(max(limit, 1), MAX_LIMIT),
            "fields": PAPER_FIELDS,
        }

        try:
            response = await self._query_papers(params)
        except httpx.HTTPError as e:
            logger.error(f"Semantic Scholar request failed: {e}")
            raise ExternalServiceError(self.SERVICE_NAME, "request failed") from e

        if response.status_code != 200:
            logger.warning(f"Semantic Scholar returned {response.status_code} for query '{query}'")
            raise ExternalServiceError(self.SERVICE_NAME, f"API returned {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise ExternalServiceError(self.SERVICE_NAME, "invalid response body") from e

        return PaperSearchResponse.model_validate({
            "total": payload.get("total") or 0,
            "offset": payload.get("offset") or params["offset"],
            "next": payload.get("next"),
            "data": payload.get("data") or [],
        })


# Singleton instance
literature_search_service = LiteratureSearchService()


def get_literature_search() -> LiteratureSearchService:
    """FastAPI dependency returning the shared search service."""
    return literature_search_service
