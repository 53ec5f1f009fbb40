"""
Tests for the Literature Search Service.
"""
from unittest.mock import AsyncMock

import httpx
import pytest

from bidwriter.core.exceptions import ExternalServiceError, ValidationError


def make_service(response=None, error=None):
    from bidwriter.services.literature_search import LiteratureSearchService

    service = LiteratureSearchService(base_url="https://api.test/graph/v1")
    client = AsyncMock(spec=httpx.AsyncClient)
    if error is not None:
        client.get.side_effect = error
    else:
        client.get.return_value = response
    service.http_client = client
    return service


class TestSearchPapers:
    """Tests for paper search."""

    @pytest.mark.asyncio
    async def test_search_returns_papers(self):
        """Test a successful search."""
        response = httpx.Response(200, json={
            "total": 1234,
            "offset": 0,
            "next": 20,
            "data": [{
                "paperId": "abc",
                "title": "Graph Neural Networks",
                "authors": [{"authorId": "1", "name": "Kipf"}],
                "year": 2017,
                "citationCount": 9000,
                "externalIds": {"DOI": "10.1/gnn"},
            }],
        })
        service = make_service(response)

        result = await service.search_papers("graph networks")

        assert result.total == 1234
        assert result.next == 20
        assert result.data[0].paper_id == "abc"
        assert result.data[0].citation_count == 9000
        assert result.data[0].authors[0].name == "Kipf"

        url = service.http_client.get.call_args.args[0]
        params = service.http_client.get.call_args.kwargs["params"]
        assert url == "https://api.test/graph/v1/paper/search"
        assert params["query"] == "graph networks"
        assert params["fields"] == "title,authors,year,citationCount,abstract,url,externalIds"

    @pytest.mark.asyncio
    async def test_limit_is_clamped(self):
        """Test that paging parameters stay within API bounds."""
        service = make_service(httpx.Response(200, json={"total": 0, "data": []}))

        await service.search_papers("q", offset=-5, limit=500)

        params = service.http_client.get.call_args.kwargs["params"]
        assert params["offset"] == 0
        assert params["limit"] == 100

    @pytest.mark.asyncio
    async def test_empty_query_rejected(self):
        """Test that an empty query is a validation error."""
        service = make_service(httpx.Response(200, json={}))

        with pytest.raises(ValidationError):
            await service.search_papers("   ")
        service.http_client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_upstream_error_status(self):
        """Test that a non-200 response becomes a 502."""
        service = make_service(httpx.Response(429, json={"message": "Too Many Requests"}))

        with pytest.raises(ExternalServiceError) as exc_info:
            await service.search_papers("q")

        assert exc_info.value.status_code == 502
        assert "429" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_transport_error(self):
        """Test that non-retryable transport failures become a 502."""
        service = make_service(error=httpx.RemoteProtocolError("bad"))

        with pytest.raises(ExternalServiceError):
            await service.search_papers("q")
