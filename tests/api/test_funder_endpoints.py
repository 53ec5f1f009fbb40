"""
Tests for funder API endpoints.
"""
import pytest


class TestFunderEndpoints:
    """Tests for /api/funders."""

    @pytest.mark.asyncio
    async def test_list_funders(self, app_client):
        """Test listing funders."""
        response = await app_client.get("/api/funders")

        assert response.status_code == 200
        ids = [funder["id"] for funder in response.json()]
        assert "epsrc" in ids
        assert all("schemes_count" in funder for funder in response.json())

    @pytest.mark.asyncio
    async def test_get_funder(self, app_client):
        """Test fetching a funder definition."""
        response = await app_client.get("/api/funders/wellcome")

        assert response.status_code == 200
        assert response.json()["schemes"][0]["name"] == "Career Development Award"

    @pytest.mark.asyncio
    async def test_get_unknown_funder(self, app_client):
        """Test that unknown funders are 404s in the standard error shape."""
        response = await app_client.get("/api/funders/unknown")

        assert response.status_code == 404
        assert response.json() == {
            "error": True,
            "message": "Funder not found: unknown",
            "status_code": 404,
        }
