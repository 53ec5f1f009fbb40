"""
Tests for compliance API endpoints.
"""
import pytest


class TestComplianceCheckEndpoint:
    """Tests for POST /api/compliance/check."""

    @pytest.mark.asyncio
    async def test_check_against_bundled_scheme(self, app_client):
        """Test a check against the British Academy small grant."""
        response = await app_client.post("/api/compliance/check", json={
            "funder_id": "british-academy",
            "scheme_index": 0,
            "proposal_text": "",
            "sections": {"Abstract": " ".join(["word"] * 95)},
            "budget": 12000,
            "duration": 12,
        })

        assert response.status_code == 200
        data = response.json()
        checks = {result["check"]: result for result in data["results"]}
        assert checks["Budget Maximum"]["status"] == "fail"
        assert checks["Section: Abstract (Word Limit)"]["status"] == "warn"
        assert data["overall"] == "fail"

    @pytest.mark.asyncio
    async def test_invalid_scheme_index(self, app_client):
        """Test that a bad scheme index is reported in-band."""
        response = await app_client.post("/api/compliance/check", json={
            "funder_id": "epsrc",
            "scheme_index": 42,
            "proposal_text": "Text",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["overall"] == "fail"
        assert [result["check"] for result in data["results"]] == ["Scheme Selection"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("scheme_index", [None, "abc", 0.5, -1])
    async def test_non_integer_scheme_index(self, app_client, scheme_index):
        """Test that null, text and fractional indexes fail scheme selection rather than validation."""
        response = await app_client.post("/api/compliance/check", json={
            "funder_id": "epsrc",
            "scheme_index": scheme_index,
            "proposal_text": "Text",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["overall"] == "fail"
        assert [result["check"] for result in data["results"]] == ["Scheme Selection"]

    @pytest.mark.asyncio
    async def test_unknown_funder(self, app_client):
        """Test that an unknown funder is a 404."""
        response = await app_client.post("/api/compliance/check", json={
            "funder_id": "nobody",
            "proposal_text": "Text",
        })

        assert response.status_code == 404
        assert response.json()["error"] is True
