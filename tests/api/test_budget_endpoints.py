"""
Tests for budget API endpoints.
"""
import pytest


class TestCalculateBudgetEndpoint:
    """Tests for POST /api/budget/calculate."""

    @pytest.mark.asyncio
    async def test_calculate(self, app_client):
        """Test a budget calculation over HTTP."""
        response = await app_client.post("/api/budget/calculate", json={
            "staff": [{"role": "RA", "salary": "40000", "fte": 100, "months": 12}],
            "travel": [{"cost_per_trip": 500, "num_trips": 3}],
        })

        assert response.status_code == 200
        data = response.json()
        assert data["categories"]["staff"]["total"] == 50000
        assert data["categories"]["staff"]["items"][0]["role"] == "RA"
        assert data["categories"]["travel"]["total"] == 1500
        assert data["summary"]["direct_costs"] == 51500
        assert data["summary"]["cost_model"] == "fEC"

    @pytest.mark.asyncio
    async def test_empty_body(self, app_client):
        """Test that an empty budget calculates to zero."""
        response = await app_client.post("/api/budget/calculate", json={})

        assert response.status_code == 200
        summary = response.json()["summary"]
        assert summary["full_economic_cost"] == 0
        assert summary["funder_rate"] == 80

    @pytest.mark.asyncio
    async def test_unknown_cost_model_reported_as_fec(self, app_client):
        """Test that the effective cost model is reported."""
        response = await app_client.post("/api/budget/calculate", json={
            "equipment": [{"cost": 1000}],
            "cost_model": "bespoke",
        })

        assert response.status_code == 200
        assert response.json()["summary"]["cost_model"] == "fEC"
