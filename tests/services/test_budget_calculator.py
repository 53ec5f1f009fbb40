"""
Tests for Budget Calculator Service.
Tests item costing, category totals, cost models and rounding.
"""
import pytest


class TestStaffItem:
    """Tests for staff line costing."""

    def test_full_time_post_with_default_on_costs(self):
        """Test a full-time post for a year at the default on-cost rate."""
        from bidwriter.services.budget_calculator import calculate_staff_item

        item = calculate_staff_item({"salary": 40000, "fte": 100, "months": 12})

        assert item["annual_cost"] == 40000
        assert item["monthly_cost"] == pytest.approx(40000 / 12)
        assert item["total_base"] == 40000
        assert item["on_costs"] == 10000
        assert item["subtotal"] == 50000

    def test_part_time_post(self):
        """Test FTE scaling of a part-time post."""
        from bidwriter.services.budget_calculator import calculate_staff_item

        item = calculate_staff_item({"salary": 36000, "fte": 50, "months": 24, "on_cost_rate": 0.3})

        assert item["fte"] == 50
        assert item["total_base"] == 36000
        assert item["on_costs"] == 10800
        assert item["subtotal"] == 46800

    def test_missing_fields_use_defaults(self):
        """Test that fte and on-cost rate default when absent."""
        from bidwriter.services.budget_calculator import (
            DEFAULT_FTE,
            DEFAULT_ON_COST_RATE,
            calculate_staff_item,
        )

        item = calculate_staff_item({"salary": 12000, "months": 12})

        assert item["fte"] == DEFAULT_FTE
        assert item["on_costs"] == 12000 * DEFAULT_ON_COST_RATE
        assert item["subtotal"] == 15000

    def test_zero_fte_falls_back_to_full_time(self):
        """Test that an explicit zero FTE is read as unset."""
        from bidwriter.services.budget_calculator import calculate_staff_item

        item = calculate_staff_item({"salary": 12000, "fte": 0, "months": 12})

        assert item["fte"] == 100
        assert item["subtotal"] == 15000

    def test_numeric_strings_are_coerced(self):
        """Test that form strings are read as numbers."""
        from bidwriter.services.budget_calculator import calculate_staff_item

        item = calculate_staff_item({"salary": "40000", "fte": "100", "months": "12"})

        assert item["subtotal"] == 50000

    def test_unparsable_salary_costs_nothing(self):
        """Test that garbage input yields a zero subtotal rather than an error."""
        from bidwriter.services.budget_calculator import calculate_staff_item

        item = calculate_staff_item({"salary": "abc", "months": 12})

        assert item["subtotal"] == 0

    def test_extra_fields_are_preserved(self):
        """Test that descriptive fields pass through unchanged."""
        from bidwriter.services.budget_calculator import calculate_staff_item

        item = calculate_staff_item({"role": "Research Associate", "salary": 30000, "months": 6})

        assert item["role"] == "Research Associate"


class TestOtherItems:
    """Tests for travel and flat-cost lines."""

    def test_travel_multiplies_trips(self):
        """Test travel cost per trip times number of trips."""
        from bidwriter.services.budget_calculator import calculate_travel_item

        item = calculate_travel_item({"description": "Conference", "cost_per_trip": 500, "num_trips": 3})

        assert item["subtotal"] == 1500
        assert item["description"] == "Conference"

    def test_travel_defaults_to_one_trip(self):
        """Test that a missing trip count means one trip."""
        from bidwriter.services.budget_calculator import calculate_travel_item

        assert calculate_travel_item({"cost_per_trip": 750})["subtotal"] == 750

    def test_flat_item_uses_cost(self):
        """Test flat-cost categories."""
        from bidwriter.services.budget_calculator import calculate_flat_item

        assert calculate_flat_item({"cost": "10.125"})["subtotal"] == 10.13
        assert calculate_flat_item({})["subtotal"] == 0


class TestCalculateBudget:
    """Tests for the full budget calculation."""

    def test_default_fec_split(self):
        """Test the worked example: one staff post under default fEC."""
        from bidwriter.services.budget_calculator import calculate_budget

        result = calculate_budget({"staff": [{"salary": 40000, "fte": 100, "months": 12}]})
        summary = result["summary"]

        assert result["categories"]["staff"]["total"] == 50000
        assert summary["direct_costs"] == 50000
        assert summary["indirect_costs"] == 12500
        assert summary["full_economic_cost"] == 62500
        assert summary["funder_contribution"] == 50000
        assert summary["institution_contribution"] == 12500
        assert summary["cost_model"] == "fEC"
        assert summary["funder_rate"] == 80
        assert summary["overhead_rate"] == 25

    def test_all_categories_present_when_empty(self):
        """Test that every category is reported even with no items."""
        from bidwriter.services.budget_calculator import BudgetCategory, calculate_budget

        result = calculate_budget({})

        assert set(result["categories"]) == {category.value for category in BudgetCategory}
        for category in result["categories"].values():
            assert category["items"] == []
            assert category["total"] == 0
        assert result["summary"]["full_economic_cost"] == 0

    def test_non_dict_input_is_empty_budget(self):
        """Test that a missing budget is treated as empty."""
        from bidwriter.services.budget_calculator import calculate_budget

        assert calculate_budget(None)["summary"]["direct_costs"] == 0

    def test_malformed_item_lists_are_ignored(self):
        """Test that non-list categories and non-dict items are tolerated."""
        from bidwriter.services.budget_calculator import calculate_budget

        result = calculate_budget({"equipment": "laptop", "consumables": [None, {"cost": 100}]})

        assert result["categories"]["equipment"]["items"] == []
        assert result["categories"]["consumables"]["total"] == 100

    def test_categories_carry_names(self):
        """Test that each category reports its display name and description."""
        from bidwriter.services.budget_calculator import calculate_budget

        categories = calculate_budget({})["categories"]

        assert categories["travel"]["name"] == "Travel & Subsistence"
        assert categories["other"]["name"] == "Other Costs"
        assert all(category["description"] for category in categories.values())

    def test_very_large_costs_do_not_overflow(self):
        """Test that costs too large to round to the penny pass through."""
        from bidwriter.services.budget_calculator import calculate_budget

        result = calculate_budget({"equipment": [{"cost": 1e307}]})

        assert result["categories"]["equipment"]["total"] == 1e307
        assert result["summary"]["direct_costs"] == 1e307

    def test_direct_costs_sum_categories(self):
        """Test that direct costs equal the sum of category totals."""
        from bidwriter.services.budget_calculator import calculate_budget

        result = calculate_budget({
            "staff": [{"salary": 33333, "fte": 37, "months": 7}],
            "travel": [{"cost_per_trip": 333.33, "num_trips": 3}],
            "equipment": [{"cost": 999.99}],
            "consumables": [{"cost": 0.01}, {"cost": 0.02}],
            "other": [{"cost": 50}],
            "subcontracting": [{"cost": 1000}],
        })
        totals = [category["total"] for category in result["categories"].values()]

        assert result["summary"]["direct_costs"] == pytest.approx(sum(totals), abs=0.005)

    def test_split_always_adds_up(self):
        """Test that funder plus institution equals fEC for each cost model."""
        from bidwriter.services.budget_calculator import calculate_budget

        base = {"staff": [{"salary": 41234.56, "fte": 80, "months": 17}], "travel": [{"cost_per_trip": 123.45}]}
        for overrides in ({}, {"cost_model": "full"}, {"cost_model": "custom", "custom_rate": 66.6}):
            summary = calculate_budget({**base, **overrides})["summary"]
            assert summary["funder_contribution"] + summary["institution_contribution"] == pytest.approx(
                summary["full_economic_cost"], abs=0.01
            )

    def test_full_cost_model(self):
        """Test that the funder pays everything under the full model."""
        from bidwriter.services.budget_calculator import calculate_budget

        summary = calculate_budget({"equipment": [{"cost": 1000}], "cost_model": "full"})["summary"]

        assert summary["cost_model"] == "full"
        assert summary["funder_rate"] == 100
        assert summary["funder_contribution"] == summary["full_economic_cost"] == 1250
        assert summary["institution_contribution"] == 0

    def test_custom_cost_model(self):
        """Test a caller-supplied funder percentage."""
        from bidwriter.services.budget_calculator import calculate_budget

        summary = calculate_budget({
            "equipment": [{"cost": 1000}],
            "cost_model": "custom",
            "custom_rate": 60,
            "overhead_rate": 0,
        })["summary"]

        assert summary["funder_rate"] == 60
        assert summary["funder_contribution"] == 600
        assert summary["institution_contribution"] == 400

    def test_unknown_cost_model_behaves_as_fec(self):
        """Test that an unrecognised cost model uses the fEC rate."""
        from bidwriter.services.budget_calculator import calculate_budget

        budget = {"equipment": [{"cost": 1000}]}
        unknown = calculate_budget({**budget, "cost_model": "mystery"})["summary"]
        fec = calculate_budget({**budget, "cost_model": "fEC"})["summary"]

        assert unknown == fec

    def test_missing_rates_use_defaults_but_garbage_is_zero(self):
        """Test rate parameter coercion."""
        from bidwriter.services.budget_calculator import calculate_budget

        budget = {"equipment": [{"cost": 1000}]}

        assert calculate_budget(budget)["summary"]["indirect_costs"] == 250
        summary = calculate_budget({**budget, "overhead_rate": "n/a"})["summary"]
        assert summary["overhead_rate"] == 0
        assert summary["indirect_costs"] == 0

    def test_rounding_half_up(self):
        """Test that half pennies round up."""
        from bidwriter.services.budget_calculator import calculate_budget

        summary = calculate_budget({
            "consumables": [{"cost": 0.5}],
            "overhead_rate": 1,
        })["summary"]

        assert summary["indirect_costs"] == 0.01
        assert summary["full_economic_cost"] == 0.51

    def test_is_idempotent(self):
        """Test that recalculating gives the same result."""
        from bidwriter.services.budget_calculator import calculate_budget

        budget = {"staff": [{"salary": 40000, "months": 12}], "travel": [{"cost_per_trip": 500, "num_trips": 3}]}

        assert calculate_budget(budget) == calculate_budget(budget)

    def test_does_not_mutate_input(self):
        """Test that the caller's items are not modified."""
        from bidwriter.services.budget_calculator import calculate_budget

        item = {"salary": 40000, "months": 12}
        calculate_budget({"staff": [item]})

        assert item == {"salary": 40000, "months": 12}


class TestResolveFunderRate:
    """Tests for cost model dispatch."""

    def test_rates(self):
        """Test the funder fraction for each model."""
        from bidwriter.schemas.budgets import CostModel
        from bidwriter.services.budget_calculator import budget_calculator_service

        assert budget_calculator_service.resolve_funder_rate("fEC", 80, 100) == (CostModel.FEC, 0.8)
        assert budget_calculator_service.resolve_funder_rate("full", 80, 100) == (CostModel.FULL, 1.0)
        assert budget_calculator_service.resolve_funder_rate("custom", 80, 50) == (CostModel.CUSTOM, 0.5)
        assert budget_calculator_service.resolve_funder_rate(None, 70, 100) == (CostModel.FEC, 0.7)
