"""
Budget Calculator Service
Turns itemised proposal costs into category totals, full economic cost and
the funder/institution split.

This service handles:
- Staff costs with employer on-costs (pension, National Insurance)
- Travel, equipment, consumables, other and subcontracting costs
- Indirect costs (overheads) on direct costs
- Cost model dispatch (fEC, full, custom)

Every monetary figure is rounded half-up to the penny at each aggregation
step: item subtotal, category total, direct costs, indirect costs, fEC and
the contribution split.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from bidwriter.schemas.budgets import CostModel
from bidwriter.utils.numbers import (
    coerce_number,
    number_or_default,
    round_currency,
    sum_currency,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Defaults
# =============================================================================

DEFAULT_ON_COST_RATE = 0.25  # employer NI + pension
DEFAULT_FTE = 100.0
DEFAULT_NUM_TRIPS = 1.0

DEFAULT_FEC_RATE = 80.0  # UKRI pays 80% of fEC
DEFAULT_OVERHEAD_RATE = 25.0
DEFAULT_CUSTOM_RATE = 100.0


# =============================================================================
# Budget Categories
# =============================================================================


class BudgetCategory(str, Enum):
    """Cost categories of a research proposal budget."""

    STAFF = "staff"
    TRAVEL = "travel"
    EQUIPMENT = "equipment"
    CONSUMABLES = "consumables"
    OTHER = "other"
    SUBCONTRACTING = "subcontracting"


def calculate_staff_item(item: dict[str, Any]) -> dict[str, Any]:
    """
    Cost a staff post for its duration, including on-costs.

    subtotal = salary x fte/100 / 12 x months x (1 + on_cost_rate)
    """
    base_salary = number_or_default(item.get("salary"), 0.0)
    fte = number_or_default(item.get("fte"), DEFAULT_FTE) / 100
    months = number_or_default(item.get("months"), 0.0)
    on_cost_rate = number_or_default(item.get("on_cost_rate"), DEFAULT_ON_COST_RATE)

    annual_cost = base_salary * fte
    monthly_cost = annual_cost / 12
    total_base = monthly_cost * months
    on_costs = total_base * on_cost_rate

    return {
        **item,
        "fte": fte * 100,
        "annual_cost": annual_cost,
        "monthly_cost": monthly_cost,
        "total_base": round_currency(total_base),
        "on_costs": round_currency(on_costs),
        "subtotal": round_currency(total_base + on_costs),
    }


def calculate_travel_item(item: dict[str, Any]) -> dict[str, Any]:
    """Cost a travel line as cost per trip times number of trips."""
    cost_per_trip = number_or_default(item.get("cost_per_trip"), 0.0)
    num_trips = number_or_default(item.get("num_trips"), DEFAULT_NUM_TRIPS)
    return {**item, "subtotal": round_currency(cost_per_trip * num_trips)}


def calculate_flat_item(item: dict[str, Any]) -> dict[str, Any]:
    """Cost a line that carries a single flat cost."""
    return {**item, "subtotal": round_currency(number_or_default(item.get("cost"), 0.0))}


@dataclass(frozen=True)
class CategoryDefinition:
    """Definition for a budget category."""

    name: str
    description: str
    calculate_item: Callable[[dict[str, Any]], dict[str, Any]]


BUDGET_CATEGORIES = {
    BudgetCategory.STAFF: CategoryDefinition(
        name="Staff",
        description="Salaries for investigators, researchers and technicians, with employer on-costs",
        calculate_item=calculate_staff_item,
    ),
    BudgetCategory.TRAVEL: CategoryDefinition(
        name="Travel & Subsistence",
        description="Conference, fieldwork and collaboration trips",
        calculate_item=calculate_travel_item,
    ),
    BudgetCategory.EQUIPMENT: CategoryDefinition(
        name="Equipment",
        description="Capital items and instruments",
        calculate_item=calculate_flat_item,
    ),
    BudgetCategory.CONSUMABLES: CategoryDefinition(
        name="Consumables",
        description="Materials, reagents, software licences and other consumed items",
        calculate_item=calculate_flat_item,
    ),
    BudgetCategory.OTHER: CategoryDefinition(
        name="Other Costs",
        description="Publication fees, participant payments, dissemination and similar",
        calculate_item=calculate_flat_item,
    ),
    BudgetCategory.SUBCONTRACTING: CategoryDefinition(
        name="Subcontracting",
        description="Work contracted to third parties",
        calculate_item=calculate_flat_item,
    ),
}


# =============================================================================
# Budget Calculation Service
# =============================================================================


class BudgetCalculatorService:
    """Service for calculating itemised proposal budgets."""

    def __init__(self):
        self.categories = BUDGET_CATEGORIES

    def calculate_category(
        self,
        category: BudgetCategory,
        items: Any,
    ) -> dict[str, Any]:
        """
        Calculate every line item of a category and its total.

        Missing or malformed item lists are treated as empty; entries that
        are not mappings are costed as empty items.
        """
        definition = self.categories[category]
        if not isinstance(items, list):
            items = []

        calculated = [
            definition.calculate_item(item if isinstance(item, dict) else {})
            for item in items
        ]
        return {
            "name": definition.name,
            "description": definition.description,
            "items": calculated,
            "total": sum_currency(item["subtotal"] for item in calculated),
        }

    def resolve_funder_rate(
        self,
        cost_model: Optional[str],
        fec_rate: float,
        custom_rate: float,
    ) -> tuple[CostModel, float]:
        """
        Resolve the cost model and the fraction of fEC the funder pays.

        Unrecognised cost models fall back to fEC.
        """
        if cost_model == CostModel.FULL.value:
            return CostModel.FULL, 1.0
        if cost_model == CostModel.CUSTOM.value:
            return CostModel.CUSTOM, custom_rate / 100
        if cost_model != CostModel.FEC.value:
            logger.debug("Unrecognised cost model %r, using fEC", cost_model)
        return CostModel.FEC, fec_rate / 100

    def calculate_budget(self, budget_data: Optional[dict[str, Any]]) -> dict[str, Any]:
        """
        Calculate a complete budget breakdown.

        Args:
            budget_data: Category item lists (staff, travel, equipment,
                consumables, other, subcontracting) plus cost_model, fec_rate,
                overhead_rate and custom_rate

        Returns:
            Dictionary with calculated categories and the budget summary
        """
        budget_data = budget_data if isinstance(budget_data, dict) else {}

        overhead_rate = coerce_number(budget_data.get("overhead_rate"), DEFAULT_OVERHEAD_RATE)
        fec_rate = coerce_number(budget_data.get("fec_rate"), DEFAULT_FEC_RATE)
        custom_rate = coerce_number(budget_data.get("custom_rate"), DEFAULT_CUSTOM_RATE)

        categories = {
            category.value: self.calculate_category(category, budget_data.get(category.value))
            for category in self.categories
        }

        direct_costs = sum_currency(result["total"] for result in categories.values())
        indirect_costs = round_currency(direct_costs * (overhead_rate / 100))
        full_economic_cost = round_currency(direct_costs + indirect_costs)

        cost_model, rate = self.resolve_funder_rate(
            budget_data.get("cost_model", CostModel.FEC.value),
            fec_rate,
            custom_rate,
        )
        if cost_model == CostModel.FULL:
            funder_contribution = full_economic_cost
            institution_contribution = 0.0
        else:
            funder_contribution = round_currency(full_economic_cost * rate)
            institution_contribution = round_currency(full_economic_cost - funder_contribution)

        return {
            "categories": categories,
            "summary": {
                "direct_costs": direct_costs,
                "overhead_rate": overhead_rate,
                "indirect_costs": indirect_costs,
                "full_economic_cost": full_economic_cost,
                "cost_model": cost_model.value,
                "funder_rate": round_currency(rate * 100),
                "funder_contribution": funder_contribution,
                "institution_contribution": institution_contribution,
            },
        }


# Singleton instance
budget_calculator_service = BudgetCalculatorService()


def calculate_budget(budget_data: Optional[dict[str, Any]]) -> dict[str, Any]:
    """Calculate a complete budget breakdown with the shared service."""
    return budget_calculator_service.calculate_budget(budget_data)
