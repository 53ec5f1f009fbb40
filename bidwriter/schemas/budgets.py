"""
Budget Schemas
Pydantic models for the budget calculation API.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class CostModel(str, Enum):
    """How the full economic cost is split between funder and institution."""

    FEC = "fEC"  # Funder pays a share of fEC (80% for UKRI)
    FULL = "full"  # Funder pays everything
    CUSTOM = "custom"  # Funder pays a caller-supplied share


# =============================================================================
# Request Schemas
# =============================================================================

class BudgetCalculateRequest(BaseModel):
    """
    Itemised budget to calculate.

    Line items are kept as free-form mappings: numeric fields may arrive as
    numbers, numeric strings or blanks and are coerced by the calculator.
    """
    staff: Optional[List[Any]] = Field(default_factory=list, description="salary, fte, months, on_cost_rate")
    travel: Optional[List[Any]] = Field(default_factory=list, description="cost_per_trip, num_trips")
    equipment: Optional[List[Any]] = Field(default_factory=list, description="cost")
    consumables: Optional[List[Any]] = Field(default_factory=list, description="cost")
    other: Optional[List[Any]] = Field(default_factory=list, description="cost")
    subcontracting: Optional[List[Any]] = Field(default_factory=list, description="cost")
    cost_model: Optional[str] = Field(CostModel.FEC.value, description="fEC, full or custom")
    fec_rate: Optional[Any] = Field(None, description="Percentage of fEC paid by the funder (default 80)")
    overhead_rate: Optional[Any] = Field(None, description="Indirect cost percentage on direct costs (default 25)")
    custom_rate: Optional[Any] = Field(None, description="Funder percentage for the custom cost model (default 100)")


# =============================================================================
# Response Schemas
# =============================================================================

class BudgetCategoryResult(BaseModel):
    """Calculated line items and total for one cost category."""
    name: str
    description: str
    items: List[Dict[str, Any]]
    total: float


class BudgetSummary(BaseModel):
    """Budget rollup and funder/institution split."""
    direct_costs: float
    overhead_rate: float
    indirect_costs: float
    full_economic_cost: float
    cost_model: CostModel
    funder_rate: float
    funder_contribution: float
    institution_contribution: float


class BudgetCalculationResponse(BaseModel):
    """Complete budget calculation."""
    categories: Dict[str, BudgetCategoryResult]
    summary: BudgetSummary
