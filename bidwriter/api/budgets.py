"""
Budget API Endpoints
Calculates itemised proposal budgets and the funder/institution split.
"""

import logging

from fastapi import APIRouter

from bidwriter.schemas.budgets import BudgetCalculateRequest, BudgetCalculationResponse
from bidwriter.services.budget_calculator import budget_calculator_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/budget", tags=["Budget"])


@router.post("/calculate", response_model=BudgetCalculationResponse)
async def calculate_budget(request: BudgetCalculateRequest) -> BudgetCalculationResponse:
    """
    Calculate a budget.

    Every category is returned with per-item subtotals and a category total,
    together with the direct, indirect and full economic cost summary.
    """
    result = budget_calculator_service.calculate_budget(request.model_dump())
    logger.debug(f"Budget calculated: fEC={result['summary']['full_economic_cost']}")
    return BudgetCalculationResponse.model_validate(result)
