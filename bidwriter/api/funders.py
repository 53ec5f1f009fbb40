"""
Funder API Endpoints
Read-only access to funder and scheme definitions.
"""

from typing import List

from fastapi import APIRouter

from bidwriter.api.deps import FunderRegistryDep
from bidwriter.core.exceptions import NotFoundError
from bidwriter.schemas.funders import Funder, FunderSummary

router = APIRouter(prefix="/api/funders", tags=["Funders"])


@router.get("", response_model=List[FunderSummary])
async def list_funders(registry: FunderRegistryDep) -> List[FunderSummary]:
    """List all funders, sorted by name."""
    return registry.list_funders()


@router.get("/{funder_id}", response_model=Funder)
async def get_funder(funder_id: str, registry: FunderRegistryDep) -> Funder:
    """Get a funder with its schemes and section requirements."""
    funder = registry.get_funder(funder_id)
    if funder is None:
        raise NotFoundError("Funder", funder_id)
    return funder
