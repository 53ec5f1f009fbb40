"""
Compliance API Endpoints
Checks a proposal against the rules of a funder's grant scheme.
"""

import logging

from fastapi import APIRouter

from bidwriter.api.deps import FunderRegistryDep
from bidwriter.core.exceptions import NotFoundError
from bidwriter.schemas.compliance import ComplianceCheckRequest, ComplianceReport
from bidwriter.services.compliance_checker import compliance_checker, resolve_scheme

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/compliance", tags=["Compliance"])


@router.post("/check", response_model=ComplianceReport)
async def check_compliance(
    request: ComplianceCheckRequest,
    registry: FunderRegistryDep,
) -> ComplianceReport:
    """
    Run compliance checks for a proposal.

    An unknown funder is a 404. A scheme index that does not exist for the
    funder produces a failing report rather than an error.
    """
    funder = registry.get_funder(request.funder_id)
    if funder is None:
        raise NotFoundError("Funder", request.funder_id)

    scheme = resolve_scheme(funder, request.scheme_index)
    report = compliance_checker.run_checks(
        proposal_text=request.proposal_text,
        sections=request.sections,
        scheme=scheme,
        budget=request.budget,
        duration=request.duration,
    )
    logger.info(
        f"Compliance check for {request.funder_id}[{request.scheme_index}]: "
        f"{report.overall.value} ({len(report.results)} checks)"
    )
    return report
