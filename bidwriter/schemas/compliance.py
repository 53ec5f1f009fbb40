"""
Compliance Checker Schemas
Pydantic models for compliance check API requests and responses.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================


class FindingStatus(str, Enum):
    """Severity of a compliance finding, from least to most severe."""

    PASS = "pass"
    WARN = "warn"  # Should be reviewed but may be acceptable
    FAIL = "fail"  # Must be fixed before submission


# =============================================================================
# Finding Schemas
# =============================================================================


class ComplianceFinding(BaseModel):
    """Result of a single compliance check."""

    check: str = Field(..., description="Name of the check")
    status: FindingStatus
    message: str
    advice: Optional[str] = Field(None, description="How to fix the issue")


class ComplianceReport(BaseModel):
    """Ordered findings of a compliance run and the overall verdict."""

    overall: FindingStatus
    results: List[ComplianceFinding]


# =============================================================================
# Request Schemas
# =============================================================================


class ComplianceCheckRequest(BaseModel):
    """Request to check a proposal against a funder scheme."""

    funder_id: str = Field(..., min_length=1, description="Funder identifier")
    scheme_index: Optional[Any] = Field(0, description="Index of the scheme within the funder")
    proposal_text: Optional[str] = Field(None, description="Full proposal text with markdown headings")
    sections: Optional[Dict[str, str]] = Field(None, description="Section name to section text")
    budget: Optional[Any] = Field(0, description="Requested amount")
    duration: Optional[Any] = Field(0, description="Duration in months")
