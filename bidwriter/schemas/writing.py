"""
Writing Assistant Schemas
Pydantic models for AI text generation requests.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from bidwriter.schemas.literature import Paper


class PolishMode(str, Enum):
    """Editing styles for polishing draft text."""

    ACADEMIC = "academic"
    CLARITY = "clarity"
    CONCISE = "concise"
    FUNDER_ALIGNED = "funder-aligned"
    REWRITE = "rewrite"


class CoInvestigator(BaseModel):
    """A co-investigator on the proposal."""
    name: str = ""
    institution: str = ""


class ProposalForm(BaseModel):
    """Project details entered on the proposal form."""

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    scheme: Optional[str] = None
    research_area: Optional[str] = None
    amount: Optional[Any] = None
    duration: Optional[Any] = None
    pi_name: Optional[str] = None
    pi_institution: Optional[str] = None
    co_investigators: List[CoInvestigator] = Field(default_factory=list)
    research_question: Optional[str] = None
    objectives: List[str] = Field(default_factory=list)
    methodology: Optional[str] = None
    outcomes: Optional[str] = None
    existing_notes: Optional[str] = None


class ImpactForm(BaseModel):
    """Details for an impact statement."""

    model_config = ConfigDict(extra="allow")

    research_summary: Optional[str] = None
    beneficiaries: List[str] = Field(default_factory=list)
    impact_types: List[str] = Field(default_factory=list)
    timeframes: List[str] = Field(default_factory=list)


class GenerateProposalRequest(BaseModel):
    """Request to draft a full proposal."""
    form: ProposalForm
    funder_id: Optional[str] = Field(None, description="Funder to tailor the proposal to")


class GenerateImpactRequest(BaseModel):
    """Request to draft an impact statement."""
    form: ImpactForm
    funder_id: Optional[str] = None


class PolishRequest(BaseModel):
    """Request to polish draft text."""
    text: str = Field(..., min_length=1, description="Draft text to polish")
    mode: str = Field(PolishMode.ACADEMIC.value, description="academic, clarity, concise, funder-aligned or rewrite")
    funder_id: Optional[str] = None


class BudgetJustificationRequest(BaseModel):
    """Request to draft a Justification of Resources."""
    budget: Dict[str, Any] = Field(..., description="Budget items or a calculated budget")
    project_context: Optional[str] = None


class LiteratureReviewRequest(BaseModel):
    """Request to draft a literature review from selected papers."""
    topic: str = Field(..., min_length=1)
    papers: List[Paper] = Field(..., min_length=1)


class MethodologyRequest(BaseModel):
    """Request to draft a methodology section."""
    form: ProposalForm
    funder_id: Optional[str] = None


class EthicsRequest(BaseModel):
    """Request to draft an ethical considerations section."""
    form: ProposalForm


class ProposalTextRequest(BaseModel):
    """Request carrying the text of a drafted proposal, for abstracts and lay summaries."""
    proposal: str = Field(..., min_length=1)


class ReviewerSimulationRequest(BaseModel):
    """Request for a simulated peer review."""
    proposal: str = Field(..., min_length=1)
    funder_id: Optional[str] = Field(None, description="Funder whose review criteria to score against")


class ResearchGapsRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Literature or notes to analyse")


class ReviewerResponseRequest(BaseModel):
    """Request to draft a response to reviewer comments."""
    reviewer_comments: str = Field(..., min_length=1)
    proposal_context: Optional[str] = None
