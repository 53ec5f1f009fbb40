"""
BidWriter Pydantic Schemas
Request/Response models for API endpoints.
"""
from bidwriter.schemas.budgets import (
    BudgetCalculateRequest,
    BudgetCalculationResponse,
    BudgetCategoryResult,
    BudgetSummary,
    CostModel,
)
from bidwriter.schemas.compliance import (
    ComplianceCheckRequest,
    ComplianceFinding,
    ComplianceReport,
    FindingStatus,
)
from bidwriter.schemas.funders import Funder, FunderScheme, FunderSummary, RequiredSection
from bidwriter.schemas.literature import Paper, PaperAuthor, PaperSearchResponse
from bidwriter.schemas.proposals import DeleteResponse, ProposalSummary, VersionCreate, VersionSummary
from bidwriter.schemas.writing import (
    BudgetJustificationRequest,
    CoInvestigator,
    EthicsRequest,
    GenerateImpactRequest,
    GenerateProposalRequest,
    ImpactForm,
    LiteratureReviewRequest,
    MethodologyRequest,
    PolishMode,
    PolishRequest,
    ProposalForm,
    ProposalTextRequest,
    ResearchGapsRequest,
    ReviewerResponseRequest,
    ReviewerSimulationRequest,
)

__all__ = [
    # Budgets
    "BudgetCalculateRequest",
    "BudgetCalculationResponse",
    "BudgetCategoryResult",
    "BudgetSummary",
    "CostModel",
    # Compliance
    "ComplianceCheckRequest",
    "ComplianceFinding",
    "ComplianceReport",
    "FindingStatus",
    # Funders
    "Funder",
    "FunderScheme",
    "FunderSummary",
    "RequiredSection",
    # Literature
    "Paper",
    "PaperAuthor",
    "PaperSearchResponse",
    # Proposals
    "DeleteResponse",
    "ProposalSummary",
    "VersionCreate",
    "VersionSummary",
    # Writing
    "BudgetJustificationRequest",
    "CoInvestigator",
    "EthicsRequest",
    "GenerateImpactRequest",
    "GenerateProposalRequest",
    "ImpactForm",
    "LiteratureReviewRequest",
    "MethodologyRequest",
    "PolishMode",
    "PolishRequest",
    "ProposalForm",
    "ProposalTextRequest",
    "ResearchGapsRequest",
    "ReviewerResponseRequest",
    "ReviewerSimulationRequest",
]
