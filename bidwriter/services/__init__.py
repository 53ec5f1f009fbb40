"""
Services for budget and compliance logic, persistence and external integrations.
"""

from bidwriter.services.budget_calculator import BudgetCalculatorService, calculate_budget
from bidwriter.services.compliance_checker import ComplianceCheckerService, run_compliance_checks
from bidwriter.services.funder_registry import FunderRegistry
from bidwriter.services.literature_search import LiteratureSearchService
from bidwriter.services.proposal_store import ProposalStore
from bidwriter.services.writing_assistant import WritingAssistantService

__all__ = [
    "BudgetCalculatorService",
    "ComplianceCheckerService",
    "FunderRegistry",
    "LiteratureSearchService",
    "ProposalStore",
    "WritingAssistantService",
    "calculate_budget",
    "run_compliance_checks",
]
