"""
Compliance Checker Service
Core logic for validating proposals against a funder scheme's requirements.
"""
from typing import Any, Callable, Dict, List, Mapping, Optional

import structlog

from bidwriter.schemas.compliance import ComplianceFinding, ComplianceReport, FindingStatus
from bidwriter.schemas.funders import Funder, FunderScheme, RequiredSection
from bidwriter.services.section_lookup import find_section
from bidwriter.utils.numbers import parse_number
from bidwriter.utils.text import count_terms, count_whole_word, count_words, estimate_pages

logger = structlog.get_logger(__name__)

# A required section shorter than this is treated as missing
MIN_SECTION_CHARS = 50

BUDGET_WARNING_RATIO = 0.95
WORD_LIMIT_WARNING_RATIO = 0.9

FIRST_PERSON_LIMIT = 10
VAGUE_TERMS = ("very", "quite", "somewhat", "fairly", "rather", "extremely")
VAGUE_TERM_LIMIT = 15

ATTACHMENT_KEYWORDS = ("CV", "Letter of Support", "Ethics Approval", "Data Management Plan")

_SEVERITY_ORDER = {
    FindingStatus.PASS: 0,
    FindingStatus.WARN: 1,
    FindingStatus.FAIL: 2,
}


def format_amount(value: float) -> str:
    """Format a currency amount with thousands separators."""
    if float(value).is_integer():
        return f"{value:,.0f}"
    return f"{value:,.2f}"


def format_number(value: float) -> str:
    """Format a plain number without a trailing .0."""
    return f"{value:g}"


def overall_status(findings: List[ComplianceFinding]) -> FindingStatus:
    """Most severe status among the findings; pass when there are none."""
    return max(
        (finding.status for finding in findings),
        key=_SEVERITY_ORDER.__getitem__,
        default=FindingStatus.PASS,
    )


def resolve_scheme(funder: Optional[Funder], scheme_index: Any = 0) -> Optional[FunderScheme]:
    """Return the funder's scheme at ``scheme_index``, or None if there is none."""
    if funder is None:
        return None
    index = parse_number(scheme_index)
    if index is None or index < 0 or not index.is_integer():
        return None
    index = int(index)
    if index >= len(funder.schemes):
        return None
    return funder.schemes[index]


class ComplianceCheckerService:
    """
    Service for checking grant proposals against funder scheme requirements.

    Checks run in a fixed order and each appends zero or more findings:
    - Budget maximum and minimum
    - Duration maximum and minimum
    - Required sections, word limits and page limits
    - Whole-proposal word count, first-person usage and vague language
    - Eligibility and required attachment reminders
    """

    def __init__(self):
        self.scheme_checks: List[Callable[..., List[ComplianceFinding]]] = [
            self._check_budget_maximum,
            self._check_budget_minimum,
            self._check_duration_maximum,
            self._check_duration_minimum,
            self._check_sections,
            self._check_text,
            self._check_eligibility,
            self._check_attachments,
        ]

    def run_checks(
        self,
        proposal_text: Optional[str],
        sections: Optional[Mapping[str, str]],
        scheme: Optional[FunderScheme],
        budget: Any = 0,
        duration: Any = 0,
    ) -> ComplianceReport:
        """
        Run compliance checks against a funder scheme.

        Args:
            proposal_text: Full proposal text (may include markdown section headings)
            sections: Mapping of section name to section text
            scheme: Funder scheme to check against, None if none could be resolved
            budget: Requested budget amount
            duration: Project duration in months

        Returns:
            ComplianceReport with ordered findings and the overall status
        """
        if scheme is None:
            return ComplianceReport(
                overall=FindingStatus.FAIL,
                results=[
                    self._create_finding(
                        "Scheme Selection",
                        FindingStatus.FAIL,
                        "No valid scheme selected for compliance checking.",
                        "Select a specific grant scheme from the funder dropdown.",
                    )
                ],
            )

        context = {
            "proposal_text": proposal_text,
            "sections": sections or {},
            "budget": parse_number(budget) or 0.0,
            "duration": parse_number(duration) or 0.0,
        }

        results: List[ComplianceFinding] = []
        for check in self.scheme_checks:
            results.extend(check(scheme, context))

        overall = overall_status(results)
        logger.debug(
            "Compliance checks complete",
            scheme=scheme.name,
            overall=overall.value,
            findings=len(results),
        )
        return ComplianceReport(overall=overall, results=results)

    # -------------------------------------------------------------------------
    # Budget and duration
    # -------------------------------------------------------------------------

    def _check_budget_maximum(
        self,
        scheme: FunderScheme,
        context: Dict[str, Any],
    ) -> List[ComplianceFinding]:
        """Check the requested amount against the scheme maximum."""
        if not scheme.max_amount:
            return []

        budget = context["budget"]
        budget_str = format_amount(budget)
        max_str = format_amount(scheme.max_amount)

        if budget > scheme.max_amount:
            return [self._create_finding(
                "Budget Maximum",
                FindingStatus.FAIL,
                f"Budget £{budget_str} exceeds maximum £{max_str}.",
                f"Reduce your budget to under £{max_str} for this scheme.",
            )]
        if budget > scheme.max_amount * BUDGET_WARNING_RATIO:
            return [self._create_finding(
                "Budget Maximum",
                FindingStatus.WARN,
                f"Budget £{budget_str} is within 5% of the £{max_str} maximum.",
                "Consider whether you need budget headroom for adjustments.",
            )]
        return [self._create_finding(
            "Budget Maximum",
            FindingStatus.PASS,
            f"Budget £{budget_str} is within the £{max_str} limit.",
        )]

    def _check_budget_minimum(
        self,
        scheme: FunderScheme,
        context: Dict[str, Any],
    ) -> List[ComplianceFinding]:
        """Check the requested amount against the scheme minimum."""
        if not scheme.min_amount:
            return []

        budget = context["budget"]
        min_str = format_amount(scheme.min_amount)

        if 0 < budget < scheme.min_amount:
            return [self._create_finding(
                "Budget Minimum",
                FindingStatus.FAIL,
                f"Budget £{format_amount(budget)} is below the minimum £{min_str}.",
                f"This scheme requires a minimum budget of £{min_str}.",
            )]
        if budget >= scheme.min_amount:
            return [self._create_finding(
                "Budget Minimum",
                FindingStatus.PASS,
                f"Budget meets the minimum £{min_str} threshold.",
            )]
        return []

    def _check_duration_maximum(
        self,
        scheme: FunderScheme,
        context: Dict[str, Any],
    ) -> List[ComplianceFinding]:
        """Check the project duration against the scheme maximum."""
        if not scheme.max_duration:
            return []

        duration = context["duration"]
        max_str = format_number(scheme.max_duration)

        if duration > scheme.max_duration:
            return [self._create_finding(
                "Duration",
                FindingStatus.FAIL,
                f"Duration {format_number(duration)} months exceeds maximum {max_str} months.",
                f"Reduce project duration to {max_str} months or less.",
            )]
        if duration > 0:
            return [self._create_finding(
                "Duration",
                FindingStatus.PASS,
                f"Duration {format_number(duration)} months is within the {max_str} month limit.",
            )]
        return []

    def _check_duration_minimum(
        self,
        scheme: FunderScheme,
        context: Dict[str, Any],
    ) -> List[ComplianceFinding]:
        """Check the project duration against the scheme minimum."""
        if not scheme.min_duration:
            return []

        duration = context["duration"]
        if 0 < duration < scheme.min_duration:
            min_str = format_number(scheme.min_duration)
            return [self._create_finding(
                "Duration Minimum",
                FindingStatus.FAIL,
                f"Duration {format_number(duration)} months is below the minimum {min_str} months.",
                f"This scheme requires at least {min_str} months duration.",
            )]
        return []

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------

    def _check_sections(
        self,
        scheme: FunderScheme,
        context: Dict[str, Any],
    ) -> List[ComplianceFinding]:
        """Check each declared section in scheme order."""
        results: List[ComplianceFinding] = []
        for required_section in scheme.sections:
            section_text = find_section(
                context["sections"],
                context["proposal_text"],
                required_section.name,
            )
            results.extend(self._check_section(required_section, section_text))
        return results

    def _check_section(
        self,
        section: RequiredSection,
        section_text: Optional[str],
    ) -> List[ComplianceFinding]:
        """Presence, word limit and page limit checks for one section."""
        name = section.name
        results: List[ComplianceFinding] = []

        if section.required:
            if not section_text or len(section_text.strip()) < MIN_SECTION_CHARS:
                return [self._create_finding(
                    f"Section: {name}",
                    FindingStatus.FAIL,
                    f'Required section "{name}" is missing or too short.',
                    f'Add a substantive "{name}" section to your proposal.',
                )]
            results.append(self._create_finding(
                f"Section: {name} (Present)",
                FindingStatus.PASS,
                f'Required section "{name}" is present.',
            ))

        if section.max_words and section_text:
            results.extend(self._check_word_limit(name, section.max_words, section_text))

        if section.max_pages and section_text:
            results.extend(self._check_page_limit(name, section.max_pages, section_text))

        return results

    def _check_word_limit(
        self,
        name: str,
        max_words: int,
        section_text: str,
    ) -> List[ComplianceFinding]:
        """Check a section's word count against its limit."""
        word_count = count_words(section_text)
        check = f"Section: {name} (Word Limit)"

        if word_count > max_words:
            return [self._create_finding(
                check,
                FindingStatus.FAIL,
                f'"{name}" is {word_count} words (limit: {max_words}).',
                f"Reduce by {word_count - max_words} words. Current: {word_count}/{max_words}.",
            )]
        if word_count > max_words * WORD_LIMIT_WARNING_RATIO:
            percent = round(word_count / max_words * 100)
            return [self._create_finding(
                check,
                FindingStatus.WARN,
                f'"{name}" is {word_count}/{max_words} words ({percent}%).',
                "Close to the word limit. Leave some margin for final edits.",
            )]
        if word_count > 0:
            return [self._create_finding(
                check,
                FindingStatus.PASS,
                f'"{name}" is {word_count}/{max_words} words.',
            )]
        return []

    def _check_page_limit(
        self,
        name: str,
        max_pages: int,
        section_text: str,
    ) -> List[ComplianceFinding]:
        """Check a section's estimated page count against its limit."""
        pages = estimate_pages(section_text)
        check = f"Section: {name} (Page Limit)"

        if pages > max_pages:
            return [self._create_finding(
                check,
                FindingStatus.FAIL,
                f'"{name}" is approximately {pages} pages (limit: {max_pages}).',
                f"Estimated at ~300 words/page. Reduce content to fit within {max_pages} page(s).",
            )]
        return [self._create_finding(
            check,
            FindingStatus.PASS,
            f'"{name}" fits within {max_pages} page(s).',
        )]

    # -------------------------------------------------------------------------
    # Whole-proposal text
    # -------------------------------------------------------------------------

    def _check_text(
        self,
        scheme: FunderScheme,
        context: Dict[str, Any],
    ) -> List[ComplianceFinding]:
        """Word count, first-person and vague language checks on the full text."""
        full_text = context["proposal_text"] or "\n".join(context["sections"].values())
        if not full_text:
            return []

        results = [self._create_finding(
            "Total Word Count",
            FindingStatus.PASS,
            f"Total proposal text: {count_words(full_text):,} words.",
        )]

        first_person_count = count_whole_word(full_text, "I")
        if first_person_count > FIRST_PERSON_LIMIT:
            results.append(self._create_finding(
                "First Person Usage",
                FindingStatus.WARN,
                f'Found {first_person_count} instances of "I". Most funders prefer "we" or passive voice.',
                'Consider using "we" for team applications or passive constructions.',
            ))

        vague_count = count_terms(full_text, VAGUE_TERMS)
        if vague_count > VAGUE_TERM_LIMIT:
            results.append(self._create_finding(
                "Vague Language",
                FindingStatus.WARN,
                f"Found {vague_count} instances of vague qualifiers (very, quite, somewhat, etc.).",
                "Replace vague qualifiers with specific, evidence-based language.",
            ))

        return results

    # -------------------------------------------------------------------------
    # Reminders
    # -------------------------------------------------------------------------

    def _check_eligibility(
        self,
        scheme: FunderScheme,
        context: Dict[str, Any],
    ) -> List[ComplianceFinding]:
        """Eligibility cannot be verified automatically, so always remind."""
        if not scheme.eligibility:
            return []
        return [self._create_finding(
            "Eligibility",
            FindingStatus.WARN,
            f"Eligibility requirement: {scheme.eligibility}",
            "Ensure you meet this eligibility criterion before submitting.",
        )]

    def _check_attachments(
        self,
        scheme: FunderScheme,
        context: Dict[str, Any],
    ) -> List[ComplianceFinding]:
        """Remind about sections that are submitted as separate attachments."""
        keywords = [keyword.lower() for keyword in ATTACHMENT_KEYWORDS]
        attachments = [
            section.name
            for section in scheme.sections
            if any(keyword in section.name.lower() for keyword in keywords)
        ]
        if not attachments:
            return []
        return [self._create_finding(
            "Required Attachments",
            FindingStatus.WARN,
            f"Don't forget: {', '.join(attachments)}",
            "Ensure all required attachments are prepared before submission.",
        )]

    def _create_finding(
        self,
        check: str,
        status: FindingStatus,
        message: str,
        advice: Optional[str] = None,
    ) -> ComplianceFinding:
        """Create a standardized finding."""
        return ComplianceFinding(check=check, status=status, message=message, advice=advice)


# Singleton instance
compliance_checker = ComplianceCheckerService()


def run_compliance_checks(
    proposal_text: Optional[str],
    sections: Optional[Mapping[str, str]],
    scheme: Optional[FunderScheme],
    budget: Any = 0,
    duration: Any = 0,
) -> ComplianceReport:
    """Run compliance checks with the shared checker."""
    return compliance_checker.run_checks(proposal_text, sections, scheme, budget, duration)
