"""
AI Writing Assistant Service
Drafts proposal text with Anthropic Claude and streams it back in chunks.

Each generation task builds a system prompt and a user prompt from form data
and the selected funder, then streams the model's reply.
"""
import json
from typing import Any, AsyncGenerator, Dict, List, Optional, Tuple

import anthropic
import structlog

from bidwriter.core.config import settings
from bidwriter.core.exceptions import AIServiceUnavailableError
from bidwriter.schemas.funders import Funder
from bidwriter.schemas.literature import Paper
from bidwriter.schemas.writing import ImpactForm, PolishMode, ProposalForm

logger = structlog.get_logger(__name__)

Prompt = Tuple[str, str]

PROPOSAL_SECTIONS = [
    "Case for Support",
    "Background and Literature Context",
    "Research Questions and Objectives",
    "Methodology and Research Design",
    "Work Plan and Timeline",
    "Expected Outcomes and Deliverables",
    "Ethical Considerations",
    "Data Management Plan",
    "Pathways to Impact",
    "References",
]

IMPACT_SECTIONS = [
    "Summary of Impact",
    "Beneficiaries and Stakeholders",
    "Pathways to Impact",
    "Impact Timeline and Milestones",
    "Evidence of Demand",
    "Impact Measurement Plan",
]

ABSTRACT_PREVIEW_CHARS = 200


# =============================================================================
# Prompt Builders
# =============================================================================


def build_proposal_prompt(form: ProposalForm, funder: Optional[Funder] = None) -> Prompt:
    """Prompts for drafting a complete structured proposal."""
    funder_context = ""
    if funder:
        funder_context = (
            f"\nFunder: {funder.full_name} ({funder.name})"
            f"\nScheme: {form.scheme or 'General'}"
            f"\nFunder priorities: {', '.join(funder.priorities)}"
            f"\nReview criteria: {', '.join(funder.review_criteria)}"
        )

    system_prompt = (
        "You are an expert academic grant proposal writer with decades of experience "
        "securing funding from UK and international research councils. You write "
        "compelling, evidence-based proposals that score highly on novelty, methodology, "
        "impact, and feasibility.\n\n"
        "Write in a formal academic style appropriate for peer review. Be specific, avoid "
        "vague claims, and demonstrate deep understanding of the research area. Use "
        f"numbered sections with clear headings.{funder_context}"
    )

    co_investigators = "\n".join(
        f"  - {ci.name} ({ci.institution})" for ci in form.co_investigators
    )
    objectives = "\n".join(
        f"  {index}. {objective}" for index, objective in enumerate(form.objectives, start=1)
    )
    headings = "\n".join(
        f"## {index}. {section}" for index, section in enumerate(PROPOSAL_SECTIONS, start=1)
    )

    lines = [
        "Write a complete, structured grant proposal with the following details:",
        "",
        f"PROJECT TITLE: {form.title or 'Untitled Project'}",
        f"RESEARCH AREA: {form.research_area or 'Not specified'}",
        f"REQUESTED AMOUNT: £{form.amount or 'TBC'}",
        f"DURATION: {form.duration or 'TBC'} months",
        f"PRINCIPAL INVESTIGATOR: {form.pi_name or 'TBC'} ({form.pi_institution or 'TBC'})",
    ]
    if co_investigators:
        lines.append(f"CO-INVESTIGATORS:\n{co_investigators}")
    lines += [
        "",
        f"RESEARCH QUESTION/HYPOTHESIS:\n{form.research_question or 'Not provided'}",
        "",
        f"KEY OBJECTIVES:\n{objectives or 'Not provided'}",
        "",
        f"METHODOLOGY OVERVIEW:\n{form.methodology or 'Not provided'}",
        "",
        f"EXPECTED OUTCOMES:\n{form.outcomes or 'Not provided'}",
    ]
    if form.existing_notes:
        lines += ["", f"EXISTING NOTES TO INCORPORATE:\n{form.existing_notes}"]
    lines += [
        "",
        "Please generate the following sections with clear markdown headings (## Section Name):",
        "",
        headings,
        "",
        "Make each section substantive and appropriate for the funding amount and duration. "
        "Include realistic timelines, specific methodological details, and concrete deliverables.",
    ]
    return system_prompt, "\n".join(lines)


def build_impact_prompt(form: ImpactForm, funder: Optional[Funder] = None) -> Prompt:
    """Prompts for drafting an impact statement."""
    funder_context = ""
    if funder:
        funder_context = (
            f"\nFunder: {funder.full_name}. Tailor the impact statement to their requirements "
            f"and priorities: {', '.join(funder.priorities)}"
        )

    system_prompt = (
        "You are an expert at writing impact statements for academic research funding "
        "applications. You understand pathways to impact, beneficiary mapping, and how to "
        f"articulate the broader significance of research beyond academia.{funder_context}"
    )

    headings = "\n".join(f"## {section}" for section in IMPACT_SECTIONS)
    user_prompt = (
        "Generate a comprehensive impact statement for this research:\n\n"
        f"RESEARCH SUMMARY:\n{form.research_summary or 'Not provided'}\n\n"
        f"TARGET BENEFICIARIES: {', '.join(form.beneficiaries) or 'Not specified'}\n"
        f"TYPES OF IMPACT: {', '.join(form.impact_types) or 'Not specified'}\n"
        f"TIMEFRAMES: {', '.join(form.timeframes) or 'Not specified'}\n\n"
        f"Generate the following sections:\n\n{headings}\n\n"
        "Be specific about activities, engagement strategies, and measurable outcomes. "
        "Avoid generic statements."
    )
    return system_prompt, user_prompt


def polish_instructions(mode: str, funder: Optional[Funder] = None) -> str:
    """Editing instructions for a polish mode; unknown modes use the academic style."""
    if mode == PolishMode.CLARITY.value:
        return (
            "Rewrite this text for maximum clarity. Simplify complex sentences, remove "
            "ambiguity, improve logical flow, and ensure each paragraph has a clear purpose. "
            "Keep the academic tone."
        )
    if mode == PolishMode.CONCISE.value:
        return (
            "Reduce this text's word count by approximately 30% while preserving all key "
            "content and meaning. Remove redundancy, tighten sentences, and eliminate filler phrases."
        )
    if mode == PolishMode.FUNDER_ALIGNED.value:
        funder_detail = ""
        if funder:
            funder_detail = (
                f" Funder: {funder.full_name}. Priorities: {', '.join(funder.priorities)}. "
                f"Review criteria: {', '.join(funder.review_criteria)}."
            )
        return (
            "Rewrite this text to better align with the funder's priorities and language."
            f"{funder_detail} Use terminology and framing that resonates with this funder."
        )
    if mode == PolishMode.REWRITE.value:
        return (
            "Comprehensively rewrite this text to improve its overall quality for a grant "
            "proposal. Enhance argument structure, strengthen evidence claims, improve "
            "transitions, and ensure compelling narrative flow."
        )
    return (
        "Rewrite this text in a more formal, academic tone suitable for a peer-reviewed grant "
        "proposal. Enhance the scholarly register, use appropriate disciplinary terminology, "
        "and ensure precision of expression."
    )


def build_polish_prompt(text: str, mode: str, funder: Optional[Funder] = None) -> Prompt:
    """Prompts for polishing draft text."""
    system_prompt = (
        "You are an expert academic editor specialising in grant proposals. You improve text "
        "while maintaining the author's voice and intent.\n\n"
        "IMPORTANT: Output your response in two clearly marked sections:\n"
        "1. First, the polished text under ## Polished Text\n"
        "2. Then, a summary of changes under ## Changes Made (as a bullet list)"
    )
    user_prompt = f"{polish_instructions(mode, funder)}\n\nORIGINAL TEXT:\n{text}"
    return system_prompt, user_prompt


def build_budget_justification_prompt(
    budget: Dict[str, Any],
    project_context: Optional[str] = None,
) -> Prompt:
    """Prompts for a Justification of Resources section."""
    system_prompt = (
        "You are an expert at writing Justification of Resources sections for academic "
        "grant proposals. You explain why each budget item is necessary, reasonable, and "
        "represents value for money."
    )
    user_prompt = (
        "Write a Justification of Resources section for this budget:\n\n"
        f"PROJECT CONTEXT:\n{project_context or 'Academic research project'}\n\n"
        f"BUDGET ITEMS:\n{json.dumps(budget, indent=2, default=str)}\n\n"
        "Write a clear, compelling justification covering each major cost category. Explain "
        "why each item is essential, how the costs were calculated, and why they represent "
        "value for money. Use numbered paragraphs corresponding to budget categories."
    )
    return system_prompt, user_prompt


def format_paper(index: int, paper: Paper) -> str:
    """One numbered entry of the paper list given to the model."""
    authors = ", ".join(author.name for author in paper.authors) or "Unknown"
    entry = f"[{index}] {authors} ({paper.year or 'n.d.'}). {paper.title}."
    if paper.abstract:
        entry += f" Abstract: {paper.abstract[:ABSTRACT_PREVIEW_CHARS]}..."
    return entry


def build_literature_review_prompt(papers: List[Paper], topic: str) -> Prompt:
    """Prompts for a literature review narrative over selected papers."""
    system_prompt = (
        "You are an expert academic writer producing literature reviews for grant proposals. "
        "You synthesise research findings into a coherent narrative that identifies gaps, "
        "trends, and the rationale for new research. Use Harvard-style in-text citations."
    )
    paper_list = "\n\n".join(
        format_paper(index, paper) for index, paper in enumerate(papers, start=1)
    )
    user_prompt = (
        f'Write a literature review narrative on the topic "{topic}" using these papers:\n\n'
        f"{paper_list}\n\n"
        "Requirements:\n"
        "- Synthesise themes rather than summarise each paper individually\n"
        "- Identify gaps in the current literature\n"
        "- Build a narrative that justifies further research\n"
        "- Use Harvard-style citations: (Author, Year)\n"
        '- End with a "References" section in Harvard format\n'
        "- Aim for approximately 1000-1500 words"
    )
    return system_prompt, user_prompt


def describe_project(form: ProposalForm) -> str:
    """Short project description used by the section-level prompts."""
    objectives = "; ".join(form.objectives) or "Not provided"
    return (
        f"PROJECT TITLE: {form.title or 'Untitled Project'}\n"
        f"RESEARCH AREA: {form.research_area or 'Not specified'}\n"
        f"DURATION: {form.duration or 'TBC'} months\n"
        f"RESEARCH QUESTION/HYPOTHESIS: {form.research_question or 'Not provided'}\n"
        f"KEY OBJECTIVES: {objectives}\n"
        f"METHODOLOGY OVERVIEW: {form.methodology or 'Not provided'}"
    )


def build_methodology_prompt(form: ProposalForm, funder: Optional[Funder] = None) -> Prompt:
    """Prompts for a detailed methodology section."""
    funder_context = ""
    if funder:
        funder_context = (
            f"\nFunder: {funder.full_name}. Reviewers will assess against: "
            f"{', '.join(funder.review_criteria)}"
        )

    system_prompt = (
        "You are an expert research methodologist who writes the methodology sections of "
        "competitive grant proposals. You justify every design choice, anticipate reviewer "
        f"concerns, and show that the work is feasible within time and budget.{funder_context}"
    )
    user_prompt = (
        "Write a detailed Methodology and Research Design section for this project:\n\n"
        f"{describe_project(form)}\n\n"
        "Cover research design, data collection, sampling, analysis methods, work packages "
        "with milestones, risks with mitigations, and how each objective will be addressed. "
        "Use ## subheadings."
    )
    return system_prompt, user_prompt


def build_ethics_prompt(form: ProposalForm) -> Prompt:
    """Prompts for an ethical considerations section."""
    system_prompt = (
        "You are a research ethics advisor who drafts ethics statements for grant proposals. "
        "You identify ethical issues proportionately and describe concrete safeguards."
    )
    user_prompt = (
        "Write an Ethical Considerations section for this project:\n\n"
        f"{describe_project(form)}\n\n"
        "Address informed consent, data protection and GDPR, participant wellbeing, "
        "vulnerable groups, conflicts of interest, and the ethics approvals required. "
        "If the project raises few ethical issues, say so briefly and explain why."
    )
    return system_prompt, user_prompt


def build_abstract_prompt(proposal: str) -> Prompt:
    """Prompts for a technical abstract."""
    system_prompt = (
        "You are an expert academic writer. You condense grant proposals into precise, "
        "compelling abstracts for expert reviewers."
    )
    user_prompt = (
        "Write a technical abstract of no more than 250 words for this proposal. State the "
        "problem, aims, approach, and expected outcomes and significance.\n\n"
        f"PROPOSAL:\n{proposal}"
    )
    return system_prompt, user_prompt


def build_plain_summary_prompt(proposal: str) -> Prompt:
    """Prompts for a plain-English lay summary."""
    system_prompt = (
        "You write lay summaries of research for a general audience. You avoid jargon, "
        "explain any necessary technical terms, and keep sentences short."
    )
    user_prompt = (
        "Write a plain English summary of no more than 300 words for this proposal, suitable "
        "for a member of the public. Explain what the research is, why it matters, and who "
        "will benefit.\n\n"
        f"PROPOSAL:\n{proposal}"
    )
    return system_prompt, user_prompt


def build_reviewer_simulation_prompt(proposal: str, funder: Optional[Funder] = None) -> Prompt:
    """Prompts for a simulated peer review."""
    criteria = "Quality, Importance, Impact, Feasibility, Value for money"
    funder_context = ""
    if funder:
        funder_context = f" for {funder.full_name}"
        if funder.review_criteria:
            criteria = ", ".join(funder.review_criteria)

    system_prompt = (
        f"You are an experienced, critical but fair peer reviewer on a grant panel{funder_context}. "
        "You identify weaknesses a real panel would raise and give actionable feedback."
    )
    user_prompt = (
        "Review this grant proposal as a panel member would.\n\n"
        f"ASSESSMENT CRITERIA: {criteria}\n\n"
        f"PROPOSAL:\n{proposal}\n\n"
        "For each criterion give a score out of 6 with a short justification. Then list:\n"
        "## Strengths\n"
        "## Weaknesses\n"
        "## Questions for the Applicants\n"
        "## Overall Recommendation\n"
        "## Suggested Improvements"
    )
    return system_prompt, user_prompt


def build_research_gaps_prompt(text: str) -> Prompt:
    """Prompts for identifying research gaps in a body of text."""
    system_prompt = (
        "You are a senior researcher who identifies gaps and open questions in a field and "
        "turns them into fundable research opportunities."
    )
    user_prompt = (
        "Analyse the following text and identify research gaps.\n\n"
        f"TEXT:\n{text}\n\n"
        "For each gap give a heading, why it matters, what evidence shows it is a gap, and a "
        "possible research question that would address it. Rank gaps by significance."
    )
    return system_prompt, user_prompt


def build_reviewer_response_prompt(
    reviewer_comments: str,
    proposal_context: Optional[str] = None,
) -> Prompt:
    """Prompts for a response to reviewer comments."""
    system_prompt = (
        "You help researchers respond to peer review of grant proposals. Responses are "
        "courteous, address every point directly, and concede or rebut with evidence."
    )
    user_prompt = (
        "Draft a point-by-point response to these reviewer comments.\n\n"
        f"REVIEWER COMMENTS:\n{reviewer_comments}\n\n"
        f"PROPOSAL CONTEXT:\n{proposal_context or 'Not provided'}\n\n"
        "Quote or summarise each comment, then give the response and any change made to "
        "the proposal. Keep a professional, constructive tone."
    )
    return system_prompt, user_prompt


# =============================================================================
# Writing Assistant Service
# =============================================================================


class WritingAssistantService:
    """Service for streaming AI-drafted proposal text."""

    def __init__(self, client: Optional[anthropic.AsyncAnthropic] = None):
        if client is not None:
            self.client = client
        elif not settings.anthropic_api_key:
            logger.warning("ANTHROPIC_API_KEY not configured - AI writing will not work")
            self.client = None
        else:
            self.client = anthropic.AsyncAnthropic(api_key=settings.anthropic_api_key)

    @property
    def is_available(self) -> bool:
        """Whether an API client is configured."""
        return self.client is not None

    def ensure_available(self) -> None:
        """Raise before any streaming starts if generation cannot run."""
        if not self.is_available:
            raise AIServiceUnavailableError()

    async def stream_completion(self, system_prompt: str, user_prompt: str) -> AsyncGenerator[str, None]:
        """Stream text chunks of a model reply."""
        self.ensure_available()
        logger.info("Starting AI generation", model=settings.llm_model)

        async with self.client.messages.stream(
            model=settings.llm_model,
            max_tokens=settings.llm_max_tokens,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        ) as stream:
            async for text in stream.text_stream:
                yield text

    def generate_proposal(
        self,
        form: ProposalForm,
        funder: Optional[Funder] = None,
    ) -> AsyncGenerator[str, None]:
        """Stream a complete proposal draft."""
        return self.stream_completion(*build_proposal_prompt(form, funder))

    def generate_impact(
        self,
        form: ImpactForm,
        funder: Optional[Funder] = None,
    ) -> AsyncGenerator[str, None]:
        """Stream an impact statement."""
        return self.stream_completion(*build_impact_prompt(form, funder))

    def polish_text(
        self,
        text: str,
        mode: str,
        funder: Optional[Funder] = None,
    ) -> AsyncGenerator[str, None]:
        """Stream a polished version of draft text."""
        return self.stream_completion(*build_polish_prompt(text, mode, funder))

    def generate_budget_justification(
        self,
        budget: Dict[str, Any],
        project_context: Optional[str] = None,
    ) -> AsyncGenerator[str, None]:
        """Stream a Justification of Resources."""
        return self.stream_completion(*build_budget_justification_prompt(budget, project_context))

    def generate_literature_review(
        self,
        papers: List[Paper],
        topic: str,
    ) -> AsyncGenerator[str, None]:
        """Stream a literature review narrative."""
        return self.stream_completion(*build_literature_review_prompt(papers, topic))

    def generate_methodology(
        self,
        form: ProposalForm,
        funder: Optional[Funder] = None,
    ) -> AsyncGenerator[str, None]:
        """Stream a methodology section."""
        return self.stream_completion(*build_methodology_prompt(form, funder))

    def generate_ethics(self, form: ProposalForm) -> AsyncGenerator[str, None]:
        """Stream an ethical considerations section."""
        return self.stream_completion(*build_ethics_prompt(form))

    def generate_abstract(self, proposal: str) -> AsyncGenerator[str, None]:
        return self.stream_completion(*build_abstract_prompt(proposal))

    def generate_plain_summary(self, proposal: str) -> AsyncGenerator[str, None]:
        return self.stream_completion(*build_plain_summary_prompt(proposal))

    def simulate_reviewer(
        self,
        proposal: str,
        funder: Optional[Funder] = None,
    ) -> AsyncGenerator[str, None]:
        """Stream a simulated panel review of a proposal."""
        return self.stream_completion(*build_reviewer_simulation_prompt(proposal, funder))

    def find_research_gaps(self, text: str) -> AsyncGenerator[str, None]:
        return self.stream_completion(*build_research_gaps_prompt(text))

    def generate_reviewer_response(
        self,
        reviewer_comments: str,
        proposal_context: Optional[str] = None,
    ) -> AsyncGenerator[str, None]:
        """Stream a point-by-point response to reviewer comments."""
        return self.stream_completion(
            *build_reviewer_response_prompt(reviewer_comments, proposal_context)
        )


_writing_assistant: Optional[WritingAssistantService] = None


def get_writing_assistant() -> WritingAssistantService:
    """FastAPI dependency returning the shared writing assistant."""
    global _writing_assistant
    if _writing_assistant is None:
        _writing_assistant = WritingAssistantService()
    return _writing_assistant
