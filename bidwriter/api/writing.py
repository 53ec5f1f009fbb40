"""
AI Writing API endpoints with Server-Sent Events (SSE) streaming.
"""

import json
import logging
from typing import AsyncIterator, Optional

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from bidwriter.api.deps import FunderRegistryDep, WritingAssistantDep
from bidwriter.schemas.funders import Funder
from bidwriter.schemas.writing import (
    BudgetJustificationRequest,
    EthicsRequest,
    GenerateImpactRequest,
    GenerateProposalRequest,
    LiteratureReviewRequest,
    MethodologyRequest,
    PolishRequest,
    ProposalTextRequest,
    ResearchGapsRequest,
    ReviewerResponseRequest,
    ReviewerSimulationRequest,
)
from bidwriter.services.funder_registry import FunderRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/generate", tags=["Writing"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # Disable nginx buffering
}


def sse_event(payload: dict) -> str:
    """Format a payload as a single SSE data event."""
    return f"data: {json.dumps(payload)}\n\n"


async def generate_sse(chunks: AsyncIterator[str]) -> AsyncIterator[str]:
    """
    Relay generated text as SSE events.

    **Event Types:**
    - `chunk`: a piece of generated text in `content`
    - `done`: generation finished
    - `error`: generation failed, with a `message`
    """
    try:
        async for text in chunks:
            yield sse_event({"type": "chunk", "content": text})
        yield sse_event({"type": "done"})
    except Exception as e:
        logger.error(f"AI generation failed: {e}")
        yield sse_event({"type": "error", "message": str(e)})


def stream_response(chunks: AsyncIterator[str]) -> StreamingResponse:
    return StreamingResponse(
        generate_sse(chunks),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


def lookup_funder(registry: FunderRegistry, funder_id: Optional[str]) -> Optional[Funder]:
    """Funder used to tailor prompts; unknown ids fall back to no funder context."""
    if not funder_id:
        return None
    funder = registry.get_funder(funder_id)
    if funder is None:
        logger.warning(f"Unknown funder '{funder_id}' for generation, continuing without it")
    return funder


@router.post("/proposal")
async def generate_proposal(
    request: GenerateProposalRequest,
    assistant: WritingAssistantDep,
    registry: FunderRegistryDep,
) -> StreamingResponse:
    """Stream a complete proposal draft."""
    assistant.ensure_available()
    funder = lookup_funder(registry, request.funder_id)
    return stream_response(assistant.generate_proposal(request.form, funder))


@router.post("/impact")
async def generate_impact(
    request: GenerateImpactRequest,
    assistant: WritingAssistantDep,
    registry: FunderRegistryDep,
) -> StreamingResponse:
    """Stream an impact statement."""
    assistant.ensure_available()
    funder = lookup_funder(registry, request.funder_id)
    return stream_response(assistant.generate_impact(request.form, funder))


@router.post("/polish")
async def polish_text(
    request: PolishRequest,
    assistant: WritingAssistantDep,
    registry: FunderRegistryDep,
) -> StreamingResponse:
    """Stream a polished version of draft text."""
    assistant.ensure_available()
    funder = lookup_funder(registry, request.funder_id)
    return stream_response(assistant.polish_text(request.text, request.mode, funder))


@router.post("/budget-justification")
async def generate_budget_justification(
    request: BudgetJustificationRequest,
    assistant: WritingAssistantDep,
) -> StreamingResponse:
    """Stream a Justification of Resources for a budget."""
    assistant.ensure_available()
    return stream_response(
        assistant.generate_budget_justification(request.budget, request.project_context)
    )


@router.post("/literature")
async def generate_literature_review(
    request: LiteratureReviewRequest,
    assistant: WritingAssistantDep,
) -> StreamingResponse:
    """Stream a literature review narrative from selected papers."""
    assistant.ensure_available()
    return stream_response(assistant.generate_literature_review(request.papers, request.topic))


@router.post("/methodology")
async def generate_methodology(
    request: MethodologyRequest,
    assistant: WritingAssistantDep,
    registry: FunderRegistryDep,
) -> StreamingResponse:
    """Stream a methodology section."""
    assistant.ensure_available()
    funder = lookup_funder(registry, request.funder_id)
    return stream_response(assistant.generate_methodology(request.form, funder))


@router.post("/ethics")
async def generate_ethics(
    request: EthicsRequest,
    assistant: WritingAssistantDep,
) -> StreamingResponse:
    """Stream an ethical considerations section."""
    assistant.ensure_available()
    return stream_response(assistant.generate_ethics(request.form))


@router.post("/abstract")
async def generate_abstract(
    request: ProposalTextRequest,
    assistant: WritingAssistantDep,
) -> StreamingResponse:
    """Stream a technical abstract of a proposal."""
    assistant.ensure_available()
    return stream_response(assistant.generate_abstract(request.proposal))


@router.post("/plain-summary")
async def generate_plain_summary(
    request: ProposalTextRequest,
    assistant: WritingAssistantDep,
) -> StreamingResponse:
    """Stream a plain-English summary of a proposal."""
    assistant.ensure_available()
    return stream_response(assistant.generate_plain_summary(request.proposal))


@router.post("/reviewer-simulation")
async def simulate_reviewer(
    request: ReviewerSimulationRequest,
    assistant: WritingAssistantDep,
    registry: FunderRegistryDep,
) -> StreamingResponse:
    """Stream a simulated panel review scored against the funder's criteria."""
    assistant.ensure_available()
    funder = lookup_funder(registry, request.funder_id)
    return stream_response(assistant.simulate_reviewer(request.proposal, funder))


@router.post("/research-gaps")
async def find_research_gaps(
    request: ResearchGapsRequest,
    assistant: WritingAssistantDep,
) -> StreamingResponse:
    """Stream research gaps identified in the supplied text."""
    assistant.ensure_available()
    return stream_response(assistant.find_research_gaps(request.text))


@router.post("/reviewer-response")
async def generate_reviewer_response(
    request: ReviewerResponseRequest,
    assistant: WritingAssistantDep,
) -> StreamingResponse:
    """Stream a point-by-point response to reviewer comments."""
    assistant.ensure_available()
    return stream_response(
        assistant.generate_reviewer_response(request.reviewer_comments, request.proposal_context)
    )
