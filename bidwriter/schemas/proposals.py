"""
Proposal Schemas
Pydantic models for proposal listing and version history responses.

Proposal documents themselves are free-form JSON and are passed through as
dictionaries.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class ProposalSummary(BaseModel):
    """Proposal listing entry."""
    id: UUID
    title: str
    funder: Optional[str] = None
    scheme: Optional[str] = None
    status: str
    amount: float
    created_at: datetime
    updated_at: datetime


class VersionCreate(BaseModel):
    """Request to snapshot the current proposal."""
    label: str = Field("", max_length=255, description="Optional version label")


class VersionSummary(BaseModel):
    """Version listing entry."""
    version_id: UUID
    timestamp: datetime
    label: str


class DeleteResponse(BaseModel):
    """Result of a delete operation."""
    success: bool
