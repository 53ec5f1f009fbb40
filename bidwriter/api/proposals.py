"""
Proposal API Endpoints
CRUD, import/export and version history for proposal documents.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse

from bidwriter.api.deps import AsyncSessionDep
from bidwriter.schemas.proposals import DeleteResponse, ProposalSummary, VersionCreate, VersionSummary
from bidwriter.services.proposal_store import proposal_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/proposals", tags=["Proposals"])


# =============================================================================
# Proposal Endpoints
# =============================================================================


@router.get("", response_model=List[ProposalSummary])
async def list_proposals(db: AsyncSessionDep) -> List[ProposalSummary]:
    """List proposals, most recently updated first."""
    return await proposal_store.list_proposals(db)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_proposal(
    db: AsyncSessionDep,
    data: Dict[str, Any] = Body(...),
) -> Dict[str, Any]:
    """Create a proposal from a document."""
    return await proposal_store.create_proposal(db, data)


@router.post("/import", status_code=status.HTTP_201_CREATED)
async def import_proposal(
    db: AsyncSessionDep,
    data: Dict[str, Any] = Body(...),
) -> Dict[str, Any]:
    """Import a previously exported proposal as a new draft."""
    return await proposal_store.import_proposal(db, data)


@router.get("/{proposal_id}")
async def get_proposal(proposal_id: UUID, db: AsyncSessionDep) -> Dict[str, Any]:
    """Get a proposal document."""
    return await proposal_store.get_proposal(db, proposal_id)


@router.put("/{proposal_id}")
async def update_proposal(
    proposal_id: UUID,
    db: AsyncSessionDep,
    data: Dict[str, Any] = Body(...),
) -> Dict[str, Any]:
    """Merge changes into a proposal document."""
    return await proposal_store.update_proposal(db, proposal_id, data)


@router.delete("/{proposal_id}", response_model=DeleteResponse)
async def delete_proposal(proposal_id: UUID, db: AsyncSessionDep) -> DeleteResponse:
    """Delete a proposal and its versions."""
    await proposal_store.delete_proposal(db, proposal_id)
    return DeleteResponse(success=True)


@router.post("/{proposal_id}/duplicate", status_code=status.HTTP_201_CREATED)
async def duplicate_proposal(proposal_id: UUID, db: AsyncSessionDep) -> Dict[str, Any]:
    """Copy a proposal as a new draft."""
    return await proposal_store.duplicate_proposal(db, proposal_id)


@router.get("/{proposal_id}/export")
async def export_proposal(proposal_id: UUID, db: AsyncSessionDep) -> JSONResponse:
    """Download a proposal as a JSON attachment."""
    document, filename = await proposal_store.export_proposal(db, proposal_id)
    return JSONResponse(
        content=document,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# =============================================================================
# Version Endpoints
# =============================================================================


@router.get("/{proposal_id}/versions", response_model=List[VersionSummary])
async def list_versions(proposal_id: UUID, db: AsyncSessionDep) -> List[VersionSummary]:
    """List saved versions, newest first."""
    return await proposal_store.list_versions(db, proposal_id)


@router.post(
    "/{proposal_id}/versions",
    response_model=VersionSummary,
    status_code=status.HTTP_201_CREATED,
)
async def create_version(
    proposal_id: UUID,
    db: AsyncSessionDep,
    request: Optional[VersionCreate] = None,
) -> VersionSummary:
    """Save a snapshot of the current proposal."""
    label = request.label if request else ""
    return await proposal_store.create_version(db, proposal_id, label)


@router.get("/{proposal_id}/versions/{version_id}")
async def get_version(
    proposal_id: UUID,
    version_id: UUID,
    db: AsyncSessionDep,
) -> Dict[str, Any]:
    """Get a version snapshot."""
    return await proposal_store.get_version(db, proposal_id, version_id)


@router.post("/{proposal_id}/versions/{version_id}/restore")
async def restore_version(
    proposal_id: UUID,
    version_id: UUID,
    db: AsyncSessionDep,
) -> Dict[str, Any]:
    """Restore a version, saving the current document first."""
    document = await proposal_store.restore_version(db, proposal_id, version_id)
    logger.info(f"Restored proposal {proposal_id} to version {version_id}")
    return document
