"""
Proposal Store Service
Persists proposal documents and their version history.

Documents are opaque JSON to the store: it only copies title, funder, scheme,
status and amount into columns for listings and keeps identity and
timestamps under its own control.
"""
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from bidwriter.core.exceptions import NotFoundError
from bidwriter.models import Proposal, ProposalVersion
from bidwriter.schemas.proposals import ProposalSummary, VersionSummary
from bidwriter.utils.numbers import parse_number

logger = structlog.get_logger(__name__)

# Keys owned by the store, never taken from client documents
METADATA_KEYS = frozenset({"id", "created_at", "updated_at"})
VERSION_KEYS = frozenset({"version_id", "timestamp", "label"})

AUTO_SAVE_LABEL = "Auto-save before restore"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _isoformat(value: datetime) -> str:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def _clean_document(data: Optional[Dict[str, Any]], strip_versions: bool = False) -> Dict[str, Any]:
    """Copy a client document without store-owned keys."""
    excluded = METADATA_KEYS | VERSION_KEYS if strip_versions else METADATA_KEYS
    return {key: value for key, value in (data or {}).items() if key not in excluded}


def export_filename(title: Optional[str]) -> str:
    """Download filename derived from the proposal title."""
    return re.sub(r"[^a-z0-9]", "_", title or "proposal", flags=re.IGNORECASE) + ".json"


class ProposalStore:
    """Service for proposal CRUD and version history."""

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _apply_document(self, proposal: Proposal, data: Dict[str, Any]) -> None:
        """Store a document and refresh the listing columns from it."""
        scheme = data.get("scheme")
        proposal.data = data
        proposal.title = data.get("title") or "Untitled"
        proposal.funder = str(data["funder"]) if data.get("funder") else None
        proposal.scheme = str(scheme) if scheme not in (None, "") else None
        proposal.status = data.get("status") or "draft"
        proposal.amount = parse_number(data.get("amount")) or 0.0

    def to_document(self, proposal: Proposal) -> Dict[str, Any]:
        """Full proposal document including store metadata."""
        return {
            **proposal.data,
            "id": str(proposal.id),
            "status": proposal.status,
            "created_at": _isoformat(proposal.created_at),
            "updated_at": _isoformat(proposal.updated_at),
        }

    async def _get_or_404(self, db: AsyncSession, proposal_id: uuid.UUID) -> Proposal:
        proposal = await db.get(Proposal, proposal_id)
        if proposal is None:
            raise NotFoundError("Proposal", str(proposal_id))
        return proposal

    async def _get_version_or_404(
        self,
        db: AsyncSession,
        proposal_id: uuid.UUID,
        version_id: uuid.UUID,
    ) -> ProposalVersion:
        version = await db.get(ProposalVersion, version_id)
        if version is None or version.proposal_id != proposal_id:
            raise NotFoundError("Version", str(version_id))
        return version

    async def _insert(self, db: AsyncSession, data: Dict[str, Any]) -> Proposal:
        now = _utcnow()
        proposal = Proposal(id=uuid.uuid4(), created_at=now, updated_at=now)
        self._apply_document(proposal, data)
        db.add(proposal)
        await db.flush()
        return proposal

    def _snapshot(self, proposal: Proposal, label: str) -> ProposalVersion:
        return ProposalVersion(
            id=uuid.uuid4(),
            proposal_id=proposal.id,
            label=label or "",
            snapshot=self.to_document(proposal),
            created_at=_utcnow(),
        )

    # -------------------------------------------------------------------------
    # Proposals
    # -------------------------------------------------------------------------

    async def list_proposals(self, db: AsyncSession) -> List[ProposalSummary]:
        """List proposals, most recently updated first."""
        result = await db.execute(select(Proposal).order_by(Proposal.updated_at.desc()))
        return [
            ProposalSummary(
                id=proposal.id,
                title=proposal.title,
                funder=proposal.funder,
                scheme=proposal.scheme,
                status=proposal.status,
                amount=proposal.amount,
                created_at=proposal.created_at,
                updated_at=proposal.updated_at,
            )
            for proposal in result.scalars().all()
        ]

    async def create_proposal(self, db: AsyncSession, data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a proposal from a client document."""
        proposal = await self._insert(db, _clean_document(data))
        logger.info("Proposal created", proposal_id=str(proposal.id))
        return self.to_document(proposal)

    async def get_proposal(self, db: AsyncSession, proposal_id: uuid.UUID) -> Dict[str, Any]:
        """Get a proposal document."""
        return self.to_document(await self._get_or_404(db, proposal_id))

    async def update_proposal(
        self,
        db: AsyncSession,
        proposal_id: uuid.UUID,
        data: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Shallow-merge changes into a proposal document."""
        proposal = await self._get_or_404(db, proposal_id)
        self._apply_document(proposal, {**proposal.data, **_clean_document(data)})
        proposal.updated_at = _utcnow()
        await db.flush()
        return self.to_document(proposal)

    async def delete_proposal(self, db: AsyncSession, proposal_id: uuid.UUID) -> None:
        """Delete a proposal and its version history."""
        proposal = await self._get_or_404(db, proposal_id)
        await db.execute(delete(ProposalVersion).where(ProposalVersion.proposal_id == proposal_id))
        await db.delete(proposal)
        await db.flush()
        logger.info("Proposal deleted", proposal_id=str(proposal_id))

    async def duplicate_proposal(self, db: AsyncSession, proposal_id: uuid.UUID) -> Dict[str, Any]:
        """Copy a proposal as a new draft."""
        source = await self._get_or_404(db, proposal_id)
        data = {
            **source.data,
            "title": f"{source.data.get('title') or 'Untitled'} (Copy)",
            "status": "draft",
        }
        proposal = await self._insert(db, data)
        return self.to_document(proposal)

    async def import_proposal(self, db: AsyncSession, data: Dict[str, Any]) -> Dict[str, Any]:
        """Import an exported document as a new draft."""
        document = _clean_document(data, strip_versions=True)
        document["status"] = "draft"
        proposal = await self._insert(db, document)
        logger.info("Proposal imported", proposal_id=str(proposal.id))
        return self.to_document(proposal)

    async def export_proposal(
        self,
        db: AsyncSession,
        proposal_id: uuid.UUID,
    ) -> Tuple[Dict[str, Any], str]:
        """Proposal document and a download filename for it."""
        proposal = await self._get_or_404(db, proposal_id)
        return self.to_document(proposal), export_filename(proposal.data.get("title"))

    # -------------------------------------------------------------------------
    # Versions
    # -------------------------------------------------------------------------

    async def list_versions(self, db: AsyncSession, proposal_id: uuid.UUID) -> List[VersionSummary]:
        """List a proposal's versions, newest first."""
        result = await db.execute(
            select(ProposalVersion)
            .where(ProposalVersion.proposal_id == proposal_id)
            .order_by(ProposalVersion.created_at.desc())
        )
        return [
            VersionSummary(version_id=version.id, timestamp=version.created_at, label=version.label)
            for version in result.scalars().all()
        ]

    async def create_version(
        self,
        db: AsyncSession,
        proposal_id: uuid.UUID,
        label: str = "",
    ) -> VersionSummary:
        """Snapshot the current proposal document."""
        proposal = await self._get_or_404(db, proposal_id)
        version = self._snapshot(proposal, label)
        db.add(version)
        await db.flush()
        return VersionSummary(version_id=version.id, timestamp=version.created_at, label=version.label)

    async def get_version(
        self,
        db: AsyncSession,
        proposal_id: uuid.UUID,
        version_id: uuid.UUID,
    ) -> Dict[str, Any]:
        """Get a version snapshot with its version metadata."""
        version = await self._get_version_or_404(db, proposal_id, version_id)
        return {
            **version.snapshot,
            "version_id": str(version.id),
            "timestamp": _isoformat(version.created_at),
            "label": version.label,
        }

    async def restore_version(
        self,
        db: AsyncSession,
        proposal_id: uuid.UUID,
        version_id: uuid.UUID,
    ) -> Dict[str, Any]:
        """
        Replace the proposal document with a version snapshot.

        The current document is saved as a version first so the restore can
        itself be undone.
        """
        proposal = await self._get_or_404(db, proposal_id)
        version = await self._get_version_or_404(db, proposal_id, version_id)

        db.add(self._snapshot(proposal, AUTO_SAVE_LABEL))

        self._apply_document(proposal, _clean_document(version.snapshot, strip_versions=True))
        proposal.updated_at = _utcnow()
        await db.flush()

        logger.info(
            "Proposal version restored",
            proposal_id=str(proposal_id),
            version_id=str(version_id),
        )
        return self.to_document(proposal)


# Singleton instance
proposal_store = ProposalStore()
