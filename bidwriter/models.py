"""
BidWriter Database Models
SQLAlchemy ORM models for stored proposals and their version history.

Proposals are stored as JSON documents; the indexed columns mirror the
fields needed to list them.
"""
import uuid
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import JSON, DateTime, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class Proposal(Base):
    """
    A grant proposal document.

    ``data`` holds the complete document as submitted by the editor; title,
    funder, scheme, status and amount are copied out of it for listings.
    """

    __tablename__ = "proposals"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        doc="Unique identifier for the proposal",
    )
    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="Untitled",
        doc="Proposal title",
    )
    funder: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        doc="Funder identifier (e.g., 'epsrc')",
    )
    scheme: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        doc="Scheme name or index within the funder",
    )
    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="draft",
        doc="Workflow status (draft, submitted, ...)",
    )
    amount: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        doc="Requested amount",
    )
    data: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Full proposal document",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        doc="Creation timestamp",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        doc="Last modification timestamp",
    )

    versions: Mapped[List["ProposalVersion"]] = relationship(
        back_populates="proposal",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ProposalVersion(Base):
    """A point-in-time snapshot of a proposal document."""

    __tablename__ = "proposal_versions"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        doc="Unique identifier for the version",
    )
    proposal_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("proposals.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    label: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        doc="User-supplied label",
    )
    snapshot: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        doc="Proposal document at the time of the snapshot",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    proposal: Mapped["Proposal"] = relationship(back_populates="versions")
