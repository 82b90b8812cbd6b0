"""
SQLAlchemy models for importer bookkeeping.

Each execution of an importer is tracked by an ``ImportRun`` row so operators
can see what ran, for which account, and how many rows it produced.
"""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import Enum, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..base import BaseModel, db


class ImportRunStatus(str, enum.Enum):
    """Lifecycle states for an import run."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    PARTIALLY_FAILED = "partially_failed"
    FAILED = "failed"


class ImportRun(BaseModel):
    """Metadata describing a single importer execution."""

    __tablename__ = "import_runs"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int | None] = mapped_column(
        ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True, index=True
    )
    source: Mapped[str] = mapped_column(db.String(100), nullable=False, index=True)
    adapter: Mapped[str | None] = mapped_column(db.String(100), nullable=True)
    source_label: Mapped[str | None] = mapped_column(
        db.String(500),
        nullable=True,
        comment="Human readable origin of the payload (file name, upload id).",
    )
    status: Mapped[ImportRunStatus] = mapped_column(
        Enum(ImportRunStatus, name="import_run_status_enum"),
        nullable=False,
        default=ImportRunStatus.PENDING,
        index=True,
    )
    started_at: Mapped[datetime | None] = mapped_column(db.DateTime(timezone=True))
    finished_at: Mapped[datetime | None] = mapped_column(db.DateTime(timezone=True))
    counts_json: Mapped[dict | None] = mapped_column(db.JSON, nullable=True)
    error_summary: Mapped[str | None] = mapped_column(db.Text, nullable=True)
    mapping_checksum: Mapped[str | None] = mapped_column(db.String(64), nullable=True)

    account = relationship("Account")

    __table_args__ = (Index("idx_import_runs_source_status", "source", "status"),)

    def __repr__(self) -> str:
        return f"<ImportRun {self.id} {self.source} {self.status.value}>"
