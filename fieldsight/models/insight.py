"""Persisted performance-deviation insight model.

Exactly one row may exist per (field_id, season_id): the unique constraint
is the single-writer gate for concurrent get-or-generate requests.  Rows
are write-once; ``evidence`` holds the serialized ``InsightEvidence``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from fieldsight.models.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin
from fieldsight.models.enums import (
    ConfidenceLevelEnum,
    InsightTypeEnum,
    SeverityEnum,
)


class Insight(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """Deterministic deviation conclusion for one field in one season."""

    __tablename__ = "insights"
    __table_args__ = (
        UniqueConstraint("field_id", "season_id", name="uq_insights_field_season"),
    )

    field_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("fields.id", ondelete="CASCADE"),
        nullable=False,
    )
    season_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("seasons.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[InsightTypeEnum] = mapped_column(
        Enum(
            InsightTypeEnum,
            name="insight_type",
            create_constraint=False,
            native_enum=True,
        ),
        nullable=False,
    )
    severity: Mapped[SeverityEnum] = mapped_column(
        Enum(
            SeverityEnum,
            name="insight_severity",
            create_constraint=False,
            native_enum=True,
        ),
        nullable=False,
    )
    confidence: Mapped[ConfidenceLevelEnum] = mapped_column(
        Enum(
            ConfidenceLevelEnum,
            name="insight_confidence",
            create_constraint=False,
            native_enum=True,
        ),
        nullable=False,
    )
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    evidence: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)
    suggested_action: Mapped[str | None] = mapped_column(Text, nullable=True)
    generated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<Insight id={self.id} field={self.field_id!r} "
            f"season={self.season_id!r} severity={self.severity}>"
        )
