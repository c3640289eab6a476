"""Field and Season ORM models, the scoping entities for signals and insights.

Both tables are owned by the CRUD service; the engine only reads them.
Identifiers are caller-assigned strings (``"field-001"``, ``"2024-maize"``).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from geoalchemy2 import Geography
from sqlalchemy import CheckConstraint, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from fieldsight.models.base import Base, CreatedAtMixin

# ═══════════════════════════════════════════════════════════════════════════
# Field
# ═══════════════════════════════════════════════════════════════════════════


class Field(Base, CreatedAtMixin):
    """A physical field whose vegetation performance is tracked."""

    __tablename__ = "fields"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    geometry: Mapped[Any] = mapped_column(
        Geography(geometry_type="POLYGON", srid=4326),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Field id={self.id!r} name={self.name!r}>"


# ═══════════════════════════════════════════════════════════════════════════
# Season
# ═══════════════════════════════════════════════════════════════════════════


class Season(Base, CreatedAtMixin):
    """A named, bounded time window (e.g. "2024/25 Maize").

    ``start_date`` / ``end_date`` are immutable and form the default
    inference window for every field in the season.
    """

    __tablename__ = "seasons"
    __table_args__ = (
        CheckConstraint("start_date < end_date", name="ck_seasons_bounds"),
        Index("ix_seasons_start_date", "start_date"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    end_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<Season id={self.id!r} start={self.start_date} "
            f"end={self.end_date}>"
        )
