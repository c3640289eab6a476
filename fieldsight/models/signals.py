"""Append-only vegetation and weather signal ORM models.

Both tables use BIGSERIAL primary keys (via ``TimeSeriesMixin``) and carry
composite indexes on (field_id, season_id, timestamp) for season scoped
reads and on (field_id, timestamp) for the legacy window mode.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Enum, Float, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from fieldsight.models.base import Base, TimeSeriesMixin
from fieldsight.models.enums import DataQualityEnum

_DATA_QUALITY = Enum(
    DataQualityEnum,
    name="data_quality",
    create_constraint=False,
    native_enum=True,
)

# ═══════════════════════════════════════════════════════════════════════════
# Vegetation (satellite NDVI)
# ═══════════════════════════════════════════════════════════════════════════


class VegetationSignal(Base, TimeSeriesMixin):
    """Per-pass NDVI statistics over a field."""

    __tablename__ = "vegetation_signals"
    __table_args__ = (
        Index(
            "ix_vegetation_signals_field_season_ts",
            "field_id",
            "season_id",
            "timestamp",
        ),
        Index("ix_vegetation_signals_field_ts", "field_id", "timestamp"),
        CheckConstraint(
            "ndvi_mean BETWEEN -1 AND 1 AND ndvi_min BETWEEN -1 AND 1 "
            "AND ndvi_max BETWEEN -1 AND 1",
            name="ck_vegetation_signals_ndvi_range",
        ),
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
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    ndvi_mean: Mapped[float] = mapped_column(Float, nullable=False)
    ndvi_min: Mapped[float] = mapped_column(Float, nullable=False)
    ndvi_max: Mapped[float] = mapped_column(Float, nullable=False)
    ndvi_std_dev: Mapped[float] = mapped_column(Float, nullable=False)
    data_quality: Mapped[DataQualityEnum] = mapped_column(
        _DATA_QUALITY, nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<VegetationSignal id={self.id} field={self.field_id} "
            f"ts={self.timestamp} ndvi={self.ndvi_mean}>"
        )


# ═══════════════════════════════════════════════════════════════════════════
# Weather
# ═══════════════════════════════════════════════════════════════════════════


class WeatherSignal(Base, TimeSeriesMixin):
    """Daily rainfall / temperature observation for a field."""

    __tablename__ = "weather_signals"
    __table_args__ = (
        Index(
            "ix_weather_signals_field_season_ts",
            "field_id",
            "season_id",
            "timestamp",
        ),
        Index("ix_weather_signals_field_ts", "field_id", "timestamp"),
        CheckConstraint("rainfall_mm >= 0", name="ck_weather_signals_rainfall"),
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
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    rainfall_mm: Mapped[float] = mapped_column(Float, nullable=False)
    temperature_c: Mapped[float] = mapped_column(Float, nullable=False)
    data_quality: Mapped[DataQualityEnum] = mapped_column(
        _DATA_QUALITY, nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<WeatherSignal id={self.id} field={self.field_id} "
            f"ts={self.timestamp}>"
        )
