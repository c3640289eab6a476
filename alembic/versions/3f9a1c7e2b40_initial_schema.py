"""initial_schema

Revision ID: 3f9a1c7e2b40
Revises:
Create Date: 2026-10-17 00:00:00.000000

Creates the five FieldSight tables (fields, seasons, vegetation_signals,
weather_signals, insights) and their enum types.  Expects a PostgreSQL
database with the uuid-ossp and postgis extensions enabled.
"""

from collections.abc import Sequence

import geoalchemy2
import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3f9a1c7e2b40"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# ── Enum type names (PostgreSQL CREATE TYPE) ────────────────────────────────
ENUM_DATA_QUALITY = postgresql.ENUM(
    "high", "medium", "low", name="data_quality", create_type=False
)
ENUM_INSIGHT_TYPE = postgresql.ENUM(
    "performance_deviation", name="insight_type", create_type=False
)
ENUM_INSIGHT_SEVERITY = postgresql.ENUM(
    "low", "medium", "high", name="insight_severity", create_type=False
)
ENUM_INSIGHT_CONFIDENCE = postgresql.ENUM(
    "low", "medium", "high", name="insight_confidence", create_type=False
)

_ENUMS = (
    ENUM_DATA_QUALITY,
    ENUM_INSIGHT_TYPE,
    ENUM_INSIGHT_SEVERITY,
    ENUM_INSIGHT_CONFIDENCE,
)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def _signal_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("field_id", sa.String(64), nullable=False),
        sa.Column("season_id", sa.String(64), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    # ── 1. Create enum types ────────────────────────────────────────────
    for enum in _ENUMS:
        enum.create(op.get_bind(), checkfirst=True)

    # ── 2. Scoping tables ───────────────────────────────────────────────
    op.create_table(
        "fields",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "geometry",
            geoalchemy2.types.Geography(
                geometry_type="POLYGON",
                srid=4326,
                from_text="ST_GeogFromText",
            ),
            nullable=True,
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "seasons",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        _created_at(),
        sa.CheckConstraint("start_date < end_date", name="ck_seasons_bounds"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_seasons_start_date", "seasons", ["start_date"])

    # ── 3. Append-only signal tables ────────────────────────────────────
    op.create_table(
        "vegetation_signals",
        *_signal_columns(),
        sa.Column("ndvi_mean", sa.Float(), nullable=False),
        sa.Column("ndvi_min", sa.Float(), nullable=False),
        sa.Column("ndvi_max", sa.Float(), nullable=False),
        sa.Column("ndvi_std_dev", sa.Float(), nullable=False),
        sa.Column("data_quality", ENUM_DATA_QUALITY, nullable=False),
        sa.Column(
            "ingested_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "ndvi_mean BETWEEN -1 AND 1 AND ndvi_min BETWEEN -1 AND 1 "
            "AND ndvi_max BETWEEN -1 AND 1",
            name="ck_vegetation_signals_ndvi_range",
        ),
        sa.ForeignKeyConstraint(["field_id"], ["fields.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["season_id"], ["seasons.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_vegetation_signals_field_season_ts",
        "vegetation_signals",
        ["field_id", "season_id", "timestamp"],
    )
    op.create_index(
        "ix_vegetation_signals_field_ts",
        "vegetation_signals",
        ["field_id", "timestamp"],
    )

    op.create_table(
        "weather_signals",
        *_signal_columns(),
        sa.Column("rainfall_mm", sa.Float(), nullable=False),
        sa.Column("temperature_c", sa.Float(), nullable=False),
        sa.Column("data_quality", ENUM_DATA_QUALITY, nullable=False),
        sa.Column(
            "ingested_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint("rainfall_mm >= 0", name="ck_weather_signals_rainfall"),
        sa.ForeignKeyConstraint(["field_id"], ["fields.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["season_id"], ["seasons.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_weather_signals_field_season_ts",
        "weather_signals",
        ["field_id", "season_id", "timestamp"],
    )
    op.create_index(
        "ix_weather_signals_field_ts",
        "weather_signals",
        ["field_id", "timestamp"],
    )

    # ── 4. Insights (write-once, one per field + season) ────────────────
    op.create_table(
        "insights",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("field_id", sa.String(64), nullable=False),
        sa.Column("season_id", sa.String(64), nullable=False),
        sa.Column("type", ENUM_INSIGHT_TYPE, nullable=False),
        sa.Column("severity", ENUM_INSIGHT_SEVERITY, nullable=False),
        sa.Column("confidence", ENUM_INSIGHT_CONFIDENCE, nullable=False),
        sa.Column("summary", sa.Text(), nullable=False),
        sa.Column("evidence", postgresql.JSONB(), nullable=False),
        sa.Column("suggested_action", sa.Text(), nullable=True),
        sa.Column("generated_at", sa.DateTime(timezone=True), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["field_id"], ["fields.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["season_id"], ["seasons.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("field_id", "season_id", name="uq_insights_field_season"),
    )


def downgrade() -> None:
    op.drop_table("insights")
    op.drop_index("ix_weather_signals_field_ts", table_name="weather_signals")
    op.drop_index("ix_weather_signals_field_season_ts", table_name="weather_signals")
    op.drop_table("weather_signals")
    op.drop_index("ix_vegetation_signals_field_ts", table_name="vegetation_signals")
    op.drop_index("ix_vegetation_signals_field_season_ts", table_name="vegetation_signals")
    op.drop_table("vegetation_signals")
    op.drop_index("ix_seasons_start_date", table_name="seasons")
    op.drop_table("seasons")
    op.drop_table("fields")
    for enum in reversed(_ENUMS):
        enum.drop(op.get_bind(), checkfirst=True)
