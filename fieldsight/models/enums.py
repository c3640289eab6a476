"""PostgreSQL-backed enum types for ORM models and engine results.

Each StrEnum maps 1:1 to a PostgreSQL CREATE TYPE ... AS ENUM where it is
stored.  Status and category enums are never persisted but share the same
StrEnum convention so they serialize as plain strings.
"""

from enum import StrEnum

# ── Signal enums ────────────────────────────────────────────────────────────


class DataQualityEnum(StrEnum):
    """Observation quality attached to every signal."""

    high = "high"
    medium = "medium"
    low = "low"


# ── Insight enums ───────────────────────────────────────────────────────────


class InsightTypeEnum(StrEnum):
    """Insight kinds (only performance deviation today)."""

    performance_deviation = "performance_deviation"


class SeverityEnum(StrEnum):
    """Deviation severity from fixed delta thresholds."""

    low = "low"
    medium = "medium"
    high = "high"


class ConfidenceLevelEnum(StrEnum):
    """Categorical confidence derived from signal completeness."""

    low = "low"
    medium = "medium"
    high = "high"


class BaselineTypeEnum(StrEnum):
    """Where the comparison NDVI came from."""

    previous_season = "previous_season"
    historical_mean = "historical_mean"


# ── Inference enums (ephemeral) ─────────────────────────────────────────────


class HealthStatusEnum(StrEnum):
    """Crop-health bucket of the most recent NDVI observation."""

    healthy = "healthy"
    watch = "watch"
    stressed = "stressed"


class InferenceCategoryEnum(StrEnum):
    """User-facing inference category."""

    observation = "observation"
    advisory = "advisory"
    alert = "alert"
    forecast = "forecast"


class TrendEnum(StrEnum):
    """Trend vocabulary of the legacy inference contract."""

    improving = "improving"
    stable = "stable"
    declining = "declining"
