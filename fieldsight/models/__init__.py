"""ORM model registry — importing this module registers every table on Base.metadata.

Alembic ``env.py`` imports ``Base`` from here (not from ``base.py``) so that
autogenerate sees all tables.  Application code can also do::

    from fieldsight.models import Field, Season, VegetationSignal, ...
"""

# ── Base & Mixins ───────────────────────────────────────────────────────────
from fieldsight.models.base import (
    Base,
    CreatedAtMixin,
    TimeSeriesMixin,
    UUIDPrimaryKeyMixin,
)

# ── Enums ───────────────────────────────────────────────────────────────────
from fieldsight.models.enums import (
    BaselineTypeEnum,
    ConfidenceLevelEnum,
    DataQualityEnum,
    HealthStatusEnum,
    InferenceCategoryEnum,
    InsightTypeEnum,
    SeverityEnum,
    TrendEnum,
)

# ── Scoping entities ────────────────────────────────────────────────────────
from fieldsight.models.field import Field, Season

# ── Insights ────────────────────────────────────────────────────────────────
from fieldsight.models.insight import Insight

# ── Time-series signal models ───────────────────────────────────────────────
from fieldsight.models.signals import VegetationSignal, WeatherSignal

__all__ = [
    # Base & mixins
    "Base",
    "BaselineTypeEnum",
    "ConfidenceLevelEnum",
    "CreatedAtMixin",
    # Enums
    "DataQualityEnum",
    # Scoping
    "Field",
    "HealthStatusEnum",
    "InferenceCategoryEnum",
    # Insights
    "Insight",
    "InsightTypeEnum",
    "Season",
    "SeverityEnum",
    "TimeSeriesMixin",
    "TrendEnum",
    "UUIDPrimaryKeyMixin",
    # Signals
    "VegetationSignal",
    "WeatherSignal",
]
