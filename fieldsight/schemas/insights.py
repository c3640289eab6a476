"""Pydantic schemas for performance-deviation insights."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from fieldsight.models.enums import (
	BaselineTypeEnum,
	ConfidenceLevelEnum,
	InsightTypeEnum,
	SeverityEnum,
)


class SeverityThresholds(BaseModel):
	high_severity: float
	medium_severity: float


class InsightEvidence(BaseModel):
	"""Numbers behind an insight; stored verbatim as the JSONB evidence blob."""

	current_ndvi: float | None = None
	baseline_ndvi: float | None = None
	baseline_type: BaselineTypeEnum | None = None
	delta: float | None = None
	delta_percent: float | None = None
	signal_completeness: int = Field(ge=0, le=100)
	vegetation_signal_count: int = Field(ge=0)
	weather_signal_count: int = Field(ge=0)
	thresholds: SeverityThresholds


class InsightDraft(BaseModel):
	"""Generator output before an id and generation stamp are assigned."""

	type: InsightTypeEnum = InsightTypeEnum.performance_deviation
	severity: SeverityEnum
	confidence: ConfidenceLevelEnum
	summary: str
	evidence: InsightEvidence
	suggested_action: str | None = None


class InsightRead(InsightDraft):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	field_id: str
	season_id: str
	generated_at: datetime
	created_at: datetime | None = None
