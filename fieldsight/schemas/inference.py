"""Pydantic schemas for inference inputs, intermediate results, and responses."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from fieldsight.models.enums import (
	ConfidenceLevelEnum,
	HealthStatusEnum,
	InferenceCategoryEnum,
	TrendEnum,
)
from fieldsight.schemas.signals import VegetationSignalRead, WeatherSignalRead


def ensure_utc(value: datetime) -> datetime:
	"""Treat naive timestamps as UTC so window bounds always compare."""
	if value.tzinfo is None:
		return value.replace(tzinfo=UTC)
	return value


class InferenceInput(BaseModel):
	"""Canonical, request-scoped input for every inference operation.

	Signals are ordered ascending by timestamp; the assembler guarantees it.
	"""

	field_id: str
	window_start: datetime
	window_end: datetime
	vegetation_signals: list[VegetationSignalRead] = Field(default_factory=list)
	weather_signals: list[WeatherSignalRead] = Field(default_factory=list)
	signal_completeness: int = Field(ge=0, le=100)


class StatusThresholds(BaseModel):
	healthy: float
	watch: float


class StatusResult(BaseModel):
	status: HealthStatusEnum
	ndvi_mean: float
	threshold: StatusThresholds


class CategoryResult(BaseModel):
	category: InferenceCategoryEnum
	message: str = Field(min_length=1)


class ConfidenceBreakdown(BaseModel):
	completeness_factor: float
	quality_factor: float
	temporal_factor: float
	score: int = Field(ge=0, le=100)


class InferenceMetadata(BaseModel):
	window_start: datetime
	window_end: datetime
	signal_completeness: int
	vegetation_signal_count: int
	weather_signal_count: int


class Inference(BaseModel):
	field_id: str
	generated_at: datetime
	status: StatusResult | None = None
	category: CategoryResult
	confidence: int = Field(ge=0, le=100)
	explanation: str
	metadata: InferenceMetadata


class InferenceResponse(BaseModel):
	"""Canonical legacy inference contract returned by ``/inference``."""

	field_id: str = Field(min_length=1)
	generated_at: datetime
	status: HealthStatusEnum
	trend: TrendEnum
	confidence: ConfidenceLevelEnum
	categories: list[CategoryResult]
	explanation: str = Field(min_length=1)


class WindowQuery(BaseModel):
	"""Either a season selector or an explicit (legacy) time window."""

	field_id: str = Field(min_length=1)
	season_id: str | None = None
	window_start: datetime | None = None
	window_end: datetime | None = None

	@field_validator("window_start", "window_end")
	@classmethod
	def _normalize_bound(cls, value: datetime | None) -> datetime | None:
		return ensure_utc(value) if value is not None else None

	@model_validator(mode="after")
	def _validate_selector(self) -> "WindowQuery":
		has_window = self.window_start is not None or self.window_end is not None
		if self.season_id is not None and has_window:
			raise ValueError("provide either season_id or window_start/window_end, not both")
		if self.season_id is None:
			if self.window_start is None or self.window_end is None:
				raise ValueError("provide season_id or both window_start and window_end")
		return self
