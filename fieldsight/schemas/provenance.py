"""Pydantic schemas for view-time provenance (never persisted)."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fieldsight.models.enums import DataQualityEnum, InferenceCategoryEnum
from fieldsight.schemas.inference import ensure_utc

Dimension = Literal["status", "trend", "confidence", "category"]


class RuleTrace(BaseModel):
	rule_id: str
	rule_name: str
	evaluated: bool
	outcome: str | float | None = None
	contributes_to: list[Dimension]


class SignalLineage(BaseModel):
	signal_type: Literal["vegetation", "weather"]
	timestamp: datetime
	present: bool = True
	data_quality: DataQualityEnum | None = None


class CategoryProvenance(BaseModel):
	category: InferenceCategoryEnum
	emitted_by: list[str]
	emitted_at: datetime


class InferenceProvenance(BaseModel):
	rule_traces: list[RuleTrace] = Field(default_factory=list)
	signal_lineage: list[SignalLineage] = Field(default_factory=list)
	category_provenance: list[CategoryProvenance] = Field(default_factory=list)


class ProvenanceGenerateRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	field_id: str = Field(min_length=1, alias="fieldId")
	window_start: datetime = Field(alias="windowStart")
	window_end: datetime = Field(alias="windowEnd")

	@field_validator("window_start", "window_end")
	@classmethod
	def _normalize_bound(cls, value: datetime) -> datetime:
		return ensure_utc(value)
