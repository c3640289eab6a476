"""Pydantic read models for signals and seasons handed to the engine."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from fieldsight.models.enums import DataQualityEnum


class NdviStats(BaseModel):
	mean: float = Field(ge=-1.0, le=1.0)
	min: float = Field(ge=-1.0, le=1.0)
	max: float = Field(ge=-1.0, le=1.0)
	std_dev: float = Field(ge=0.0)


class VegetationSignalRead(BaseModel):
	model_config = ConfigDict(frozen=True)

	field_id: str
	season_id: str
	timestamp: datetime
	ndvi: NdviStats
	data_quality: DataQualityEnum


class WeatherSignalRead(BaseModel):
	model_config = ConfigDict(frozen=True)

	field_id: str
	season_id: str
	timestamp: datetime
	rainfall: float = Field(ge=0.0)
	temperature: float
	data_quality: DataQualityEnum


class SeasonRead(BaseModel):
	model_config = ConfigDict(from_attributes=True, frozen=True)

	id: str
	name: str
	start_date: datetime
	end_date: datetime
	created_at: datetime | None = None
