"""Get-or-generate orchestration for persisted performance-deviation insights."""

from __future__ import annotations

import json
import uuid
from datetime import UTC, datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from fieldsight.config import get_settings
from fieldsight.errors import NotFoundError, SerializationError, require_identifier
from fieldsight.inference.window import SignalWindowAssembler
from fieldsight.insights.baseline import BaselineResolver
from fieldsight.insights.generate import DeviationInsightGenerator
from fieldsight.repositories.base import (
	AlreadyExists,
	FieldRepository,
	InsightRepository,
	SeasonRepository,
	SignalRepository,
)
from fieldsight.repositories.sql import (
	SqlFieldRepository,
	SqlInsightRepository,
	SqlSeasonRepository,
	SqlSignalRepository,
)
from fieldsight.schemas.insights import InsightEvidence, InsightRead

logger = structlog.get_logger("fieldsight.insights")


def ensure_serializable(evidence: InsightEvidence) -> None:
	"""Raise ``SerializationError`` unless evidence is strict JSON (no NaN/inf)."""
	try:
		json.dumps(evidence.model_dump(), allow_nan=False)
	except (TypeError, ValueError) as exc:
		raise SerializationError(f"insight evidence is not JSON-representable: {exc}") from exc


class InsightService:
	"""One insight per (field_id, season_id): read it, or generate and store it.

	A concurrent writer may commit first between the read and the insert;
	the repository then reports ``AlreadyExists`` and the committed row is
	returned in place of the freshly generated one.
	"""

	def __init__(
		self,
		fields: FieldRepository,
		seasons: SeasonRepository,
		signals: SignalRepository,
		insights: InsightRepository,
		exclude_current_season: bool = True,
	):
		self.fields = fields
		self.seasons = seasons
		self.insights = insights
		self.generator = DeviationInsightGenerator(
			SignalWindowAssembler(seasons, signals),
			signals,
			BaselineResolver(seasons, signals, exclude_current_season=exclude_current_season),
		)

	@classmethod
	def from_session(cls, db: AsyncSession) -> InsightService:
		return cls(
			SqlFieldRepository(db),
			SqlSeasonRepository(db),
			SqlSignalRepository(db),
			SqlInsightRepository(db),
			exclude_current_season=get_settings().historical_baseline_excludes_current_season,
		)

	async def get_or_generate_insight(self, field_id: str, season_id: str) -> InsightRead:
		field_id = require_identifier(field_id, "field_id")
		season_id = require_identifier(season_id, "season_id")

		if not await self.fields.field_exists(field_id):
			raise NotFoundError(f"Field {field_id} not found")
		if await self.seasons.get_season(season_id) is None:
			raise NotFoundError(f"Season {season_id} not found")

		existing = await self.insights.get_insight(field_id, season_id)
		if existing is not None:
			logger.info("insight_reused", field_id=field_id, season_id=season_id, insight_id=str(existing.id))
			return existing

		draft = await self.generator.generate(field_id, season_id)
		ensure_serializable(draft.evidence)
		candidate = InsightRead(
			id=uuid.uuid4(),
			field_id=field_id,
			season_id=season_id,
			generated_at=datetime.now(UTC),
			**draft.model_dump(),
		)

		result = await self.insights.insert_insight(candidate)
		if isinstance(result, AlreadyExists):
			logger.info(
				"insight_conflict_resolved",
				field_id=field_id,
				season_id=season_id,
				discarded_id=str(candidate.id),
				insight_id=str(result.insight.id),
			)
			return result.insight

		logger.info(
			"insight_generated",
			field_id=field_id,
			season_id=season_id,
			insight_id=str(result.insight.id),
			severity=result.insight.severity.value,
			confidence=result.insight.confidence.value,
		)
		return result.insight
