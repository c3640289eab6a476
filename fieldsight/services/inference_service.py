"""Legacy inference, provenance and context views, computed on the fly and never stored."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from fieldsight.errors import NotFoundError, require_identifier
from fieldsight.inference.assemble import assemble_inference, to_inference_response
from fieldsight.inference.categories import emit_inference_category
from fieldsight.inference.provenance import reconstruct_provenance
from fieldsight.inference.status import infer_crop_health_status
from fieldsight.inference.window import SignalWindowAssembler
from fieldsight.repositories.base import FieldRepository, SeasonRepository, SignalRepository
from fieldsight.repositories.sql import SqlFieldRepository, SqlSeasonRepository, SqlSignalRepository
from fieldsight.schemas.context import ContextTimeWindow, FieldContext
from fieldsight.schemas.inference import InferenceInput, InferenceResponse, WindowQuery
from fieldsight.schemas.provenance import InferenceProvenance
from fieldsight.schemas.signals import VegetationSignalRead, WeatherSignalRead

logger = structlog.get_logger("fieldsight.inference")

CONTEXT_SOURCE = "Database signals (vegetation_signals, weather_signals)"


def _join_timestamps(signals: Sequence[VegetationSignalRead | WeatherSignalRead]) -> str:
	if not signals:
		return "None"
	return ", ".join(signal.timestamp.isoformat() for signal in signals)


class InferenceService:
	def __init__(
		self,
		fields: FieldRepository,
		seasons: SeasonRepository,
		signals: SignalRepository,
	):
		self.fields = fields
		self.assembler = SignalWindowAssembler(seasons, signals)

	@classmethod
	def from_session(cls, db: AsyncSession) -> InferenceService:
		return cls(SqlFieldRepository(db), SqlSeasonRepository(db), SqlSignalRepository(db))

	async def assemble(self, query: WindowQuery) -> InferenceInput:
		field_id = require_identifier(query.field_id, "field_id")
		if not await self.fields.field_exists(field_id):
			raise NotFoundError(f"Field {field_id} not found")

		if query.season_id is not None:
			return await self.assembler.assemble_for_season(field_id, query.season_id)
		return await self.assembler.assemble_for_window(
			field_id,
			query.window_start,  # type: ignore[arg-type]
			query.window_end,  # type: ignore[arg-type]
		)

	async def get_inference(self, query: WindowQuery) -> InferenceResponse:
		inference_input = await self.assemble(query)
		status = infer_crop_health_status(inference_input)
		category = emit_inference_category(status, inference_input)
		inference = assemble_inference(status, category, inference_input, generated_at=datetime.now(UTC))
		logger.info(
			"inference_computed",
			field_id=inference.field_id,
			category=inference.category.category.value,
			confidence=inference.confidence,
		)
		return to_inference_response(inference)

	async def get_provenance(self, query: WindowQuery) -> InferenceProvenance:
		inference_input = await self.assemble(query)
		return reconstruct_provenance(inference_input)

	async def get_context(self, query: WindowQuery) -> FieldContext:
		inference_input = await self.assemble(query)
		return FieldContext(
			field_id=inference_input.field_id,
			source=CONTEXT_SOURCE,
			time_window=ContextTimeWindow(start=inference_input.window_start, end=inference_input.window_end),
			fetched_at=datetime.now(UTC),
			data={
				"Vegetation signals": f"{len(inference_input.vegetation_signals)} observations",
				"Weather signals": f"{len(inference_input.weather_signals)} observations",
				"Signal completeness": f"{inference_input.signal_completeness}%",
				"Vegetation timestamps": _join_timestamps(inference_input.vegetation_signals),
				"Weather timestamps": _join_timestamps(inference_input.weather_signals),
			},
		)
