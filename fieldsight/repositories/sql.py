"""SQLAlchemy async implementations of the repository interfaces."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fieldsight.errors import ConflictError, StorageError
from fieldsight.models.field import Field, Season
from fieldsight.models.insight import Insight
from fieldsight.models.signals import VegetationSignal, WeatherSignal
from fieldsight.repositories.base import AlreadyExists, Inserted, InsertResult, SignalSet
from fieldsight.schemas.insights import InsightRead
from fieldsight.schemas.signals import (
	NdviStats,
	SeasonRead,
	VegetationSignalRead,
	WeatherSignalRead,
)


class SqlFieldRepository:
	def __init__(self, db: AsyncSession):
		self.db = db

	async def field_exists(self, field_id: str) -> bool:
		try:
			row = await self.db.execute(select(Field.id).where(Field.id == field_id))
		except SQLAlchemyError as exc:
			raise StorageError(f"failed to load field {field_id}: {exc}") from exc
		return row.scalar_one_or_none() is not None


class SqlSeasonRepository:
	def __init__(self, db: AsyncSession):
		self.db = db

	async def get_season(self, season_id: str) -> SeasonRead | None:
		try:
			row = await self.db.execute(select(Season).where(Season.id == season_id))
		except SQLAlchemyError as exc:
			raise StorageError(f"failed to load season {season_id}: {exc}") from exc
		season = row.scalar_one_or_none()
		return SeasonRead.model_validate(season) if season is not None else None

	async def get_previous_season(self, season_id: str) -> SeasonRead | None:
		current = await self.get_season(season_id)
		if current is None:
			return None

		stmt = (
			select(Season)
			.where(Season.start_date < current.start_date)
			.order_by(Season.start_date.desc(), Season.id.asc())
			.limit(1)
		)
		try:
			row = await self.db.execute(stmt)
		except SQLAlchemyError as exc:
			raise StorageError(f"failed to load season preceding {season_id}: {exc}") from exc
		previous = row.scalar_one_or_none()
		return SeasonRead.model_validate(previous) if previous is not None else None


class SqlSignalRepository:
	def __init__(self, db: AsyncSession):
		self.db = db

	async def get_signals_for_season(self, field_id: str, season_id: str) -> SignalSet:
		veg_stmt = (
			select(VegetationSignal)
			.where(VegetationSignal.field_id == field_id, VegetationSignal.season_id == season_id)
			.order_by(VegetationSignal.timestamp.asc(), VegetationSignal.id.asc())
		)
		weather_stmt = (
			select(WeatherSignal)
			.where(WeatherSignal.field_id == field_id, WeatherSignal.season_id == season_id)
			.order_by(WeatherSignal.timestamp.asc(), WeatherSignal.id.asc())
		)
		return await self._load(veg_stmt, weather_stmt, f"field {field_id} season {season_id}")

	async def get_signals_for_window(
		self,
		field_id: str,
		window_start: datetime,
		window_end: datetime,
	) -> SignalSet:
		veg_stmt = (
			select(VegetationSignal)
			.where(
				VegetationSignal.field_id == field_id,
				VegetationSignal.timestamp >= window_start,
				VegetationSignal.timestamp <= window_end,
			)
			.order_by(VegetationSignal.timestamp.asc(), VegetationSignal.id.asc())
		)
		weather_stmt = (
			select(WeatherSignal)
			.where(
				WeatherSignal.field_id == field_id,
				WeatherSignal.timestamp >= window_start,
				WeatherSignal.timestamp <= window_end,
			)
			.order_by(WeatherSignal.timestamp.asc(), WeatherSignal.id.asc())
		)
		context = f"field {field_id} window {window_start.isoformat()}..{window_end.isoformat()}"
		return await self._load(veg_stmt, weather_stmt, context)

	async def get_season_mean_ndvi(self, field_id: str, season_id: str) -> float | None:
		stmt = select(func.avg(VegetationSignal.ndvi_mean)).where(
			VegetationSignal.field_id == field_id,
			VegetationSignal.season_id == season_id,
		)
		return await self._scalar_mean(stmt, f"field {field_id} season {season_id}")

	async def get_historical_mean_ndvi(
		self,
		field_id: str,
		exclude_season_id: str | None = None,
	) -> float | None:
		stmt = select(func.avg(VegetationSignal.ndvi_mean)).where(VegetationSignal.field_id == field_id)
		if exclude_season_id is not None:
			stmt = stmt.where(VegetationSignal.season_id != exclude_season_id)
		return await self._scalar_mean(stmt, f"field {field_id} history")

	async def _load(self, veg_stmt, weather_stmt, context: str) -> SignalSet:  # type: ignore[no-untyped-def]
		try:
			veg_rows = await self.db.execute(veg_stmt)
			weather_rows = await self.db.execute(weather_stmt)
		except SQLAlchemyError as exc:
			raise StorageError(f"failed to load signals for {context}: {exc}") from exc
		vegetation = [self._vegetation_to_read(row) for row in veg_rows.scalars().all()]
		weather = [self._weather_to_read(row) for row in weather_rows.scalars().all()]
		return vegetation, weather

	async def _scalar_mean(self, stmt, context: str) -> float | None:  # type: ignore[no-untyped-def]
		try:
			row = await self.db.execute(stmt)
		except SQLAlchemyError as exc:
			raise StorageError(f"failed to aggregate NDVI for {context}: {exc}") from exc
		value = row.scalar_one_or_none()
		return float(value) if value is not None else None

	@staticmethod
	def _vegetation_to_read(row: VegetationSignal) -> VegetationSignalRead:
		return VegetationSignalRead(
			field_id=row.field_id,
			season_id=row.season_id,
			timestamp=row.timestamp,
			ndvi=NdviStats(
				mean=row.ndvi_mean,
				min=row.ndvi_min,
				max=row.ndvi_max,
				std_dev=row.ndvi_std_dev,
			),
			data_quality=row.data_quality,
		)

	@staticmethod
	def _weather_to_read(row: WeatherSignal) -> WeatherSignalRead:
		return WeatherSignalRead(
			field_id=row.field_id,
			season_id=row.season_id,
			timestamp=row.timestamp,
			rainfall=row.rainfall_mm,
			temperature=row.temperature_c,
			data_quality=row.data_quality,
		)


class SqlInsightRepository:
	def __init__(self, db: AsyncSession):
		self.db = db

	async def get_insight(self, field_id: str, season_id: str) -> InsightRead | None:
		stmt = select(Insight).where(Insight.field_id == field_id, Insight.season_id == season_id)
		try:
			row = await self.db.execute(stmt)
		except SQLAlchemyError as exc:
			raise StorageError(f"failed to load insight for field {field_id} season {season_id}: {exc}") from exc
		insight = row.scalar_one_or_none()
		return InsightRead.model_validate(insight) if insight is not None else None

	async def insert_insight(self, insight: InsightRead) -> InsertResult:
		try:
			stored = await self._insert_row(insight)
		except ConflictError:
			existing = await self.get_insight(insight.field_id, insight.season_id)
			if existing is None:
				raise StorageError(
					f"insight for field {insight.field_id} season {insight.season_id} "
					"conflicted but could not be re-read"
				) from None
			return AlreadyExists(existing)
		return Inserted(stored)

	async def _insert_row(self, insight: InsightRead) -> InsightRead:
		row = Insight(
			id=insight.id,
			field_id=insight.field_id,
			season_id=insight.season_id,
			type=insight.type,
			severity=insight.severity,
			confidence=insight.confidence,
			summary=insight.summary,
			evidence=insight.evidence.model_dump(mode="json"),
			suggested_action=insight.suggested_action,
			generated_at=insight.generated_at,
		)
		try:
			# SAVEPOINT keeps the outer transaction usable for the re-read.
			async with self.db.begin_nested():
				self.db.add(row)
			await self.db.refresh(row)
		except IntegrityError as exc:
			raise ConflictError(
				f"insight already exists for field {insight.field_id} season {insight.season_id}"
			) from exc
		except SQLAlchemyError as exc:
			raise StorageError(
				f"failed to insert insight for field {insight.field_id} season {insight.season_id}: {exc}"
			) from exc
		return InsightRead.model_validate(row)
