"""Shared pytest fixtures — async test client, in-memory repositories, signal builders."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from fieldsight.database import get_db
from fieldsight.main import app
from fieldsight.models.enums import DataQualityEnum
from fieldsight.repositories.base import AlreadyExists, Inserted, InsertResult, SignalSet
from fieldsight.schemas.insights import InsightRead
from fieldsight.schemas.signals import NdviStats, SeasonRead, VegetationSignalRead, WeatherSignalRead

FIELD_ID = "field-1"
SEASON_ID = "season-2024"
PREVIOUS_SEASON_ID = "season-2023"
OLDER_SEASON_ID = "season-2022"


class FakeAsyncSession:
	def __init__(self) -> None:
		self.commit = AsyncMock()
		self.rollback = AsyncMock()
		self.close = AsyncMock()
		self.execute = AsyncMock()
		self.refresh = AsyncMock()
		self.add = MagicMock()
		self.nested_error: Exception | None = None

	@asynccontextmanager
	async def _nested(self) -> AsyncGenerator[None, None]:
		yield
		if self.nested_error is not None:
			raise self.nested_error

	def begin_nested(self) -> Any:
		return self._nested()


def make_season(
	season_id: str,
	start: datetime,
	days: int = 30,
	name: str | None = None,
) -> SeasonRead:
	return SeasonRead(
		id=season_id,
		name=name or season_id,
		start_date=start,
		end_date=start + timedelta(days=days),
	)


def vegetation_signal(
	timestamp: datetime,
	ndvi: float,
	data_quality: DataQualityEnum = DataQualityEnum.high,
	field_id: str = FIELD_ID,
	season_id: str = SEASON_ID,
) -> VegetationSignalRead:
	return VegetationSignalRead(
		field_id=field_id,
		season_id=season_id,
		timestamp=timestamp,
		ndvi=NdviStats(mean=ndvi, min=max(-1.0, ndvi - 0.1), max=min(1.0, ndvi + 0.1), std_dev=0.05),
		data_quality=data_quality,
	)


def weather_signal(
	timestamp: datetime,
	rainfall: float = 2.5,
	temperature: float = 21.0,
	data_quality: DataQualityEnum = DataQualityEnum.high,
	field_id: str = FIELD_ID,
	season_id: str = SEASON_ID,
) -> WeatherSignalRead:
	return WeatherSignalRead(
		field_id=field_id,
		season_id=season_id,
		timestamp=timestamp,
		rainfall=rainfall,
		temperature=temperature,
		data_quality=data_quality,
	)


class InMemoryRepository:
	"""Single in-memory store implementing every repository protocol.

	Signals are returned in insertion order so tests can check that the
	assembler sorts them.  With ``yield_after_insight_read`` set, every
	insight read suspends after sampling the store, which lets two
	concurrent callers both observe "no insight yet".
	"""

	def __init__(self) -> None:
		self.field_ids: set[str] = set()
		self.seasons: dict[str, SeasonRead] = {}
		self.vegetation: list[VegetationSignalRead] = []
		self.weather: list[WeatherSignalRead] = []
		self.insights: dict[tuple[str, str], InsightRead] = {}
		self.insert_calls = 0
		self.yield_after_insight_read = False

	async def field_exists(self, field_id: str) -> bool:
		return field_id in self.field_ids

	async def get_season(self, season_id: str) -> SeasonRead | None:
		return self.seasons.get(season_id)

	async def get_previous_season(self, season_id: str) -> SeasonRead | None:
		current = self.seasons.get(season_id)
		if current is None:
			return None
		earlier = [season for season in self.seasons.values() if season.start_date < current.start_date]
		if not earlier:
			return None
		return max(earlier, key=lambda season: season.start_date)

	async def get_signals_for_season(self, field_id: str, season_id: str) -> SignalSet:
		vegetation = [s for s in self.vegetation if s.field_id == field_id and s.season_id == season_id]
		weather = [s for s in self.weather if s.field_id == field_id and s.season_id == season_id]
		return vegetation, weather

	async def get_signals_for_window(
		self,
		field_id: str,
		window_start: datetime,
		window_end: datetime,
	) -> SignalSet:
		vegetation = [
			s for s in self.vegetation if s.field_id == field_id and window_start <= s.timestamp <= window_end
		]
		weather = [s for s in self.weather if s.field_id == field_id and window_start <= s.timestamp <= window_end]
		return vegetation, weather

	async def get_season_mean_ndvi(self, field_id: str, season_id: str) -> float | None:
		values = [s.ndvi.mean for s in self.vegetation if s.field_id == field_id and s.season_id == season_id]
		return sum(values) / len(values) if values else None

	async def get_historical_mean_ndvi(
		self,
		field_id: str,
		exclude_season_id: str | None = None,
	) -> float | None:
		values = [
			s.ndvi.mean
			for s in self.vegetation
			if s.field_id == field_id and (exclude_season_id is None or s.season_id != exclude_season_id)
		]
		return sum(values) / len(values) if values else None

	async def get_insight(self, field_id: str, season_id: str) -> InsightRead | None:
		insight = self.insights.get((field_id, season_id))
		if self.yield_after_insight_read:
			await asyncio.sleep(0)
		return insight

	async def insert_insight(self, insight: InsightRead) -> InsertResult:
		self.insert_calls += 1
		key = (insight.field_id, insight.season_id)
		existing = self.insights.get(key)
		if existing is not None:
			return AlreadyExists(existing)
		self.insights[key] = insight
		return Inserted(insight)


@pytest.fixture
def season_start() -> datetime:
	return datetime(2024, 3, 1, tzinfo=UTC)


@pytest.fixture
def repo(season_start: datetime) -> InMemoryRepository:
	"""Field ``field-1`` with three consecutive 30-day seasons and no signals."""
	store = InMemoryRepository()
	store.field_ids.add(FIELD_ID)
	store.seasons[OLDER_SEASON_ID] = make_season(OLDER_SEASON_ID, season_start - timedelta(days=730))
	store.seasons[PREVIOUS_SEASON_ID] = make_season(PREVIOUS_SEASON_ID, season_start - timedelta(days=365))
	store.seasons[SEASON_ID] = make_season(SEASON_ID, season_start)
	return store


@pytest.fixture
def fake_db_session() -> FakeAsyncSession:
	"""A lightweight async-session stub for dependency overrides in API tests."""
	return FakeAsyncSession()


@pytest.fixture
async def client(fake_db_session: FakeAsyncSession) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and DB dependency mocked."""

	async def override_get_db() -> AsyncGenerator[Any, None]:
		yield fake_db_session

	app.dependency_overrides[get_db] = override_get_db
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.dependency_overrides.clear()
