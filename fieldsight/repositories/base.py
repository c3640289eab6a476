"""Repository interfaces injected into the engine.

The engine never touches a session directly: every read and the single
insight write go through these protocols, so tests can hand in in-memory
doubles and production wires the SQLAlchemy implementations.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from fieldsight.schemas.insights import InsightRead
from fieldsight.schemas.signals import SeasonRead, VegetationSignalRead, WeatherSignalRead

SignalSet = tuple[Sequence[VegetationSignalRead], Sequence[WeatherSignalRead]]


@dataclass(frozen=True, slots=True)
class Inserted:
	"""The insert won the uniqueness gate; ``insight`` is the new row."""

	insight: InsightRead


@dataclass(frozen=True, slots=True)
class AlreadyExists:
	"""Another writer committed first; ``insight`` is the authoritative row."""

	insight: InsightRead


InsertResult = Inserted | AlreadyExists


class FieldRepository(Protocol):
	async def field_exists(self, field_id: str) -> bool: ...


class SeasonRepository(Protocol):
	async def get_season(self, season_id: str) -> SeasonRead | None: ...

	async def get_previous_season(self, season_id: str) -> SeasonRead | None: ...


class SignalRepository(Protocol):
	async def get_signals_for_season(self, field_id: str, season_id: str) -> SignalSet: ...

	async def get_signals_for_window(
		self,
		field_id: str,
		window_start: datetime,
		window_end: datetime,
	) -> SignalSet: ...

	async def get_season_mean_ndvi(self, field_id: str, season_id: str) -> float | None: ...

	async def get_historical_mean_ndvi(
		self,
		field_id: str,
		exclude_season_id: str | None = None,
	) -> float | None: ...


class InsightRepository(Protocol):
	async def get_insight(self, field_id: str, season_id: str) -> InsightRead | None: ...

	async def insert_insight(self, insight: InsightRead) -> InsertResult: ...
