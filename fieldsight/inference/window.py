"""Signal window assembly: turns a season or explicit window into an InferenceInput.

Two named entry points share one capability:

* ``assemble_for_season`` (preferred): bounds come from the season row and
  signals are scoped by ``season_id``.
* ``assemble_for_window`` (legacy): caller-supplied bounds, signals scoped
  by timestamp, inclusive on both ends.

Signals are always re-sorted ascending by timestamp here, whatever order
the repository returned them in; the status classifier relies on it.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime

from fieldsight.errors import NotFoundError, ValidationError, require_identifier
from fieldsight.repositories.base import SeasonRepository, SignalRepository
from fieldsight.schemas.inference import InferenceInput, ensure_utc
from fieldsight.schemas.signals import VegetationSignalRead, WeatherSignalRead

SECONDS_PER_DAY = 24 * 60 * 60
VEGETATION_REVISIT_DAYS = 5


def round_half_up(value: float) -> int:
	"""Round to the nearest integer, ties toward +infinity."""
	return math.floor(value + 0.5)


def calculate_signal_completeness(
	window_start: datetime,
	window_end: datetime,
	vegetation_count: int,
	weather_count: int,
) -> int:
	"""Actual vs. expected observation density as a 0–100 percentage.

	One satellite pass is expected every five days and one weather
	observation per day.
	"""
	days_in_window = math.ceil((window_end - window_start).total_seconds() / SECONDS_PER_DAY)
	expected_vegetation = math.ceil(days_in_window / VEGETATION_REVISIT_DAYS)
	expected_weather = days_in_window

	total_expected = expected_vegetation + expected_weather
	if total_expected <= 0:
		return 0

	total_actual = vegetation_count + weather_count
	return min(100, round_half_up(total_actual / total_expected * 100))


def build_inference_input(
	field_id: str,
	window_start: datetime,
	window_end: datetime,
	vegetation_signals: Sequence[VegetationSignalRead],
	weather_signals: Sequence[WeatherSignalRead],
) -> InferenceInput:
	vegetation = sorted(vegetation_signals, key=lambda signal: signal.timestamp)
	weather = sorted(weather_signals, key=lambda signal: signal.timestamp)
	return InferenceInput(
		field_id=field_id,
		window_start=window_start,
		window_end=window_end,
		vegetation_signals=vegetation,
		weather_signals=weather,
		signal_completeness=calculate_signal_completeness(
			window_start,
			window_end,
			len(vegetation),
			len(weather),
		),
	)


class SignalWindowAssembler:
	"""Resolves a field + season (or window) into an ordered signal set."""

	def __init__(self, seasons: SeasonRepository, signals: SignalRepository):
		self.seasons = seasons
		self.signals = signals

	async def assemble_for_season(self, field_id: str, season_id: str) -> InferenceInput:
		field_id = require_identifier(field_id, "field_id")
		season_id = require_identifier(season_id, "season_id")

		season = await self.seasons.get_season(season_id)
		if season is None:
			raise NotFoundError(f"Season {season_id} not found")

		vegetation, weather = await self.signals.get_signals_for_season(field_id, season_id)
		return build_inference_input(field_id, season.start_date, season.end_date, vegetation, weather)

	async def assemble_for_window(
		self,
		field_id: str,
		window_start: datetime,
		window_end: datetime,
	) -> InferenceInput:
		field_id = require_identifier(field_id, "field_id")
		window_start = ensure_utc(window_start)
		window_end = ensure_utc(window_end)
		if window_start > window_end:
			raise ValidationError("window_start must not be after window_end")

		vegetation, weather = await self.signals.get_signals_for_window(field_id, window_start, window_end)
		return build_inference_input(field_id, window_start, window_end, vegetation, weather)
