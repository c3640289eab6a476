from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from conftest import FIELD_ID, SEASON_ID, InMemoryRepository, vegetation_signal, weather_signal

from fieldsight.errors import NotFoundError, ValidationError
from fieldsight.inference.window import (
	SignalWindowAssembler,
	calculate_signal_completeness,
	round_half_up,
)


def test_round_half_up_rounds_ties_upward() -> None:
	assert round_half_up(2.5) == 3
	assert round_half_up(0.5) == 1
	assert round_half_up(-0.5) == 0
	assert round_half_up(99.49) == 99


def test_completeness_full_thirty_day_window() -> None:
	start = datetime(2024, 3, 1, tzinfo=UTC)
	end = start + timedelta(days=30)
	assert calculate_signal_completeness(start, end, 6, 30) == 100


def test_completeness_is_capped_at_100() -> None:
	start = datetime(2024, 3, 1, tzinfo=UTC)
	end = start + timedelta(days=10)
	assert calculate_signal_completeness(start, end, 20, 40) == 100


def test_completeness_partial_window_rounds_day_count_up() -> None:
	start = datetime(2024, 3, 1, tzinfo=UTC)
	end = start + timedelta(days=9, hours=1)
	# 10 days -> 2 expected vegetation + 10 expected weather
	assert calculate_signal_completeness(start, end, 1, 5) == 50


def test_completeness_zero_length_window_is_zero() -> None:
	moment = datetime(2024, 3, 1, tzinfo=UTC)
	assert calculate_signal_completeness(moment, moment, 3, 3) == 0


@pytest.mark.asyncio
async def test_assemble_for_season_sorts_and_scopes(repo: InMemoryRepository, season_start: datetime) -> None:
	later = vegetation_signal(season_start + timedelta(days=20), 0.4)
	earlier = vegetation_signal(season_start + timedelta(days=5), 0.7)
	repo.vegetation.extend([later, earlier])
	repo.vegetation.append(vegetation_signal(season_start + timedelta(days=6), 0.9, season_id="season-2023"))
	repo.weather.extend(
		[
			weather_signal(season_start + timedelta(days=2)),
			weather_signal(season_start + timedelta(days=1)),
		]
	)

	assembler = SignalWindowAssembler(repo, repo)
	result = await assembler.assemble_for_season(FIELD_ID, SEASON_ID)

	assert result.field_id == FIELD_ID
	assert result.window_start == season_start
	assert result.window_end == season_start + timedelta(days=30)
	assert [s.ndvi.mean for s in result.vegetation_signals] == [0.7, 0.4]
	timestamps = [s.timestamp for s in result.weather_signals]
	assert timestamps == sorted(timestamps)
	# 30 days -> 6 + 30 expected, 4 actual
	assert result.signal_completeness == 11


@pytest.mark.asyncio
async def test_assemble_for_season_unknown_season(repo: InMemoryRepository) -> None:
	assembler = SignalWindowAssembler(repo, repo)
	with pytest.raises(NotFoundError):
		await assembler.assemble_for_season(FIELD_ID, "season-1999")


@pytest.mark.asyncio
@pytest.mark.parametrize("season_id", ["", "   "])
async def test_assemble_for_season_rejects_blank_season(repo: InMemoryRepository, season_id: str) -> None:
	assembler = SignalWindowAssembler(repo, repo)
	with pytest.raises(ValidationError):
		await assembler.assemble_for_season(FIELD_ID, season_id)


@pytest.mark.asyncio
async def test_assemble_for_window_is_inclusive(repo: InMemoryRepository, season_start: datetime) -> None:
	window_end = season_start + timedelta(days=10)
	repo.vegetation.extend(
		[
			vegetation_signal(season_start, 0.5),
			vegetation_signal(window_end, 0.6),
			vegetation_signal(window_end + timedelta(seconds=1), 0.7),
		]
	)

	assembler = SignalWindowAssembler(repo, repo)
	result = await assembler.assemble_for_window(FIELD_ID, season_start, window_end)

	assert [s.ndvi.mean for s in result.vegetation_signals] == [0.5, 0.6]
	assert result.window_start == season_start
	assert result.window_end == window_end


@pytest.mark.asyncio
async def test_assemble_for_window_rejects_inverted_bounds(repo: InMemoryRepository, season_start: datetime) -> None:
	assembler = SignalWindowAssembler(repo, repo)
	with pytest.raises(ValidationError):
		await assembler.assemble_for_window(FIELD_ID, season_start, season_start - timedelta(days=1))


@pytest.mark.asyncio
async def test_assemble_for_window_treats_naive_bounds_as_utc(
	repo: InMemoryRepository,
	season_start: datetime,
) -> None:
	repo.vegetation.append(vegetation_signal(season_start + timedelta(days=1), 0.5))
	naive_start = season_start.replace(tzinfo=None)

	assembler = SignalWindowAssembler(repo, repo)
	result = await assembler.assemble_for_window(FIELD_ID, naive_start, season_start + timedelta(days=5))

	assert result.window_start == season_start
	assert result.window_start.tzinfo is not None
	assert len(result.vegetation_signals) == 1

	with pytest.raises(ValidationError):
		await assembler.assemble_for_window(FIELD_ID, naive_start + timedelta(days=6), season_start)
