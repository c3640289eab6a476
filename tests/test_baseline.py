from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from conftest import (
	FIELD_ID,
	OLDER_SEASON_ID,
	PREVIOUS_SEASON_ID,
	SEASON_ID,
	InMemoryRepository,
	vegetation_signal,
)

from fieldsight.insights.baseline import NO_BASELINE, BaselineResolver
from fieldsight.models.enums import BaselineTypeEnum


@pytest.mark.asyncio
async def test_previous_season_wins_when_it_has_signals(repo: InMemoryRepository, season_start: datetime) -> None:
	previous_start = repo.seasons[PREVIOUS_SEASON_ID].start_date
	repo.vegetation.extend(
		[
			vegetation_signal(previous_start + timedelta(days=3), 0.5, season_id=PREVIOUS_SEASON_ID),
			vegetation_signal(previous_start + timedelta(days=8), 0.7, season_id=PREVIOUS_SEASON_ID),
			vegetation_signal(season_start, 0.1, season_id=OLDER_SEASON_ID),
		]
	)

	baseline = await BaselineResolver(repo, repo).resolve(FIELD_ID, SEASON_ID)

	assert baseline.baseline_type == BaselineTypeEnum.previous_season
	assert baseline.ndvi == pytest.approx(0.6)


@pytest.mark.asyncio
async def test_empty_previous_season_falls_back_to_history(repo: InMemoryRepository, season_start: datetime) -> None:
	older_start = repo.seasons[OLDER_SEASON_ID].start_date
	repo.vegetation.extend(
		[
			vegetation_signal(older_start + timedelta(days=2), 0.4, season_id=OLDER_SEASON_ID),
			vegetation_signal(season_start + timedelta(days=2), 0.9, season_id=SEASON_ID),
		]
	)

	baseline = await BaselineResolver(repo, repo).resolve(FIELD_ID, SEASON_ID)

	assert baseline.baseline_type == BaselineTypeEnum.historical_mean
	assert baseline.ndvi == pytest.approx(0.4)


@pytest.mark.asyncio
async def test_history_can_include_evaluated_season(repo: InMemoryRepository, season_start: datetime) -> None:
	older_start = repo.seasons[OLDER_SEASON_ID].start_date
	repo.vegetation.extend(
		[
			vegetation_signal(older_start + timedelta(days=2), 0.4, season_id=OLDER_SEASON_ID),
			vegetation_signal(season_start + timedelta(days=2), 0.8, season_id=SEASON_ID),
		]
	)

	resolver = BaselineResolver(repo, repo, exclude_current_season=False)
	baseline = await resolver.resolve(FIELD_ID, SEASON_ID)

	assert baseline.baseline_type == BaselineTypeEnum.historical_mean
	assert baseline.ndvi == pytest.approx(0.6)


@pytest.mark.asyncio
async def test_no_history_yields_no_baseline(repo: InMemoryRepository, season_start: datetime) -> None:
	repo.vegetation.append(vegetation_signal(season_start, 0.5))

	baseline = await BaselineResolver(repo, repo).resolve(FIELD_ID, SEASON_ID)

	assert baseline == NO_BASELINE


@pytest.mark.asyncio
async def test_earliest_season_has_no_previous(repo: InMemoryRepository) -> None:
	assert await repo.get_previous_season(OLDER_SEASON_ID) is None
	baseline = await BaselineResolver(repo, repo).resolve(FIELD_ID, OLDER_SEASON_ID)
	assert baseline.ndvi is None
	assert baseline.baseline_type is None
