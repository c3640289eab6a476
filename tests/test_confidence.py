from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from conftest import FIELD_ID, vegetation_signal

from fieldsight.inference.confidence import (
	compute_confidence,
	confidence_level,
	score_confidence,
	temporal_factor,
)
from fieldsight.models.enums import ConfidenceLevelEnum, DataQualityEnum
from fieldsight.schemas.inference import InferenceInput

START = datetime(2024, 3, 1, tzinfo=UTC)


def _input(qualities: list[DataQualityEnum], completeness: int) -> InferenceInput:
	return InferenceInput(
		field_id=FIELD_ID,
		window_start=START,
		window_end=START + timedelta(days=30),
		vegetation_signals=[
			vegetation_signal(START + timedelta(days=index), 0.5, data_quality=quality)
			for index, quality in enumerate(qualities)
		],
		signal_completeness=completeness,
	)


@pytest.mark.parametrize(
	("value", "expected"),
	[
		(70, ConfidenceLevelEnum.high),
		(69, ConfidenceLevelEnum.medium),
		(40, ConfidenceLevelEnum.medium),
		(39, ConfidenceLevelEnum.low),
		(0, ConfidenceLevelEnum.low),
		(100, ConfidenceLevelEnum.high),
	],
)
def test_confidence_level_boundaries(value: int, expected: ConfidenceLevelEnum) -> None:
	assert confidence_level(value) == expected


def test_full_confidence_for_complete_high_quality_window() -> None:
	breakdown = score_confidence(_input([DataQualityEnum.high] * 3, completeness=100))
	assert breakdown.completeness_factor == 40.0
	assert breakdown.quality_factor == 30.0
	assert breakdown.temporal_factor == 30.0
	assert breakdown.score == 100


def test_mixed_quality_scores_partial_quality_points() -> None:
	inference_input = _input(
		[DataQualityEnum.high, DataQualityEnum.low, DataQualityEnum.medium, DataQualityEnum.high],
		completeness=55,
	)
	breakdown = score_confidence(inference_input)
	assert breakdown.completeness_factor == pytest.approx(22.0)
	assert breakdown.quality_factor == pytest.approx(15.0)
	assert breakdown.temporal_factor == 30.0
	assert compute_confidence(inference_input) == 67


def test_no_vegetation_only_completeness_counts() -> None:
	breakdown = score_confidence(_input([], completeness=25))
	assert breakdown.quality_factor == 0.0
	assert breakdown.temporal_factor == 0.0
	assert breakdown.score == 10


@pytest.mark.parametrize(("count", "points"), [(0, 0.0), (1, 10.0), (2, 20.0), (3, 30.0), (7, 30.0)])
def test_temporal_factor_steps(count: int, points: float) -> None:
	assert temporal_factor(count) == points
