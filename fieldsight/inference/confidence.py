"""Deterministic confidence scoring.

Three capped factors are summed and rounded:

* completeness: up to 40 points (0.4 per completeness percent)
* quality: up to 30 points, share of high-quality vegetation signals
* temporal density: 10/20/30 points for 1/2/3+ vegetation signals

Provenance replays ``score_confidence`` so its factor outcomes match the
score exactly.
"""

from __future__ import annotations

from fieldsight.inference.window import round_half_up
from fieldsight.models.enums import ConfidenceLevelEnum, DataQualityEnum
from fieldsight.schemas.inference import ConfidenceBreakdown, InferenceInput

MAX_COMPLETENESS_POINTS = 40.0
COMPLETENESS_WEIGHT = 0.4
MAX_QUALITY_POINTS = 30.0

HIGH_CONFIDENCE_FLOOR = 70
MEDIUM_CONFIDENCE_FLOOR = 40


def completeness_factor(signal_completeness: int) -> float:
	return min(MAX_COMPLETENESS_POINTS, signal_completeness * COMPLETENESS_WEIGHT)


def quality_factor(inference_input: InferenceInput) -> float:
	signals = inference_input.vegetation_signals
	if not signals:
		return 0.0
	high_quality = sum(1 for signal in signals if signal.data_quality == DataQualityEnum.high)
	return high_quality / len(signals) * MAX_QUALITY_POINTS


def temporal_factor(vegetation_count: int) -> float:
	if vegetation_count >= 3:
		return 30.0
	if vegetation_count == 2:
		return 20.0
	if vegetation_count == 1:
		return 10.0
	return 0.0


def score_confidence(inference_input: InferenceInput) -> ConfidenceBreakdown:
	completeness = completeness_factor(inference_input.signal_completeness)
	quality = quality_factor(inference_input)
	temporal = temporal_factor(len(inference_input.vegetation_signals))

	total = max(0.0, min(100.0, completeness + quality + temporal))
	return ConfidenceBreakdown(
		completeness_factor=completeness,
		quality_factor=quality,
		temporal_factor=temporal,
		score=round_half_up(total),
	)


def compute_confidence(inference_input: InferenceInput) -> int:
	return score_confidence(inference_input).score


def confidence_level(value: int) -> ConfidenceLevelEnum:
	"""Bucket a 0–100 value (score or completeness) into low/medium/high."""
	if value >= HIGH_CONFIDENCE_FLOOR:
		return ConfidenceLevelEnum.high
	if value >= MEDIUM_CONFIDENCE_FLOOR:
		return ConfidenceLevelEnum.medium
	return ConfidenceLevelEnum.low
