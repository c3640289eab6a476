"""Deterministic performance-deviation insight generation.

Same stored signals and season always yield the same severity,
confidence, summary and evidence.  The generator never persists anything;
``InsightService`` owns the get-or-generate contract.
"""

from __future__ import annotations

import math

from fieldsight.errors import require_identifier
from fieldsight.inference.assemble import observation_count_sentence
from fieldsight.inference.confidence import confidence_level
from fieldsight.inference.window import SignalWindowAssembler, round_half_up
from fieldsight.insights.baseline import Baseline, BaselineResolver
from fieldsight.models.enums import BaselineTypeEnum, ConfidenceLevelEnum, InsightTypeEnum, SeverityEnum
from fieldsight.repositories.base import SignalRepository
from fieldsight.schemas.insights import InsightDraft, InsightEvidence, SeverityThresholds

HIGH_SEVERITY_DELTA = -0.15
MEDIUM_SEVERITY_DELTA = -0.08

# delta is stored at this precision and severity is judged on the stored value
DELTA_DECIMALS = 6
DELTA_PERCENT_DECIMALS = 2

_BASELINE_LABELS = {
	BaselineTypeEnum.previous_season: "previous season",
	BaselineTypeEnum.historical_mean: "historical average",
}


def severity_thresholds() -> SeverityThresholds:
	return SeverityThresholds(high_severity=HIGH_SEVERITY_DELTA, medium_severity=MEDIUM_SEVERITY_DELTA)


def round_to(value: float, decimals: int) -> float:
	if not math.isfinite(value):
		return value
	scale = 10**decimals
	return round_half_up(value * scale) / scale


def compute_delta(current_ndvi: float | None, baseline_ndvi: float | None) -> tuple[float | None, float | None]:
	"""Return ``(delta, delta_percent)``; percent is ``None`` for a zero baseline."""
	if current_ndvi is None or baseline_ndvi is None:
		return None, None

	delta = round_to(current_ndvi - baseline_ndvi, DELTA_DECIMALS)
	if baseline_ndvi == 0:
		return delta, None
	return delta, delta / baseline_ndvi * 100


def classify_severity(delta: float | None) -> SeverityEnum:
	if delta is None:
		return SeverityEnum.low
	if delta <= HIGH_SEVERITY_DELTA:
		return SeverityEnum.high
	if delta <= MEDIUM_SEVERITY_DELTA:
		return SeverityEnum.medium
	return SeverityEnum.low


def render_summary(
	current_ndvi: float | None,
	baseline: Baseline,
	delta: float | None,
	delta_percent: float | None,
	severity: SeverityEnum,
	signal_completeness: int,
	vegetation_count: int,
	weather_count: int,
) -> str:
	parts: list[str] = []
	baseline_ndvi = baseline.ndvi

	if current_ndvi is None:
		parts.append("Insufficient vegetation data available for this season.")
	elif baseline_ndvi is None:
		parts.append(f"Current season NDVI is {current_ndvi:.3f}. No baseline available for comparison.")
	elif delta is None or delta_percent is None:
		parts.append(f"Current season NDVI is {current_ndvi:.3f}. Baseline NDVI is {baseline_ndvi:.3f}.")
	else:
		label = _BASELINE_LABELS.get(baseline.baseline_type, "baseline")  # type: ignore[arg-type]
		comparison = f"(NDVI: {current_ndvi:.3f} vs {baseline_ndvi:.3f})"
		if delta < 0:
			parts.append(f"Field performance is {abs(delta_percent):.1f}% below {label} {comparison}.")
		elif delta > 0:
			parts.append(f"Field performance is {delta_percent:.1f}% above {label} {comparison}.")
		else:
			parts.append(f"Field performance matches {label} (NDVI: {current_ndvi:.3f}).")

	parts.append(f"Performance deviation indicates {severity.value} severity.")

	if signal_completeness < 50:
		parts.append(f"Limited data coverage ({signal_completeness}%) may affect assessment reliability.")
	elif signal_completeness >= 80:
		parts.append(f"Assessment based on comprehensive data coverage ({signal_completeness}%).")
	else:
		parts.append(f"Assessment based on {signal_completeness}% data coverage.")

	parts.append(observation_count_sentence(vegetation_count, weather_count))
	return " ".join(parts)


def suggest_action(
	severity: SeverityEnum,
	confidence: ConfidenceLevelEnum,
	baseline_ndvi: float | None,
) -> str | None:
	if confidence == ConfidenceLevelEnum.low:
		return "Consider collecting additional field observations to improve assessment confidence."
	if baseline_ndvi is None:
		return "Establish baseline data for future performance comparisons."
	if severity == SeverityEnum.high:
		return (
			"Review field conditions and consider immediate intervention. "
			"Verify ground truth through field scouting."
		)
	if severity == SeverityEnum.medium:
		return "Monitor field conditions closely. Consider field scouting to verify satellite observations."
	return None


class DeviationInsightGenerator:
	"""Builds a performance-deviation ``InsightDraft`` for a field and season.

	``season_id`` is mandatory: a blank value raises ``ValidationError``
	and no season is ever inferred from dates.
	"""

	def __init__(
		self,
		assembler: SignalWindowAssembler,
		signals: SignalRepository,
		baseline_resolver: BaselineResolver,
	):
		self.assembler = assembler
		self.signals = signals
		self.baseline_resolver = baseline_resolver

	async def generate(self, field_id: str, season_id: str) -> InsightDraft:
		field_id = require_identifier(field_id, "field_id")
		season_id = require_identifier(season_id, "season_id")

		window = await self.assembler.assemble_for_season(field_id, season_id)
		current_ndvi = await self.signals.get_season_mean_ndvi(field_id, season_id)
		baseline = await self.baseline_resolver.resolve(field_id, season_id)

		delta, delta_percent = compute_delta(current_ndvi, baseline.ndvi)
		severity = classify_severity(delta)
		confidence = confidence_level(window.signal_completeness)
		vegetation_count = len(window.vegetation_signals)
		weather_count = len(window.weather_signals)

		summary = render_summary(
			current_ndvi,
			baseline,
			delta,
			delta_percent,
			severity,
			window.signal_completeness,
			vegetation_count,
			weather_count,
		)
		evidence = InsightEvidence(
			current_ndvi=current_ndvi,
			baseline_ndvi=baseline.ndvi,
			baseline_type=baseline.baseline_type,
			delta=delta,
			delta_percent=round_to(delta_percent, DELTA_PERCENT_DECIMALS) if delta_percent is not None else None,
			signal_completeness=window.signal_completeness,
			vegetation_signal_count=vegetation_count,
			weather_signal_count=weather_count,
			thresholds=severity_thresholds(),
		)
		return InsightDraft(
			type=InsightTypeEnum.performance_deviation,
			severity=severity,
			confidence=confidence,
			summary=summary,
			evidence=evidence,
			suggested_action=suggest_action(severity, confidence, baseline.ndvi),
		)
