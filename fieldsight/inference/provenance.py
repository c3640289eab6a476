"""View-time provenance reconstruction.

Replays an ``InferenceInput`` through the status, confidence and category
rules and records every rule evaluated, every signal consumed, and the
rules behind the emitted category.  Nothing here is persisted; all output
except ``emitted_at`` is identical for identical input.
"""

from __future__ import annotations

from datetime import UTC, datetime

from fieldsight.inference.categories import emit_inference_category, select_category_rule
from fieldsight.inference.confidence import score_confidence
from fieldsight.inference.status import infer_crop_health_status
from fieldsight.schemas.inference import InferenceInput, StatusResult
from fieldsight.schemas.provenance import (
	CategoryProvenance,
	InferenceProvenance,
	RuleTrace,
	SignalLineage,
)


def _bool_outcome(value: bool) -> str:
	return "true" if value else "false"


def _status_traces(inference_input: InferenceInput, status: StatusResult | None) -> list[RuleTrace]:
	traces = [
		RuleTrace(
			rule_id="status-001",
			rule_name="Require vegetation signal",
			evaluated=bool(inference_input.vegetation_signals),
			contributes_to=["status"],
		)
	]
	if status is None:
		return traces

	ndvi = status.ndvi_mean
	healthy = status.threshold.healthy
	watch = status.threshold.watch
	checks = [
		("status-002", f"NDVI >= {healthy} (healthy threshold)", ndvi >= healthy),
		("status-003", f"NDVI >= {watch} (watch threshold)", ndvi >= watch),
		("status-004", f"NDVI < {watch} (stressed threshold)", ndvi < watch),
	]
	for rule_id, rule_name, passed in checks:
		traces.append(
			RuleTrace(
				rule_id=rule_id,
				rule_name=rule_name,
				evaluated=passed,
				outcome=_bool_outcome(passed),
				contributes_to=["status"],
			)
		)
	return traces


def _confidence_traces(inference_input: InferenceInput) -> list[RuleTrace]:
	breakdown = score_confidence(inference_input)
	traces = [
		RuleTrace(
			rule_id="confidence-001",
			rule_name="Signal completeness factor",
			evaluated=True,
			outcome=breakdown.completeness_factor,
			contributes_to=["confidence"],
		)
	]

	vegetation_count = len(inference_input.vegetation_signals)
	if vegetation_count == 0:
		return traces

	traces.append(
		RuleTrace(
			rule_id="confidence-002",
			rule_name="Signal quality factor",
			evaluated=True,
			outcome=breakdown.quality_factor,
			contributes_to=["confidence"],
		)
	)
	if vegetation_count >= 3:
		label = ">=3 signals"
	elif vegetation_count == 2:
		label = "2 signals"
	else:
		label = "1 signal"
	traces.append(
		RuleTrace(
			rule_id="confidence-003",
			rule_name=f"Temporal stability ({label})",
			evaluated=True,
			outcome=breakdown.temporal_factor,
			contributes_to=["confidence"],
		)
	)
	return traces


def _signal_lineage(inference_input: InferenceInput) -> list[SignalLineage]:
	lineage = [
		SignalLineage(signal_type="vegetation", timestamp=signal.timestamp, data_quality=signal.data_quality)
		for signal in inference_input.vegetation_signals
	]
	lineage.extend(
		SignalLineage(signal_type="weather", timestamp=signal.timestamp, data_quality=signal.data_quality)
		for signal in inference_input.weather_signals
	)
	return lineage


def reconstruct_provenance(
	inference_input: InferenceInput,
	emitted_at: datetime | None = None,
) -> InferenceProvenance:
	status = infer_crop_health_status(inference_input)
	category = emit_inference_category(status, inference_input)
	category_rule = select_category_rule(status, inference_input.signal_completeness)

	rule_traces = _status_traces(inference_input, status)
	rule_traces.extend(_confidence_traces(inference_input))
	rule_traces.append(
		RuleTrace(
			rule_id=category_rule.rule_id,
			rule_name=category_rule.rule_name,
			evaluated=True,
			contributes_to=["category"],
		)
	)

	emitted_by = [
		trace.rule_id
		for trace in rule_traces
		if trace.evaluated and "category" in trace.contributes_to
	]
	return InferenceProvenance(
		rule_traces=rule_traces,
		signal_lineage=_signal_lineage(inference_input),
		category_provenance=[
			CategoryProvenance(
				category=category.category,
				emitted_by=emitted_by,
				emitted_at=emitted_at or datetime.now(UTC),
			)
		],
	)
