from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from conftest import FIELD_ID, vegetation_signal, weather_signal

from fieldsight.inference.provenance import reconstruct_provenance
from fieldsight.models.enums import DataQualityEnum, InferenceCategoryEnum
from fieldsight.schemas.inference import InferenceInput

START = datetime(2024, 3, 1, tzinfo=UTC)
EMITTED_AT = datetime(2024, 4, 1, 12, 0, tzinfo=UTC)


def _healthy_input() -> InferenceInput:
	return InferenceInput(
		field_id=FIELD_ID,
		window_start=START,
		window_end=START + timedelta(days=30),
		vegetation_signals=[
			vegetation_signal(START + timedelta(days=5), 0.55, data_quality=DataQualityEnum.medium),
			vegetation_signal(START + timedelta(days=10), 0.62),
			vegetation_signal(START + timedelta(days=15), 0.71),
		],
		weather_signals=[weather_signal(START + timedelta(days=day)) for day in range(25)],
		signal_completeness=78,
	)


def test_rule_traces_cover_status_confidence_and_category() -> None:
	provenance = reconstruct_provenance(_healthy_input(), emitted_at=EMITTED_AT)

	rule_ids = [trace.rule_id for trace in provenance.rule_traces]
	assert rule_ids == [
		"status-001",
		"status-002",
		"status-003",
		"status-004",
		"confidence-001",
		"confidence-002",
		"confidence-003",
		"category-003",
	]

	traces = {trace.rule_id: trace for trace in provenance.rule_traces}
	assert traces["status-002"].outcome == "true"
	assert traces["status-004"].evaluated is False
	assert traces["confidence-001"].outcome == pytest.approx(31.2)
	assert traces["confidence-002"].outcome == pytest.approx(20.0)
	assert traces["confidence-003"].rule_name == "Temporal stability (>=3 signals)"
	assert traces["confidence-003"].outcome == 30.0


def test_category_provenance_names_emitting_rule() -> None:
	provenance = reconstruct_provenance(_healthy_input(), emitted_at=EMITTED_AT)

	assert len(provenance.category_provenance) == 1
	category = provenance.category_provenance[0]
	assert category.category == InferenceCategoryEnum.observation
	assert category.emitted_by == ["category-003"]
	assert category.emitted_at == EMITTED_AT


def test_signal_lineage_lists_every_consumed_signal() -> None:
	provenance = reconstruct_provenance(_healthy_input(), emitted_at=EMITTED_AT)

	vegetation = [item for item in provenance.signal_lineage if item.signal_type == "vegetation"]
	weather = [item for item in provenance.signal_lineage if item.signal_type == "weather"]
	assert len(vegetation) == 3
	assert len(weather) == 25
	assert all(item.present for item in provenance.signal_lineage)
	assert vegetation[0].data_quality == DataQualityEnum.medium


def test_empty_window_traces() -> None:
	empty = InferenceInput(
		field_id=FIELD_ID,
		window_start=START,
		window_end=START + timedelta(days=30),
		signal_completeness=0,
	)

	provenance = reconstruct_provenance(empty, emitted_at=EMITTED_AT)

	assert [trace.rule_id for trace in provenance.rule_traces] == ["status-001", "confidence-001", "category-001"]
	assert provenance.rule_traces[0].evaluated is False
	assert provenance.signal_lineage == []
	assert provenance.category_provenance[0].category == InferenceCategoryEnum.forecast


def test_low_completeness_uses_forecast_rule() -> None:
	inference_input = _healthy_input().model_copy(update={"signal_completeness": 30})

	provenance = reconstruct_provenance(inference_input, emitted_at=EMITTED_AT)

	assert provenance.rule_traces[-1].rule_id == "category-002"
	assert provenance.category_provenance[0].category == InferenceCategoryEnum.forecast


def test_reconstruction_is_deterministic() -> None:
	first = reconstruct_provenance(_healthy_input(), emitted_at=EMITTED_AT)
	second = reconstruct_provenance(_healthy_input(), emitted_at=EMITTED_AT)
	assert first == second


def test_emitted_at_defaults_to_now() -> None:
	before = datetime.now(UTC)
	provenance = reconstruct_provenance(_healthy_input())
	assert provenance.category_provenance[0].emitted_at >= before
