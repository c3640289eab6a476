"""Legacy inference assembly: status + category + numeric confidence + explanation."""

from __future__ import annotations

from datetime import UTC, datetime

from fieldsight.inference.confidence import compute_confidence, confidence_level
from fieldsight.models.enums import HealthStatusEnum, TrendEnum
from fieldsight.schemas.inference import (
	CategoryResult,
	Inference,
	InferenceInput,
	InferenceMetadata,
	InferenceResponse,
	StatusResult,
)


def _plural(count: int, noun: str) -> str:
	return f"{count} {noun}" + ("" if count == 1 else "s")


def observation_count_sentence(vegetation_count: int, weather_count: int) -> str:
	return (
		f"Analysis includes {_plural(vegetation_count, 'vegetation observation')} "
		f"and {_plural(weather_count, 'weather observation')}."
	)


def generate_explanation(category: CategoryResult, inference_input: InferenceInput) -> str:
	completeness = inference_input.signal_completeness
	parts = [category.message]

	if completeness < 50:
		parts.append(f"Data coverage is limited at {completeness}%, which affects assessment reliability.")
	elif completeness < 80:
		parts.append(f"Assessment based on {completeness}% data coverage.")
	else:
		parts.append(f"Assessment based on comprehensive data coverage ({completeness}%).")

	parts.append(
		observation_count_sentence(
			len(inference_input.vegetation_signals),
			len(inference_input.weather_signals),
		)
	)
	return " ".join(parts)


def assemble_inference(
	status: StatusResult | None,
	category: CategoryResult,
	inference_input: InferenceInput,
	generated_at: datetime | None = None,
) -> Inference:
	return Inference(
		field_id=inference_input.field_id,
		generated_at=generated_at or datetime.now(UTC),
		status=status,
		category=category,
		confidence=compute_confidence(inference_input),
		explanation=generate_explanation(category, inference_input),
		metadata=InferenceMetadata(
			window_start=inference_input.window_start,
			window_end=inference_input.window_end,
			signal_completeness=inference_input.signal_completeness,
			vegetation_signal_count=len(inference_input.vegetation_signals),
			weather_signal_count=len(inference_input.weather_signals),
		),
	)


def to_inference_response(inference: Inference) -> InferenceResponse:
	"""Map the internal Inference onto the canonical response contract.

	A missing status is reported as ``watch`` and the trend is always
	``stable``: no trend modeling exists.
	"""
	status = inference.status.status if inference.status is not None else HealthStatusEnum.watch
	return InferenceResponse(
		field_id=inference.field_id,
		generated_at=inference.generated_at,
		status=status,
		trend=TrendEnum.stable,
		confidence=confidence_level(inference.confidence),
		categories=[inference.category],
		explanation=inference.explanation,
	)
