"""Inference category emission.

The category decision is a first-match rule table so the provenance
reconstructor can name exactly which rule produced the emitted category.
"""

from __future__ import annotations

from dataclasses import dataclass

from fieldsight.models.enums import HealthStatusEnum, InferenceCategoryEnum
from fieldsight.schemas.inference import CategoryResult, InferenceInput, StatusResult

MIN_COMPLETENESS_FOR_STATUS = 50

NO_VEGETATION_MESSAGE = "No vegetation data available. Next observation needed to assess crop health."


@dataclass(frozen=True, slots=True)
class CategoryRule:
	rule_id: str
	rule_name: str
	category: InferenceCategoryEnum


NO_STATUS_RULE = CategoryRule("category-001", "No status → forecast", InferenceCategoryEnum.forecast)
LOW_COMPLETENESS_RULE = CategoryRule(
	"category-002",
	f"Completeness < {MIN_COMPLETENESS_FOR_STATUS}% → forecast",
	InferenceCategoryEnum.forecast,
)
STATUS_RULES: dict[HealthStatusEnum, CategoryRule] = {
	HealthStatusEnum.healthy: CategoryRule(
		"category-003", "Status healthy → observation", InferenceCategoryEnum.observation
	),
	HealthStatusEnum.watch: CategoryRule("category-004", "Status watch → advisory", InferenceCategoryEnum.advisory),
	HealthStatusEnum.stressed: CategoryRule("category-005", "Status stressed → alert", InferenceCategoryEnum.alert),
}


def select_category_rule(status: StatusResult | None, signal_completeness: int) -> CategoryRule:
	if status is None:
		return NO_STATUS_RULE
	if signal_completeness < MIN_COMPLETENESS_FOR_STATUS:
		return LOW_COMPLETENESS_RULE
	return STATUS_RULES[status.status]


def emit_inference_category(status: StatusResult | None, inference_input: InferenceInput) -> CategoryResult:
	completeness = inference_input.signal_completeness
	rule = select_category_rule(status, completeness)

	if rule is NO_STATUS_RULE:
		message = NO_VEGETATION_MESSAGE
	elif rule is LOW_COMPLETENESS_RULE:
		message = (
			f"Limited data coverage ({completeness}%). "
			"Additional observations recommended for accurate assessment."
		)
	else:
		message = _status_message(status)  # type: ignore[arg-type]

	return CategoryResult(category=rule.category, message=message)


def _status_message(status: StatusResult) -> str:
	ndvi = f"{status.ndvi_mean:.2f}"
	if status.status == HealthStatusEnum.healthy:
		return f"Crops are healthy with NDVI of {ndvi}. Vegetation is vigorous."
	if status.status == HealthStatusEnum.watch:
		return f"Crops show moderate vegetation with NDVI of {ndvi}. Monitor for changes."
	return f"Crops are stressed with NDVI of {ndvi}. Immediate attention recommended."
