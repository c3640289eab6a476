"""Performance-deviation insights: baseline resolution and generation."""

from fieldsight.insights.baseline import Baseline, BaselineResolver
from fieldsight.insights.generate import (
	DeviationInsightGenerator,
	classify_severity,
	compute_delta,
	suggest_action,
)

__all__ = [
	"Baseline",
	"BaselineResolver",
	"DeviationInsightGenerator",
	"classify_severity",
	"compute_delta",
	"suggest_action",
]
