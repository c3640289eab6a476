"""Crop-health status from the most recent vegetation signal."""

from __future__ import annotations

from fieldsight.models.enums import HealthStatusEnum
from fieldsight.schemas.inference import InferenceInput, StatusResult, StatusThresholds

HEALTHY_NDVI_THRESHOLD = 0.6
WATCH_NDVI_THRESHOLD = 0.3


def status_thresholds() -> StatusThresholds:
	return StatusThresholds(healthy=HEALTHY_NDVI_THRESHOLD, watch=WATCH_NDVI_THRESHOLD)


def classify_ndvi(ndvi_mean: float) -> HealthStatusEnum:
	if ndvi_mean >= HEALTHY_NDVI_THRESHOLD:
		return HealthStatusEnum.healthy
	if ndvi_mean >= WATCH_NDVI_THRESHOLD:
		return HealthStatusEnum.watch
	return HealthStatusEnum.stressed


def infer_crop_health_status(inference_input: InferenceInput) -> StatusResult | None:
	"""Classify the last vegetation signal; ``None`` when there is none."""
	if not inference_input.vegetation_signals:
		return None

	most_recent = inference_input.vegetation_signals[-1]
	ndvi_mean = most_recent.ndvi.mean
	return StatusResult(
		status=classify_ndvi(ndvi_mean),
		ndvi_mean=ndvi_mean,
		threshold=status_thresholds(),
	)
