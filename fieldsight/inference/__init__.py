"""Deterministic inference engine: window assembly, status, category, confidence, provenance."""

from fieldsight.inference.assemble import assemble_inference, to_inference_response
from fieldsight.inference.categories import emit_inference_category
from fieldsight.inference.confidence import compute_confidence, confidence_level, score_confidence
from fieldsight.inference.provenance import reconstruct_provenance
from fieldsight.inference.status import infer_crop_health_status
from fieldsight.inference.window import (
	SignalWindowAssembler,
	build_inference_input,
	calculate_signal_completeness,
)

__all__ = [
	"SignalWindowAssembler",
	"assemble_inference",
	"build_inference_input",
	"calculate_signal_completeness",
	"compute_confidence",
	"confidence_level",
	"emit_inference_category",
	"infer_crop_health_status",
	"reconstruct_provenance",
	"score_confidence",
	"to_inference_response",
]
