"""Cross-validation and accuracy metrics."""

from .cross_validation import (
    CV_MODES,
    FoldPrediction,
    fold_ranges,
    cross_validate_predictions,
    cross_validate,
    errors_by_point,
    project_onto_grid
)
from .metrics import Metrics, compute_metrics

__all__ = [
    'CV_MODES',
    'FoldPrediction',
    'fold_ranges',
    'cross_validate_predictions',
    'cross_validate',
    'errors_by_point',
    'project_onto_grid',
    'Metrics',
    'compute_metrics'
]
