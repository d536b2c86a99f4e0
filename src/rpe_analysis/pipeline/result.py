"""Immutable analysis result handed to rendering and export collaborators."""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from ..evaluation.metrics import Metrics
from ..grid.cells import GridCell, cells_to_dataframe
from .config import AnalysisConfig

LAYERS = ('continuous', 'classified', 'accuracy', 'residuals', 'uncertainty', 'rpe')


@dataclass(frozen=True)
class ContinuousSurface:
    """Interpolated surface with its value range for color scaling."""

    grid: Tuple[GridCell, ...]
    min_val: float
    max_val: float


@dataclass(frozen=True)
class AnalysisResult:
    """
    Outcome of one analysis run.

    Exactly one of ``accuracy`` (single-variable) and ``residuals``
    (predictor-based) is populated. ``uncertainty`` is only present for
    predictor-based runs and ``classified`` only when classification was
    requested. ``rpe`` is always a subset of ``continuous.grid``.
    """

    continuous: ContinuousSurface
    rpe: Tuple[GridCell, ...]
    metrics: Metrics
    target_variable: str
    analysis_type: str
    predictor_variables: FrozenSet[str] = frozenset()
    classified: Optional[Tuple[GridCell, ...]] = None
    class_breaks: Optional[Tuple[float, ...]] = None
    accuracy: Optional[Tuple[GridCell, ...]] = None
    residuals: Optional[Tuple[GridCell, ...]] = None
    uncertainty: Optional[Tuple[GridCell, ...]] = None
    config: Optional[AnalysisConfig] = None

    def layer(self, name):
        """Cells of a named layer, or None when the run did not produce it."""
        if name not in LAYERS:
            raise KeyError(f"Unknown layer '{name}'. Choose from {LAYERS}")
        if name == 'continuous':
            return self.continuous.grid
        return getattr(self, name)

    def available_layers(self):
        return [name for name in LAYERS if self.layer(name) is not None]

    def layer_to_dataframe(self, name):
        """Tabular view of a layer for export collaborators."""
        cells = self.layer(name)
        if cells is None:
            raise KeyError(f"Layer '{name}' was not produced by this run")
        return cells_to_dataframe(cells)

    def summary(self):
        """Short multi-line description of the run."""
        lines = [
            f"Target: {self.target_variable} ({self.analysis_type})",
            f"Surface: {len(self.continuous.grid)} cells, "
            f"range {self.continuous.min_val:.4f} to {self.continuous.max_val:.4f}",
            f"RPE: {len(self.rpe)} reliable cells",
            f"Metrics: RMSE={self.metrics.rmse:.4f}, MAE={self.metrics.mae:.4f}, "
            f"R2={self.metrics.r2:.4f}, bias={self.metrics.bias:.4f}",
            f"Layers: {', '.join(self.available_layers())}",
        ]
        return "\n".join(lines)
