"""Reliable Prediction Extent (RPE) computation."""

from .rpe import (
    SINGLE_VARIABLE,
    PREDICTOR_BASED,
    HULL_TESTS,
    hull_outline,
    nearest_sample_distances,
    compute_rpe,
    rpe_by_distance,
    rpe_by_uncertainty,
    kernel_density,
    rpe_by_kernel_density
)

__all__ = [
    'SINGLE_VARIABLE',
    'PREDICTOR_BASED',
    'HULL_TESTS',
    'hull_outline',
    'nearest_sample_distances',
    'compute_rpe',
    'rpe_by_distance',
    'rpe_by_uncertainty',
    'kernel_density',
    'rpe_by_kernel_density'
]
