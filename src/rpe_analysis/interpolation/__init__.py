"""Spatial interpolation and local uncertainty."""

from .idw import (
    COINCIDENT_DISTANCE,
    numeric_samples,
    idw_estimate,
    interpolate
)
from .uncertainty import estimate_uncertainty

__all__ = [
    'COINCIDENT_DISTANCE',
    'numeric_samples',
    'idw_estimate',
    'interpolate',
    'estimate_uncertainty'
]
