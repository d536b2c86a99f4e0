"""Local prediction uncertainty for predictor-based analyses."""

import numpy as np

from ..utils.geometry import planar_distances
from ..utils.parallel import map_chunks
from .idw import numeric_samples

DEFAULT_EPSILON = 1e-3


def _uncertainty_chunk(cell_rows, coords, values, std, epsilon, power):
    results = []
    for lat, lng, cell_value in cell_rows:
        distances = planar_distances(lat, lng, coords)
        weights = 1.0 / (distances + epsilon) ** power
        weighted_error = np.sum(weights * np.abs(values - cell_value)) / np.sum(weights)
        results.append(float(np.clip(weighted_error / std, 0.0, 1.0)))
    return results


def estimate_uncertainty(cells, dataset, target_variable, epsilon=DEFAULT_EPSILON,
                         power=1, n_jobs=1, checkpoint=None, verbose=False):
    """
    Normalized local disagreement between samples and the surface.

    For each cell, the inverse-distance weighted mean of
    ``|observed - cell.value|`` over all samples is divided by the global
    standard deviation of the target and clipped to [0, 1]. Weights are
    ``1 / (d + epsilon)**power``, so a sample on top of the cell gets a large
    but finite weight and the result there is close to, not exactly, zero.

    Parameters
    ----------
    cells : sequence of GridCell
        Interpolated surface
    dataset : Dataset
        Sample points
    target_variable : str
        Interpolated attribute
    epsilon : float, optional
        Additive distance offset in degrees (default: 1e-3)
    power : float, optional
        Distance decay exponent (default: 1)
    n_jobs : int, optional
        joblib workers (default: 1)
    checkpoint : callable, optional
        Progress/cancellation hook called between cell chunks
    verbose : bool, optional
        Print progress (default: False)

    Returns
    -------
    tuple of GridCell
        Copies of ``cells`` with ``uncertainty`` in [0, 1]

    Notes
    -----
    A constant target (zero standard deviation) has no spread to normalize
    by; every cell then gets zero uncertainty.
    """
    coords, values = numeric_samples(dataset, target_variable)
    if len(values) == 0:
        raise ValueError(f"No numeric values for '{target_variable}'")

    std = float(np.std(values))
    if verbose:
        print(f"Uncertainty: mean={np.mean(values):.4f}, std={std:.4f}")

    if std == 0:
        return tuple(c.with_fields(uncertainty=0.0) for c in cells)

    rows = np.array([[c.lat, c.lng, c.value] for c in cells], dtype=float).reshape(-1, 3)
    uncertainties = map_chunks(_uncertainty_chunk, rows, coords, values, std,
                               epsilon, power, n_jobs=n_jobs, checkpoint=checkpoint,
                               verbose=verbose, desc='Uncertainty')

    return tuple(c.with_fields(uncertainty=u) for c, u in zip(cells, uncertainties))
