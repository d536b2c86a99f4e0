"""Inverse Distance Weighting (IDW) interpolation onto a lattice."""

import numpy as np

from ..exceptions import MissingVariableError, EmptyResultError
from ..grid.cells import GridCell
from ..utils.geometry import planar_distances
from ..utils.parallel import map_chunks

# Samples closer than this (degrees) dictate the estimate outright
COINCIDENT_DISTANCE = 1e-4


def numeric_samples(dataset, target_variable):
    """
    Coordinates and values of the points carrying a numeric target.

    Returns
    -------
    coords : ndarray of shape (m, 2)
        [lat, lng] of usable points, in dataset order
    values : ndarray of shape (m,)
        Target values
    """
    values = dataset.values(target_variable)
    mask = ~np.isnan(values)
    return dataset.coordinates()[mask], values[mask]


def idw_estimate(lat, lng, coords, values, power=2):
    """
    IDW estimate at a single location.

    A sample within ``COINCIDENT_DISTANCE`` of the location dominates
    completely: its value is returned and no other sample contributes. When
    several samples coincide, the first in order wins. Otherwise the
    estimate is ``sum(w_i * z_i) / sum(w_i)`` with ``w_i = 1 / d_i**power``.

    Parameters
    ----------
    lat, lng : float
        Target location in degrees
    coords : ndarray of shape (m, 2)
        Known [lat, lng] locations
    values : ndarray of shape (m,)
        Known values
    power : float, optional
        Distance decay exponent (default: 2)

    Returns
    -------
    float or None
        The estimate, or None when there are no known samples

    Examples
    --------
    >>> coords = np.array([[0.0, 0.0], [0.0, 2.0]])
    >>> idw_estimate(0.0, 1.0, coords, np.array([10.0, 30.0]))
    20.0
    >>> idw_estimate(0.0, 0.0, coords, np.array([10.0, 30.0]))
    10.0
    """
    if len(values) == 0:
        return None

    distances = planar_distances(lat, lng, coords)
    coincident = np.flatnonzero(distances < COINCIDENT_DISTANCE)
    if coincident.size > 0:
        return float(values[coincident[0]])

    weights = 1.0 / distances ** power
    weight_sum = weights.sum()
    if weight_sum <= 0:
        return None
    return float(np.sum(weights * values) / weight_sum)


def _idw_chunk(cell_coords, coords, values, power):
    estimates = []
    for lat, lng in cell_coords:
        estimate = idw_estimate(lat, lng, coords, values, power)
        estimates.append(np.nan if estimate is None else estimate)
    return estimates


def interpolate(grid, dataset, target_variable, power=2, n_jobs=1,
                checkpoint=None, verbose=False):
    """
    Interpolate ``target_variable`` onto every cell of ``grid``.

    Points without a numeric target value are ignored. Cells that receive no
    weight at all are dropped from the output rather than filled.

    Parameters
    ----------
    grid : Grid
        Lattice from :func:`rpe_analysis.grid.build_grid`
    dataset : Dataset
        Sample points
    target_variable : str
        Attribute to interpolate
    power : float, optional
        Distance decay exponent (default: 2)
    n_jobs : int, optional
        joblib workers for cell evaluation (default: 1)
    checkpoint : callable, optional
        Progress/cancellation hook called between cell chunks
    verbose : bool, optional
        Print progress (default: False)

    Returns
    -------
    tuple of GridCell
        Cells in row-major order carrying ``value``

    Raises
    ------
    MissingVariableError
        If no point has ``target_variable`` in its attributes
    EmptyResultError
        If no cell receives a value
    """
    if not dataset.has_variable(target_variable):
        raise MissingVariableError(
            f"Target variable '{target_variable}' not found in dataset"
        )

    coords, values = numeric_samples(dataset, target_variable)
    cell_coords = grid.coordinates()

    if verbose:
        print(f"IDW: {len(cell_coords)} cells from {len(values)} samples (power={power})")

    estimates = map_chunks(_idw_chunk, cell_coords, coords, values, power,
                           n_jobs=n_jobs, checkpoint=checkpoint, verbose=verbose,
                           desc='IDW')

    cells = tuple(
        GridCell(lat=float(lat), lng=float(lng), value=float(value))
        for (lat, lng), value in zip(cell_coords, estimates)
        if not np.isnan(value)
    )

    if not cells:
        raise EmptyResultError(
            "No valid grid points generated. Check your data and cell size."
        )

    if verbose:
        print(f"Generated {len(cells)} grid cells")

    return cells
