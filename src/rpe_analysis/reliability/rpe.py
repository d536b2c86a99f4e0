"""Reliable Prediction Extent (RPE) masking."""

import numpy as np
from scipy.spatial.distance import cdist

from ..utils.conversions import km_to_degrees
from ..utils.geometry import (
    convex_hull, padded_bounds, bounds_contain, point_in_convex_polygon
)

SINGLE_VARIABLE = 'single-variable'
PREDICTOR_BASED = 'predictor-based'
HULL_TESTS = ('bounds', 'polygon')

DEFAULT_HULL_PADDING = 0.1
DEFAULT_MAX_DISTANCE_KM = 10.0
DEFAULT_UNCERTAINTY_THRESHOLD = 0.3


def hull_outline(dataset):
    """Convex hull of the sample locations as a list of (lat, lng)."""
    return [(p.lat, p.lng) for p in convex_hull(list(dataset))]


def nearest_sample_distances(cells, dataset):
    """Planar distance (degrees) from each cell to its nearest sample."""
    if len(cells) == 0:
        return np.empty(0)
    cell_coords = np.array([[c.lat, c.lng] for c in cells], dtype=float)
    return cdist(cell_coords, dataset.coordinates(), metric='euclidean').min(axis=1)


def _hull_membership(cells, dataset, hull_padding, hull_test):
    hull = convex_hull(list(dataset))
    box = padded_bounds(hull, hull_padding)
    if hull_test == 'polygon' and len(hull) >= 3:
        return np.array([point_in_convex_polygon(hull, c.lat, c.lng) for c in cells],
                        dtype=bool)
    return np.array([bounds_contain(box, c.lat, c.lng) for c in cells], dtype=bool)


def compute_rpe(cells, dataset, uncertainty_cells=None, analysis_type=SINGLE_VARIABLE,
                hull_padding=DEFAULT_HULL_PADDING, max_distance_km=DEFAULT_MAX_DISTANCE_KM,
                uncertainty_threshold=DEFAULT_UNCERTAINTY_THRESHOLD, hull_test='bounds',
                verbose=False):
    """
    Cells where the surface is considered reliable.

    A cell is kept only when every applicable criterion holds:

    1. Hull: inside the convex hull of the samples. The default
       ``hull_test='bounds'`` tests the hull's bounding box padded by
       ``hull_padding`` of its span, a coarse stand-in for polygon
       containment. ``hull_test='polygon'`` tests the hull itself.
    2. Distance: nearest sample within ``max_distance_km`` (converted with
       111.32 km per degree).
    3. Uncertainty: predictor-based runs only; the cell's uncertainty,
       matched by position in ``uncertainty_cells``, is at most
       ``uncertainty_threshold``. Single-variable runs always pass.

    Parameters
    ----------
    cells : sequence of GridCell
        Interpolated surface
    dataset : Dataset
        Sample points
    uncertainty_cells : sequence of GridCell, optional
        Output of :func:`estimate_uncertainty`, aligned with ``cells``
    analysis_type : {'single-variable', 'predictor-based'}
    hull_padding : float, optional
        Padding ratio for the bounds hull test (default: 0.1)
    max_distance_km : float, optional
        Distance threshold in km (default: 10)
    uncertainty_threshold : float, optional
        Maximum normalized uncertainty (default: 0.3)
    hull_test : {'bounds', 'polygon'}
        Hull containment test (default: 'bounds')
    verbose : bool, optional
        Print the number of reliable cells (default: False)

    Returns
    -------
    tuple of GridCell
        Subset of ``cells`` (same order) with ``reliable=True``
    """
    if hull_test not in HULL_TESTS:
        raise ValueError(f"Unknown hull_test '{hull_test}'. Choose from {HULL_TESTS}")
    if len(cells) == 0:
        return ()

    in_hull = _hull_membership(cells, dataset, hull_padding, hull_test)
    within_distance = nearest_sample_distances(cells, dataset) <= km_to_degrees(max_distance_km)

    low_uncertainty = np.ones(len(cells), dtype=bool)
    if analysis_type == PREDICTOR_BASED and uncertainty_cells is not None:
        if len(uncertainty_cells) != len(cells):
            raise ValueError(
                f"Uncertainty layer has {len(uncertainty_cells)} cells, surface has {len(cells)}"
            )
        low_uncertainty = np.array(
            [u.uncertainty is None or u.uncertainty <= uncertainty_threshold
             for u in uncertainty_cells], dtype=bool
        )

    reliable = in_hull & within_distance & low_uncertainty
    rpe = tuple(c.with_fields(reliable=True) for c, keep in zip(cells, reliable) if keep)

    if verbose:
        print(f"RPE calculated: {len(rpe)} reliable points out of {len(cells)} total "
              f"({analysis_type})")

    return rpe


def rpe_by_distance(cells, dataset, max_distance_km=DEFAULT_MAX_DISTANCE_KM):
    """Cells whose nearest sample is within ``max_distance_km``."""
    distances = nearest_sample_distances(cells, dataset)
    threshold = km_to_degrees(max_distance_km)
    return tuple(c.with_fields(reliable=True)
                 for c, d in zip(cells, distances) if d <= threshold)


def rpe_by_uncertainty(uncertainty_cells, threshold=DEFAULT_UNCERTAINTY_THRESHOLD):
    """Cells whose uncertainty is at most ``threshold``; missing counts as 0."""
    return tuple(c.with_fields(reliable=True) for c in uncertainty_cells
                 if (c.uncertainty or 0.0) <= threshold)


def kernel_density(cells, dataset, bandwidth=0.1):
    """
    Gaussian kernel density of the samples at each cell.

    ``sum(exp(-(d / h)**2 / 2)) / (n * h * sqrt(2 * pi))`` with planar
    degree distances ``d`` and bandwidth ``h`` in degrees.
    """
    if len(cells) == 0:
        return np.empty(0)
    cell_coords = np.array([[c.lat, c.lng] for c in cells], dtype=float)
    distances = cdist(cell_coords, dataset.coordinates(), metric='euclidean')
    kernel = np.exp(-((distances / bandwidth) ** 2) / 2).sum(axis=1)
    return kernel / (len(dataset) * bandwidth * np.sqrt(2 * np.pi))


def rpe_by_kernel_density(cells, dataset, bandwidth=0.1, threshold=0.5):
    """Cells where the sample kernel density reaches ``threshold``."""
    density = kernel_density(cells, dataset, bandwidth)
    return tuple(c.with_fields(reliable=True)
                 for c, rho in zip(cells, density) if rho >= threshold)
