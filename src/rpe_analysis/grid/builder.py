"""Regular lat/lng lattice construction over an analysis extent."""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..exceptions import EmptyExtentError, ValidationError, ConfigurationError
from ..utils.conversions import meters_to_degrees
from ..utils.geometry import bounding_box

DEFAULT_MAX_CELLS = 2500
EXTENT_MODES = ('auto', 'manual', 'upload')

# Growth applied when inclusive enumeration overshoots the cell budget
_CELL_GROWTH = 1.01


@dataclass(frozen=True)
class Grid:
    """
    Row-major lattice of cell locations.

    Attributes
    ----------
    bounds : tuple of float
        (south, west, north, east) extent the lattice was built over
    cell_size : float
        Effective cell size in degrees after any budget adjustment
    requested_cell_size : float
        Cell size in degrees derived from the requested meters
    lats, lngs : tuple of float
        Row latitudes (south to north) and column longitudes (west to east)
    """

    bounds: Tuple[float, float, float, float]
    cell_size: float
    requested_cell_size: float
    lats: Tuple[float, ...]
    lngs: Tuple[float, ...]

    def __len__(self):
        return len(self.lats) * len(self.lngs)

    @property
    def shape(self):
        return len(self.lats), len(self.lngs)

    @property
    def was_adjusted(self):
        return self.cell_size != self.requested_cell_size

    def coordinates(self):
        """(n, 2) array of [lat, lng], row-major from the south-west corner."""
        lat_mesh, lng_mesh = np.meshgrid(np.array(self.lats), np.array(self.lngs),
                                         indexing='ij')
        return np.column_stack((lat_mesh.ravel(), lng_mesh.ravel()))


def _axis_count(start, stop, step):
    # Positions start + i*step that stay within stop
    count = int(np.floor((stop - start) / step)) + 1
    while count > 1 and start + (count - 1) * step > stop:
        count -= 1
    return count


def _axis_positions(start, step, count):
    return [start + i * step for i in range(count)]


def build_grid(bounds, cell_size_meters, max_cells=DEFAULT_MAX_CELLS, verbose=False):
    """
    Build a lattice over ``bounds`` with at most ``max_cells`` cells.

    The requested cell size is converted to degrees (1 degree ~ 111320 m).
    When the estimated cell count ``(lat_range/cs) * (lng_range/cs)`` exceeds
    the budget, the cell size becomes ``sqrt(lat_range * lng_range / max_cells)``,
    a uniform area-preserving adjustment. Inclusive enumeration of both
    bounds can still exceed the budget by a row or column, in which case the
    cell size keeps growing until it fits. The lattice is never truncated.

    Parameters
    ----------
    bounds : tuple of float
        (south, west, north, east) in degrees
    cell_size_meters : float
        Requested cell size in meters
    max_cells : int, optional
        Cell budget (default: 2500)
    verbose : bool, optional
        Print grid statistics (default: False)

    Returns
    -------
    Grid

    Raises
    ------
    EmptyExtentError
        If the latitude or longitude range is zero
    ValidationError
        If the cell size or cell budget is not positive

    Examples
    --------
    >>> grid = build_grid((0.0, 0.0, 1.0, 1.0), cell_size_meters=111320)
    >>> grid.shape
    (2, 2)
    """
    south, west, north, east = (float(b) for b in bounds)
    lat_range = north - south
    lng_range = east - west

    if lat_range <= 0 or lng_range <= 0:
        raise EmptyExtentError(
            f"Extent has zero area (lat range {lat_range}, lng range {lng_range})"
        )
    if cell_size_meters is None or cell_size_meters <= 0:
        raise ValidationError(f"Cell size must be positive, got {cell_size_meters}")
    if max_cells < 1:
        raise ValidationError(f"max_cells must be at least 1, got {max_cells}")

    requested = meters_to_degrees(cell_size_meters)
    cell_size = requested

    estimated_cells = (lat_range / cell_size) * (lng_range / cell_size)
    if estimated_cells > max_cells:
        cell_size = float(np.sqrt((lat_range * lng_range) / max_cells))

    rows = _axis_count(south, north, cell_size)
    cols = _axis_count(west, east, cell_size)
    while rows * cols > max_cells:
        cell_size *= _CELL_GROWTH
        rows = _axis_count(south, north, cell_size)
        cols = _axis_count(west, east, cell_size)

    lats = _axis_positions(south, cell_size, rows)
    lngs = _axis_positions(west, cell_size, cols)

    if verbose:
        print(f"Cell size: {requested:.6f} deg requested, {cell_size:.6f} deg used")
        print(f"Grid: {len(lats)} rows x {len(lngs)} cols = {len(lats) * len(lngs)} cells")

    return Grid(bounds=(south, west, north, east), cell_size=cell_size,
                requested_cell_size=requested, lats=tuple(lats), lngs=tuple(lngs))


def resolve_extent(dataset, extent_mode='auto', bounds=None, extent_points=None,
                   buffer_fraction=0.05, buffer_cap=0.1):
    """
    Choose the analysis extent for a run.

    Parameters
    ----------
    dataset : Dataset
        Sample points
    extent_mode : {'auto', 'manual', 'upload'}
        'auto' buffers the dataset bounding box; 'manual' uses ``bounds``;
        'upload' uses the bounding box of the ``extent_points`` polygon
    bounds : tuple of float, optional
        (south, west, north, east) for 'manual'
    extent_points : sequence, optional
        Polygon vertices (point-like) for 'upload'
    buffer_fraction, buffer_cap : float, optional
        Buffer parameters for 'auto' (see :func:`bounding_box`)

    Returns
    -------
    tuple of float
        (south, west, north, east)
    """
    if extent_mode == 'auto':
        return bounding_box(list(dataset), buffer_fraction, buffer_cap)
    if extent_mode == 'manual':
        if bounds is None:
            raise ConfigurationError("extent_mode 'manual' requires bounds")
        south, west, north, east = (float(b) for b in bounds)
        return south, west, north, east
    if extent_mode == 'upload':
        if not extent_points:
            raise ConfigurationError("extent_mode 'upload' requires extent_points")
        return bounding_box(list(extent_points), buffer_fraction=0.0)
    raise ConfigurationError(
        f"Unknown extent_mode '{extent_mode}'. Choose from {EXTENT_MODES}"
    )
