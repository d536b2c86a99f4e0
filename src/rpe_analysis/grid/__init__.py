"""Analysis lattice and grid cell records."""

from .cells import GridCell, surface_range, cells_to_dataframe
from .builder import DEFAULT_MAX_CELLS, EXTENT_MODES, Grid, build_grid, resolve_extent

__all__ = [
    'GridCell',
    'surface_range',
    'cells_to_dataframe',
    'DEFAULT_MAX_CELLS',
    'EXTENT_MODES',
    'Grid',
    'build_grid',
    'resolve_extent'
]
