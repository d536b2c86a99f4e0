"""Grid cell record shared by every output layer."""

from dataclasses import dataclass, asdict, replace
from typing import Optional

import pandas as pd


@dataclass(frozen=True)
class GridCell:
    """
    One lattice location and the layer values computed for it.

    Stages never modify a cell; they derive new ones with
    :func:`dataclasses.replace` via :meth:`with_fields`.
    """

    lat: float
    lng: float
    value: float
    class_index: Optional[int] = None
    accuracy: Optional[float] = None
    residual: Optional[float] = None
    uncertainty: Optional[float] = None
    reliable: Optional[bool] = None

    def with_fields(self, **changes):
        return replace(self, **changes)

    def to_dict(self):
        return asdict(self)


def surface_range(cells):
    """
    Minimum and maximum ``value`` across cells.

    Returns
    -------
    tuple of float
        (min_val, max_val)
    """
    if len(cells) == 0:
        raise ValueError("Cannot compute the range of an empty surface")
    values = [c.value for c in cells]
    return min(values), max(values)


def cells_to_dataframe(cells):
    """Tabular view of a layer, one row per cell."""
    columns = list(GridCell.__dataclass_fields__)
    return pd.DataFrame([c.to_dict() for c in cells], columns=columns)
