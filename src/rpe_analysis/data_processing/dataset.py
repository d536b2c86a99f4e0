"""Immutable sample point collections."""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

CRS_LABEL = 'EPSG:4326 (WGS84)'

# Attribute names treated as coordinates, never as analysis variables
_COORDINATE_TOKENS = ('lat', 'lon', 'lng')


def as_number(value) -> Optional[float]:
    """
    Interpret an attribute value as a finite float.

    Parameters
    ----------
    value : Any
        Attribute value (number or string)

    Returns
    -------
    float or None
        The numeric value, or None when the value is not numeric

    Examples
    --------
    >>> as_number(2.5)
    2.5
    >>> as_number("7")
    7.0
    >>> as_number("Maize") is None
    True
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float, np.integer, np.floating)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class SamplePoint:
    """A geotagged measurement with its attribute values."""

    lat: float
    lng: float
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'lat', float(self.lat))
        object.__setattr__(self, 'lng', float(self.lng))
        object.__setattr__(self, 'attributes', MappingProxyType(dict(self.attributes)))

    def number(self, variable: str) -> Optional[float]:
        """Numeric value of ``variable`` or None when missing/non-numeric."""
        return as_number(self.attributes.get(variable))

    @property
    def key(self) -> str:
        """Location key rounded to 4 decimal places."""
        return point_key(self.lat, self.lng)


def point_key(lat: float, lng: float) -> str:
    """
    Key identifying a sample location.

    Examples
    --------
    >>> point_key(9.08204, 8.67531)
    '9.0820_8.6753'
    """
    return f"{lat:.4f}_{lng:.4f}"


@dataclass(frozen=True)
class Dataset:
    """
    Ordered, immutable collection of sample points.

    Order is preserved because cross-validation folds are contiguous index
    ranges of this sequence.
    """

    points: Tuple[SamplePoint, ...]

    def __post_init__(self):
        object.__setattr__(self, 'points', tuple(self.points))

    def __len__(self):
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __getitem__(self, index):
        return self.points[index]

    @classmethod
    def from_records(cls, records, lat_key='lat', lng_key='lng'):
        """
        Build a dataset from mappings carrying coordinates and attributes.

        Parameters
        ----------
        records : iterable of mapping
            Each record holds ``lat_key`` and ``lng_key`` plus attribute
            values. A nested ``properties`` mapping is used as the attribute
            map when present.
        lat_key, lng_key : str, optional
            Coordinate field names (default: 'lat', 'lng')

        Returns
        -------
        Dataset

        Examples
        --------
        >>> ds = Dataset.from_records([{'lat': 0, 'lng': 0, 'yield': 1}])
        >>> ds[0].attributes['yield']
        1
        """
        points = []
        for record in records:
            if 'properties' in record:
                attributes = record['properties']
            else:
                attributes = {k: v for k, v in record.items()
                              if k not in (lat_key, lng_key)}
            points.append(SamplePoint(record[lat_key], record[lng_key], attributes))
        return cls(tuple(points))

    @classmethod
    def from_dataframe(cls, df, lat_column=None, lng_column=None):
        """
        Build a dataset from a DataFrame with latitude/longitude columns.

        When the coordinate columns are not given, the first column whose
        name contains 'lat' and the first containing 'lon' or 'lng' are used.
        Rows with missing coordinates are dropped.

        Parameters
        ----------
        df : pandas.DataFrame
            Tabular samples
        lat_column, lng_column : str, optional
            Coordinate column names

        Returns
        -------
        Dataset
        """
        columns = list(df.columns)
        if lat_column is None:
            lat_column = next((c for c in columns if 'lat' in str(c).lower()), None)
        if lng_column is None:
            lng_column = next((c for c in columns if 'lon' in str(c).lower()
                               or 'lng' in str(c).lower()), None)
        if lat_column is None or lng_column is None:
            raise ValueError("DataFrame must contain latitude and longitude columns")

        valid = df.dropna(subset=[lat_column, lng_column])
        points = []
        for row in valid.to_dict(orient='records'):
            attributes = {k: v for k, v in row.items() if not _is_missing(v)}
            points.append(SamplePoint(row[lat_column], row[lng_column], attributes))
        return cls(tuple(points))

    def coordinates(self):
        """(n, 2) array of [lat, lng]."""
        if not self.points:
            return np.empty((0, 2))
        return np.array([[p.lat, p.lng] for p in self.points], dtype=float)

    def values(self, variable):
        """Float array of ``variable`` with NaN where missing or non-numeric."""
        return np.array([np.nan if p.number(variable) is None else p.number(variable)
                         for p in self.points], dtype=float)

    def has_variable(self, variable):
        """True when at least one point carries ``variable`` as an attribute."""
        return any(variable in p.attributes for p in self.points)

    def numeric_variables(self):
        """
        Attribute names usable as target or predictor variables.

        A variable qualifies when it is numeric on the first point and its
        name does not look like a coordinate.
        """
        if not self.points:
            return []
        first = self.points[0]
        return [name for name in first.attributes
                if first.number(name) is not None
                and not any(token in name.lower() for token in _COORDINATE_TOKENS)]

    def summary(self):
        """Row count, field count and CRS label."""
        fields = []
        for p in self.points:
            for name in p.attributes:
                if name not in fields:
                    fields.append(name)
        return {
            'rows': len(self.points),
            'fields': len(fields),
            'field_names': fields,
            'crs': CRS_LABEL
        }

    def to_dataframe(self):
        """Flatten the dataset to a DataFrame with lat/lng columns."""
        rows = [dict(p.attributes, lat=p.lat, lng=p.lng) for p in self.points]
        return pd.DataFrame(rows)


def _is_missing(value):
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
