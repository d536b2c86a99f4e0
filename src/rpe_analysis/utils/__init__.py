"""Utility functions for planar geometry, unit conversions and chunked evaluation."""

from .conversions import (
    METERS_PER_DEGREE, KM_PER_DEGREE, meters_to_degrees, km_to_degrees
)
from .geometry import (
    lat_lng, coordinates_array, convex_hull, planar_distance, planar_distances,
    bounding_box, padded_bounds, bounds_contain, point_in_convex_polygon
)
from .parallel import map_chunks

__all__ = [
    'METERS_PER_DEGREE',
    'KM_PER_DEGREE',
    'meters_to_degrees',
    'km_to_degrees',
    'lat_lng',
    'coordinates_array',
    'convex_hull',
    'planar_distance',
    'planar_distances',
    'bounding_box',
    'padded_bounds',
    'bounds_contain',
    'point_in_convex_polygon',
    'map_chunks'
]
