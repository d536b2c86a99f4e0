"""Planar geometry on (lat, lng) degree coordinates."""

import numpy as np


def lat_lng(point):
    """
    Extract ``(lat, lng)`` from a point-like object.

    Parameters
    ----------
    point : object or sequence
        Anything with ``lat``/``lng`` attributes (sample points, grid cells)
        or a ``(lat, lng)`` pair

    Returns
    -------
    tuple of float
        (lat, lng)

    Examples
    --------
    >>> lat_lng((9.08, 8.67))
    (9.08, 8.67)
    """
    if hasattr(point, 'lat') and hasattr(point, 'lng'):
        return float(point.lat), float(point.lng)
    lat, lng = point
    return float(lat), float(lng)


def coordinates_array(points):
    """Stack point-like objects into an (n, 2) array of [lat, lng]."""
    if len(points) == 0:
        return np.empty((0, 2))
    return np.array([lat_lng(p) for p in points], dtype=float)


def _cross(o, a, b):
    # x is longitude, y is latitude
    return (a[1] - o[1]) * (b[0] - o[0]) - (a[0] - o[0]) * (b[1] - o[1])


def convex_hull(points):
    """
    Compute the convex hull with Andrew's monotone chain algorithm.

    Points are treated as planar (x = lng, y = lat). Turns that are not
    strictly counter-clockwise are popped, so collinear points never appear
    on the hull.

    Parameters
    ----------
    points : sequence
        Point-like objects (see :func:`lat_lng`)

    Returns
    -------
    list
        Hull vertices in counter-clockwise order without a closing vertex.
        Inputs with fewer than 3 points are returned unchanged.

    Examples
    --------
    >>> hull = convex_hull([(0, 0), (0, 2), (2, 0), (0.5, 0.5)])
    >>> len(hull)
    3
    """
    points = list(points)
    if len(points) < 3:
        return points

    keyed = sorted(((lat_lng(p), p) for p in points),
                   key=lambda item: (item[0][1], item[0][0]))

    lower = []
    for coords, p in keyed:
        while len(lower) >= 2 and _cross(lower[-2][0], lower[-1][0], coords) <= 0:
            lower.pop()
        lower.append((coords, p))

    upper = []
    for coords, p in reversed(keyed):
        while len(upper) >= 2 and _cross(upper[-2][0], upper[-1][0], coords) <= 0:
            upper.pop()
        upper.append((coords, p))

    hull = lower[:-1] + upper[:-1]
    return [p for _, p in hull]


def planar_distance(a, b):
    """
    Euclidean distance between two points in degree units.

    This is not a geodesic distance. Thresholds throughout the package are
    calibrated against this approximation.

    Examples
    --------
    >>> planar_distance((0, 0), (3, 4))
    5.0
    """
    lat_a, lng_a = lat_lng(a)
    lat_b, lng_b = lat_lng(b)
    return float(np.sqrt((lat_a - lat_b) ** 2 + (lng_a - lng_b) ** 2))


def planar_distances(lat, lng, coords):
    """Vectorised :func:`planar_distance` from one location to an (n, 2) array."""
    coords = np.asarray(coords, dtype=float)
    if coords.size == 0:
        return np.empty(0)
    return np.sqrt((coords[:, 0] - lat) ** 2 + (coords[:, 1] - lng) ** 2)


def bounding_box(points, buffer_fraction=0.05, buffer_cap=0.1):
    """
    Compute a buffered bounding box around a set of points.

    The buffer is ``min(buffer_fraction * max(lat_range, lng_range), buffer_cap)``
    degrees and is applied on all four sides.

    Parameters
    ----------
    points : sequence
        Point-like objects
    buffer_fraction : float, optional
        Fraction of the larger span used as buffer (default: 0.05)
    buffer_cap : float, optional
        Maximum buffer in degrees (default: 0.1)

    Returns
    -------
    tuple of float
        (south, west, north, east)

    Examples
    --------
    >>> bounding_box([(0, 0), (1, 2)])
    (-0.1, -0.1, 1.1, 2.1)
    """
    coords = coordinates_array(points)
    if len(coords) == 0:
        raise ValueError("Cannot compute a bounding box of zero points")

    min_lat, min_lng = coords.min(axis=0)
    max_lat, max_lng = coords.max(axis=0)
    max_dimension = max(max_lat - min_lat, max_lng - min_lng)
    buffer = min(max_dimension * buffer_fraction, buffer_cap)

    return (float(min_lat - buffer), float(min_lng - buffer),
            float(max_lat + buffer), float(max_lng + buffer))


def padded_bounds(points, pad=0.1):
    """
    Bounding box of ``points`` grown by ``pad`` times its span on each side.

    Mirrors the ``pad`` semantics of web-map bounds: the latitude span is
    extended by ``pad * lat_span`` below and above, likewise for longitude.

    Returns
    -------
    tuple of float
        (south, west, north, east)
    """
    coords = coordinates_array(points)
    if len(coords) == 0:
        raise ValueError("Cannot compute bounds of zero points")

    min_lat, min_lng = coords.min(axis=0)
    max_lat, max_lng = coords.max(axis=0)
    lat_buffer = (max_lat - min_lat) * pad
    lng_buffer = (max_lng - min_lng) * pad

    return (float(min_lat - lat_buffer), float(min_lng - lng_buffer),
            float(max_lat + lat_buffer), float(max_lng + lng_buffer))


def bounds_contain(bounds, lat, lng):
    """Inclusive containment test against (south, west, north, east) bounds."""
    south, west, north, east = bounds
    return south <= lat <= north and west <= lng <= east


def point_in_convex_polygon(polygon, lat, lng):
    """
    Exact containment test for a counter-clockwise convex polygon.

    Points on an edge count as inside.

    Parameters
    ----------
    polygon : sequence
        At least 3 point-like vertices in counter-clockwise order, as returned
        by :func:`convex_hull`
    lat, lng : float
        Location to test

    Returns
    -------
    bool

    Examples
    --------
    >>> tri = [(0, 0), (0, 2), (2, 0)]
    >>> point_in_convex_polygon(convex_hull(tri), 0.5, 0.5)
    True
    >>> point_in_convex_polygon(convex_hull(tri), 2, 2)
    False
    """
    vertices = coordinates_array(polygon)
    if len(vertices) < 3:
        raise ValueError("A polygon needs at least 3 vertices")

    target = (lat, lng)
    n = len(vertices)
    for i in range(n):
        if _cross(vertices[i], vertices[(i + 1) % n], target) < 0:
            return False
    return True
