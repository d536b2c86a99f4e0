"""Unit conversions between metric distances and degree units."""

# Equatorial approximation used across the engine
METERS_PER_DEGREE = 111320.0
KM_PER_DEGREE = 111.32


def meters_to_degrees(meters):
    """
    Convert a distance in meters to degree units.

    Examples
    --------
    >>> meters_to_degrees(111320)
    1.0
    """
    return meters / METERS_PER_DEGREE


def km_to_degrees(km):
    """
    Convert a distance in kilometers to degree units.

    Examples
    --------
    >>> round(km_to_degrees(10), 6)
    0.089831
    """
    return km / KM_PER_DEGREE
