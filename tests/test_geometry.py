"""Tests for planar geometry utilities."""

import numpy as np
import pytest

from rpe_analysis.utils.geometry import (
    convex_hull, planar_distance, planar_distances, bounding_box,
    padded_bounds, bounds_contain, point_in_convex_polygon
)
from rpe_analysis.utils.conversions import meters_to_degrees, km_to_degrees


def signed_area(polygon):
    # x = lng, y = lat
    area = 0.0
    n = len(polygon)
    for i in range(n):
        lat1, lng1 = polygon[i]
        lat2, lng2 = polygon[(i + 1) % n]
        area += lng1 * lat2 - lng2 * lat1
    return area / 2


def test_hull_drops_interior_point():
    points = [(0.0, 0.0), (0.0, 2.0), (2.0, 0.0), (0.5, 0.5)]
    hull = convex_hull(points)
    assert len(hull) == 3
    assert set(hull) == {(0.0, 0.0), (0.0, 2.0), (2.0, 0.0)}


def test_hull_is_counter_clockwise_without_collinear_points():
    points = [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2), (2, 1), (2, 0), (1, 0), (1, 1)]
    hull = convex_hull(points)

    assert set(hull) == {(0, 0), (0, 2), (2, 2), (2, 0)}
    assert signed_area(hull) > 0

    n = len(hull)
    for i in range(n):
        (a_lat, a_lng), (b_lat, b_lng), (c_lat, c_lng) = hull[i], hull[(i + 1) % n], hull[(i + 2) % n]
        cross = (b_lng - a_lng) * (c_lat - a_lat) - (b_lat - a_lat) * (c_lng - a_lng)
        assert cross > 0


def test_hull_has_no_closing_vertex():
    hull = convex_hull([(0, 0), (0, 1), (1, 0), (1, 1)])
    assert len(hull) == 4
    assert hull[0] != hull[-1]


@pytest.mark.parametrize("points", [[], [(1.0, 2.0)], [(0.0, 0.0), (1.0, 1.0)]])
def test_hull_of_fewer_than_three_points_is_input(points):
    assert convex_hull(points) == points


def test_hull_returns_input_objects(triangle_dataset):
    hull = convex_hull(list(triangle_dataset))
    assert all(p in triangle_dataset.points for p in hull)


def test_planar_distance():
    assert planar_distance((0, 0), (3, 4)) == 5.0
    np.testing.assert_allclose(planar_distances(0, 0, [[3, 4], [0, 1]]), [5.0, 1.0])


def test_bounding_box_buffer_is_fraction_of_span():
    south, west, north, east = bounding_box([(0, 0), (1, 0.5)])
    assert south == pytest.approx(-0.05)
    assert west == pytest.approx(-0.05)
    assert north == pytest.approx(1.05)
    assert east == pytest.approx(0.55)


def test_bounding_box_buffer_is_capped():
    south, west, north, east = bounding_box([(0, 0), (10, 4)])
    assert (south, west, north, east) == pytest.approx((-0.1, -0.1, 10.1, 4.1))


def test_padded_bounds_and_containment():
    box = padded_bounds([(0, 0), (1, 2)], pad=0.1)
    assert box == pytest.approx((-0.1, -0.2, 1.1, 2.2))
    assert bounds_contain(box, 1.1, 2.2)
    assert not bounds_contain(box, 1.2, 0)


def test_point_in_convex_polygon():
    hull = convex_hull([(0, 0), (0, 2), (2, 0)])
    assert point_in_convex_polygon(hull, 0.5, 0.5)
    assert point_in_convex_polygon(hull, 0.0, 1.0)
    assert not point_in_convex_polygon(hull, 1.5, 1.5)
    with pytest.raises(ValueError):
        point_in_convex_polygon([(0, 0), (1, 1)], 0, 0)


def test_degree_conversions():
    assert meters_to_degrees(111320) == pytest.approx(1.0)
    assert km_to_degrees(111.32) == pytest.approx(1.0)
