"""Tests for lattice construction and extent resolution."""

import numpy as np
import pytest

from rpe_analysis.exceptions import EmptyExtentError, ValidationError, ConfigurationError
from rpe_analysis.grid import build_grid, resolve_extent, GridCell, surface_range
from rpe_analysis.utils.geometry import bounding_box


@pytest.mark.parametrize("bounds,cell_size_meters", [
    ((0.0, 0.0, 1.0, 1.0), 100.0),
    ((0.0, 0.0, 1.0, 1.0), 111320.0 / 50),
    ((-10.0, 30.0, 10.0, 31.0), 1000.0),
    ((9.0, 8.6, 9.2, 8.8), 50.0),
    ((0.0, 0.0, 0.01, 5.0), 10.0),
])
def test_grid_respects_cell_budget(bounds, cell_size_meters):
    grid = build_grid(bounds, cell_size_meters)
    assert 0 < len(grid) <= 2500
    assert len(grid.coordinates()) == len(grid)


def test_grid_covers_extent():
    bounds = (9.0, 8.6, 9.2, 8.9)
    grid = build_grid(bounds, 250.0)
    south, west, north, east = bounds

    assert grid.lats[0] == south
    assert grid.lngs[0] == west
    assert grid.lats[-1] <= north
    assert grid.lngs[-1] <= east
    assert grid.lats[-1] + grid.cell_size > north - 1e-9
    assert grid.lngs[-1] + grid.cell_size > east - 1e-9


def test_cell_size_is_adjusted_uniformly():
    grid = build_grid((0.0, 0.0, 1.0, 4.0), 100.0)
    assert grid.was_adjusted
    assert grid.cell_size >= (1.0 * 4.0 / 2500) ** 0.5
    # same step on both axes
    assert grid.lats[1] - grid.lats[0] == pytest.approx(grid.lngs[1] - grid.lngs[0])


def test_small_grid_is_not_adjusted():
    grid = build_grid((0.0, 0.0, 1.0, 1.0), 111320.0)
    assert not grid.was_adjusted
    assert grid.shape == (2, 2)


def test_coordinates_are_row_major_from_south_west():
    grid = build_grid((0.0, 0.0, 1.0, 1.0), 111320.0)
    coords = grid.coordinates().tolist()
    assert coords == [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]


def test_two_by_two_grid_for_triangle(triangle_dataset):
    grid = build_grid(bounding_box(list(triangle_dataset)), 111320.0)
    assert grid.shape == (2, 2)


@pytest.mark.parametrize("bounds", [(0.0, 0.0, 0.0, 1.0), (0.0, 1.0, 1.0, 1.0)])
def test_zero_area_extent_fails(bounds):
    with pytest.raises(EmptyExtentError):
        build_grid(bounds, 100.0)


def test_empty_extent_is_a_validation_error():
    with pytest.raises(ValidationError):
        build_grid((5.0, 5.0, 5.0, 5.0), 100.0)


def test_non_positive_cell_size_fails():
    with pytest.raises(ValidationError):
        build_grid((0.0, 0.0, 1.0, 1.0), 0)


def test_resolve_extent_modes(triangle_dataset):
    assert resolve_extent(triangle_dataset, 'auto') == pytest.approx((-0.05, -0.05, 1.05, 1.05))
    assert resolve_extent(triangle_dataset, 'manual', bounds=(0, 0, 2, 3)) == (0.0, 0.0, 2.0, 3.0)
    uploaded = resolve_extent(triangle_dataset, 'upload',
                              extent_points=[(0, 0), (0, 4), (2, 4), (2, 0)])
    assert uploaded == pytest.approx((0.0, 0.0, 2.0, 4.0))

    with pytest.raises(ConfigurationError):
        resolve_extent(triangle_dataset, 'manual')
    with pytest.raises(ConfigurationError):
        resolve_extent(triangle_dataset, 'viewport')


def test_grid_cells_are_immutable():
    cell = GridCell(0.0, 0.0, 1.0)
    updated = cell.with_fields(class_index=2)
    assert cell.class_index is None
    assert updated.class_index == 2
    with pytest.raises(AttributeError):
        cell.value = 3.0


def test_surface_range():
    cells = [GridCell(0, 0, 3.0), GridCell(0, 1, -1.0), GridCell(1, 0, 2.0)]
    assert surface_range(cells) == (-1.0, 3.0)


def test_extreme_aspect_ratio_grows_to_budget():
    grid = build_grid((0.0, 0.0, 1e-6, 100.0), 10.0)
    assert grid.shape[0] == 1
    assert 0 < len(grid) <= 2500
    assert grid.lngs[0] == 0.0
    assert grid.lngs[-1] <= 100.0
    assert grid.lngs[-1] + grid.cell_size > 100.0


def test_axis_positions_are_evenly_spaced():
    grid = build_grid((0.0, 0.0, 0.25, 0.75), 111320.0 / 10)
    assert grid.shape == (3, 8)
    assert grid.lats[-1] <= 0.25
    assert grid.lngs[-1] <= 0.75
    np.testing.assert_allclose(np.diff(grid.lngs), grid.cell_size)
