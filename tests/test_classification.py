"""Tests for class breaks and assignment."""

import numpy as np
import pytest

from rpe_analysis.classification import (
    classify, assign, class_for_value, classify_cells, CLASS_METHODS
)
from rpe_analysis.exceptions import ValidationError
from rpe_analysis.grid import GridCell


def test_quantile_breaks_on_one_to_hundred():
    values = list(range(1, 101))
    breaks = classify(values, 4, 'quantile')
    ordered = sorted(values)
    assert breaks == [ordered[0], ordered[25], ordered[50], ordered[75], ordered[99]]


def test_equal_interval_breaks():
    assert classify([0.0, 3.0, 10.0], 5, 'equal') == pytest.approx([0, 2, 4, 6, 8, 10])


def test_approximate_jenks_uses_fixed_step():
    values = list(range(10))
    # step = 10 // 3 = 3
    assert classify(values, 3, 'jenks') == [0, 3, 6, 9]


@pytest.mark.parametrize("method", CLASS_METHODS)
@pytest.mark.parametrize("num_classes", [2, 3, 5, 7])
def test_breaks_non_decreasing_and_classes_in_range(method, num_classes):
    rng = np.random.default_rng(42)
    values = rng.gamma(2.0, 3.0, size=257)
    cells = tuple(GridCell(0.0, float(i), float(v)) for i, v in enumerate(values))

    classified, breaks = classify_cells(cells, num_classes, method)

    assert len(breaks) == num_classes + 1
    assert all(b1 <= b2 for b1, b2 in zip(breaks, breaks[1:]))
    assert all(0 <= c.class_index < num_classes for c in classified)


def test_assignment_rules():
    breaks = [0.0, 2.0, 4.0, 6.0]
    assert class_for_value(0.0, breaks) == 0
    assert class_for_value(1.99, breaks) == 0
    assert class_for_value(2.0, breaks) == 1
    assert class_for_value(5.0, breaks) == 2
    assert class_for_value(6.0, breaks) == 2
    assert class_for_value(7.0, breaks) == 2


def test_assign_does_not_modify_input():
    cells = (GridCell(0, 0, 1.0), GridCell(0, 1, 5.0))
    classified = assign(cells, [0.0, 2.0, 6.0])
    assert [c.class_index for c in classified] == [0, 1]
    assert all(c.class_index is None for c in cells)


def test_constant_surface_lands_in_last_class():
    cells = tuple(GridCell(0, i, 3.0) for i in range(4))
    classified, breaks = classify_cells(cells, 3, 'equal')
    assert breaks == [3.0, 3.0, 3.0, 3.0]
    assert {c.class_index for c in classified} == {2}


def test_invalid_classification_requests():
    with pytest.raises(ValidationError):
        classify([1, 2, 3], 1, 'quantile')
    with pytest.raises(ValidationError):
        classify([1, 2, 3], 3, 'natural')
    with pytest.raises(ValidationError):
        classify([], 3, 'equal')
