"""Class breaks and class assignment for value surfaces."""

import numpy as np

from ..exceptions import ValidationError

CLASS_METHODS = ('equal', 'quantile', 'jenks')


def equal_interval_breaks(values, num_classes):
    """``num_classes + 1`` evenly spaced breaks from min to max."""
    low, high = float(np.min(values)), float(np.max(values))
    span = high - low
    return [low + span * i / num_classes for i in range(num_classes + 1)]


def quantile_breaks(values, num_classes):
    """
    Breaks at sorted positions ``floor(n * i / num_classes)``.

    The final position equals ``n`` and is clamped to the last element.

    Examples
    --------
    >>> quantile_breaks(list(range(1, 101)), 4)
    [1.0, 26.0, 51.0, 76.0, 100.0]
    """
    ordered = np.sort(np.asarray(values, dtype=float))
    n = len(ordered)
    return [float(ordered[min((n * i) // num_classes, n - 1)])
            for i in range(num_classes + 1)]


def approximate_jenks_breaks(values, num_classes):
    """
    Approximate natural breaks using a fixed step of ``n // num_classes``.

    This is not the Fisher-Jenks optimization. It steps through the sorted
    values like :func:`quantile_breaks`, but with an integer step, so any
    remainder is pushed into the final class.
    """
    ordered = np.sort(np.asarray(values, dtype=float))
    n = len(ordered)
    step = n // num_classes
    return [float(ordered[min(i * step, n - 1)]) for i in range(num_classes + 1)]


_BREAK_FUNCTIONS = {
    'equal': equal_interval_breaks,
    'quantile': quantile_breaks,
    'jenks': approximate_jenks_breaks,
}


def classify(values, num_classes, method='quantile'):
    """
    Compute class breaks for a set of values.

    Parameters
    ----------
    values : array-like
        Surface values
    num_classes : int
        Number of classes (at least 2)
    method : {'equal', 'quantile', 'jenks'}
        Break strategy; 'jenks' is an approximation

    Returns
    -------
    list of float
        ``num_classes + 1`` non-decreasing breaks
    """
    if num_classes < 2:
        raise ValidationError(f"num_classes must be at least 2, got {num_classes}")
    if method not in _BREAK_FUNCTIONS:
        raise ValidationError(
            f"Unknown classification method '{method}'. Choose from {CLASS_METHODS}"
        )
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        raise ValidationError("Cannot classify an empty set of values")

    return _BREAK_FUNCTIONS[method](values, num_classes)


def class_for_value(value, breaks):
    """
    Class index of ``value`` for the given breaks.

    ``breaks[i] <= value < breaks[i + 1]`` maps to class ``i``; values at or
    above the last break go to the final class.

    Examples
    --------
    >>> class_for_value(5, [0, 2, 4, 6])
    2
    >>> class_for_value(6, [0, 2, 4, 6])
    2
    """
    num_classes = len(breaks) - 1
    if value >= breaks[-1]:
        return num_classes - 1
    for i in range(num_classes):
        if breaks[i] <= value < breaks[i + 1]:
            return i
    return 0


def assign(cells, breaks):
    """Copies of ``cells`` with ``class_index`` set from ``breaks``."""
    if len(breaks) < 3:
        raise ValidationError(f"Need at least 3 breaks for 2 classes, got {len(breaks)}")
    return tuple(c.with_fields(class_index=class_for_value(c.value, breaks)) for c in cells)


def classify_cells(cells, num_classes, method='quantile'):
    """
    Classify a surface in one step.

    Returns
    -------
    classified : tuple of GridCell
    breaks : list of float
    """
    breaks = classify([c.value for c in cells], num_classes, method)
    return assign(cells, breaks), breaks
