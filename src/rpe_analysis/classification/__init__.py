"""Value surface classification."""

from .breaks import (
    CLASS_METHODS,
    equal_interval_breaks,
    quantile_breaks,
    approximate_jenks_breaks,
    classify,
    class_for_value,
    assign,
    classify_cells
)

__all__ = [
    'CLASS_METHODS',
    'equal_interval_breaks',
    'quantile_breaks',
    'approximate_jenks_breaks',
    'classify',
    'class_for_value',
    'assign',
    'classify_cells'
]
