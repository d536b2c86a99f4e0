"""Contiguous k-fold cross-validation of IDW and its projection onto the grid."""

from dataclasses import dataclass

import numpy as np
from scipy.spatial.distance import cdist

from ..exceptions import ValidationError
from ..data_processing.dataset import point_key
from ..interpolation.idw import idw_estimate

CV_MODES = ('accuracy', 'residual')


@dataclass(frozen=True)
class FoldPrediction:
    """Held-out prediction for one sample point."""

    index: int
    key: str
    fold: int
    observed: float
    predicted: float

    @property
    def residual(self):
        """Signed error; positive means the surface underpredicts."""
        return self.observed - self.predicted

    @property
    def accuracy(self):
        return abs(self.observed - self.predicted)


def fold_ranges(n_points, folds):
    """
    Partition ``range(n_points)`` into contiguous folds.

    Every fold has ``n_points // folds`` indices except the last, which also
    absorbs the remainder.

    Parameters
    ----------
    n_points : int
        Dataset size
    folds : int
        Number of folds, ``2 <= folds < n_points``

    Returns
    -------
    list of tuple
        ``[(start, end), ...]`` half-open index ranges

    Examples
    --------
    >>> fold_ranges(30, 5)
    [(0, 6), (6, 12), (12, 18), (18, 24), (24, 30)]
    >>> fold_ranges(7, 3)
    [(0, 2), (2, 4), (4, 7)]
    """
    if folds < 2:
        raise ValidationError(f"Cross-validation needs at least 2 folds, got {folds}")
    if folds >= n_points:
        raise ValidationError(
            f"Fold count ({folds}) must be smaller than the number of points ({n_points})"
        )

    fold_size = n_points // folds
    ranges = []
    for fold in range(folds):
        start = fold * fold_size
        end = n_points if fold == folds - 1 else (fold + 1) * fold_size
        ranges.append((start, end))
    return ranges


def cross_validate_predictions(dataset, target_variable, power=2, folds=5,
                               checkpoint=None, verbose=False):
    """
    Held-out IDW predictions for every point with a numeric target.

    Each point is predicted from the points outside its fold with the same
    estimator used for the surface. A point with no usable training
    neighbours is predicted as its own observed value (zero error).

    Parameters
    ----------
    dataset : Dataset
        Sample points; order defines the folds
    target_variable : str
        Attribute to validate
    power : float, optional
        IDW power (default: 2)
    folds : int, optional
        Number of folds (default: 5)
    checkpoint : callable, optional
        Progress/cancellation hook called between folds
    verbose : bool, optional
        Print fold progress (default: False)

    Returns
    -------
    list of FoldPrediction
        In dataset order
    """
    values = dataset.values(target_variable)
    coords = dataset.coordinates()
    ranges = fold_ranges(len(dataset), folds)

    predictions = []
    for fold, (start, end) in enumerate(ranges):
        if checkpoint is not None:
            checkpoint()

        train = np.ones(len(dataset), dtype=bool)
        train[start:end] = False
        train &= ~np.isnan(values)
        train_coords, train_values = coords[train], values[train]

        for i in range(start, end):
            observed = values[i]
            if np.isnan(observed):
                continue
            lat, lng = coords[i]
            predicted = idw_estimate(lat, lng, train_coords, train_values, power)
            if predicted is None:
                predicted = float(observed)
            predictions.append(FoldPrediction(
                index=i, key=point_key(lat, lng), fold=fold,
                observed=float(observed), predicted=predicted
            ))

        if verbose:
            print(f"  Fold {fold + 1}/{folds}: held out [{start}, {end})")

    return predictions


def cross_validate(dataset, target_variable, power=2, folds=5, mode='accuracy',
                   checkpoint=None, verbose=False):
    """
    Per-point cross-validation error keyed by rounded location.

    Parameters
    ----------
    mode : {'accuracy', 'residual'}
        'accuracy' stores ``|observed - predicted|`` (single-variable runs);
        'residual' stores ``observed - predicted`` (predictor-based runs)

    Returns
    -------
    dict
        ``{point_key: error}``. Points sharing a rounded location keep the
        last error computed.
    """
    if mode not in CV_MODES:
        raise ValueError(f"Unknown cross-validation mode '{mode}'. Choose from {CV_MODES}")

    predictions = cross_validate_predictions(dataset, target_variable, power, folds,
                                             checkpoint=checkpoint, verbose=verbose)
    return errors_by_point(predictions, mode)


def errors_by_point(predictions, mode):
    """Collapse fold predictions into ``{point_key: error}`` for ``mode``."""
    errors = {}
    for prediction in predictions:
        errors[prediction.key] = getattr(prediction, mode)
    return errors


def project_onto_grid(cells, dataset, errors, field='accuracy'):
    """
    Copy each cell's nearest sample error onto the cell.

    This is a nearest-neighbour extrapolation of point-level error, not an
    interpolation. Ties go to the first point in dataset order; a nearest
    point without a stored error contributes 0.

    Parameters
    ----------
    cells : sequence of GridCell
        Interpolated surface
    dataset : Dataset
        Sample points the errors were computed for
    errors : dict
        ``{point_key: error}`` from :func:`cross_validate`
    field : {'accuracy', 'residual'}
        GridCell field to fill

    Returns
    -------
    tuple of GridCell
    """
    if field not in CV_MODES:
        raise ValueError(f"Unknown error field '{field}'. Choose from {CV_MODES}")
    if len(cells) == 0:
        return ()

    point_coords = dataset.coordinates()
    keys = [p.key for p in dataset]
    cell_coords = np.array([[c.lat, c.lng] for c in cells], dtype=float)

    nearest = np.argmin(cdist(cell_coords, point_coords, metric='euclidean'), axis=1)

    return tuple(
        cell.with_fields(**{field: float(errors.get(keys[j], 0.0))})
        for cell, j in zip(cells, nearest)
    )
