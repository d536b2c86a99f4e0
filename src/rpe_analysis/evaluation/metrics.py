"""Summary accuracy metrics over cross-validation predictions."""

from dataclasses import dataclass, asdict

import numpy as np
from sklearn.metrics import mean_squared_error, mean_absolute_error, r2_score


@dataclass(frozen=True)
class Metrics:
    """
    Cross-validated accuracy of the surface.

    Attributes
    ----------
    rmse : float
        Root mean squared error
    mae : float
        Mean absolute error
    r2 : float
        Coefficient of determination of predictions against observations
    bias : float
        Mean of ``predicted - observed``; positive means overprediction
    n_samples : int
        Number of held-out predictions the metrics summarize
    """

    rmse: float
    mae: float
    r2: float
    bias: float
    n_samples: int

    def to_dict(self):
        return asdict(self)


def compute_metrics(predictions):
    """
    Compute RMSE, MAE, R² and bias from held-out predictions.

    Parameters
    ----------
    predictions : sequence of FoldPrediction
        Output of :func:`cross_validate_predictions`

    Returns
    -------
    Metrics

    Notes
    -----
    R² follows scikit-learn: a constant set of observations gives 1.0 for a
    perfect prediction and 0.0 otherwise. Fewer than two predictions give NaN.
    """
    if len(predictions) == 0:
        raise ValueError("No cross-validation predictions to summarize")

    observed = np.array([p.observed for p in predictions], dtype=float)
    predicted = np.array([p.predicted for p in predictions], dtype=float)

    rmse = float(np.sqrt(mean_squared_error(observed, predicted)))
    mae = float(mean_absolute_error(observed, predicted))
    r2 = float(r2_score(observed, predicted)) if len(observed) >= 2 else float('nan')
    bias = float(np.mean(predicted - observed))

    return Metrics(rmse=rmse, mae=mae, r2=r2, bias=bias, n_samples=len(observed))
