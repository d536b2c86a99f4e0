"""End-to-end analysis: grid, IDW, classes, cross-validation, uncertainty, RPE."""

import numpy as np

from ..exceptions import ValidationError, MissingVariableError
from ..grid.builder import build_grid, resolve_extent
from ..grid.cells import surface_range
from ..interpolation.idw import interpolate
from ..interpolation.uncertainty import estimate_uncertainty
from ..classification.breaks import classify_cells
from ..evaluation.cross_validation import (
    cross_validate_predictions, errors_by_point, project_onto_grid
)
from ..evaluation.metrics import compute_metrics
from ..reliability.rpe import compute_rpe, SINGLE_VARIABLE, PREDICTOR_BASED
from .config import AnalysisConfig
from .progress import ProgressMonitor
from .result import AnalysisResult, ContinuousSurface

MIN_POINTS = 3


def determine_analysis_type(predictor_variables):
    """'predictor-based' when any predictor is selected, else 'single-variable'."""
    return PREDICTOR_BASED if predictor_variables else SINGLE_VARIABLE


def validate_inputs(dataset, target_variable, predictor_variables, config):
    """
    Check a dataset and variable selection before any computation.

    Raises
    ------
    ValidationError
        Fewer than 3 points, unknown predictors, a predictor equal to the
        target, or a fold count not smaller than the number of points
    MissingVariableError
        Target absent from the dataset or never numeric
    """
    if len(dataset) < MIN_POINTS:
        raise ValidationError(
            f"Dataset must contain at least {MIN_POINTS} valid points, got {len(dataset)}"
        )

    if not dataset.has_variable(target_variable):
        raise MissingVariableError(f"Target variable '{target_variable}' not found in dataset")
    if np.all(np.isnan(dataset.values(target_variable))):
        raise MissingVariableError(f"Target variable '{target_variable}' has no numeric values")

    for predictor in predictor_variables:
        if predictor == target_variable:
            raise ValidationError(f"Predictor '{predictor}' is also the target variable")
        if not dataset.has_variable(predictor):
            raise ValidationError(f"Predictor variable '{predictor}' not found in dataset")

    if config.cv_folds >= len(dataset):
        raise ValidationError(
            f"cv_folds ({config.cv_folds}) must be smaller than the number of points "
            f"({len(dataset)})"
        )


def run_analysis(dataset, target_variable, predictor_variables=(), config=None,
                 monitor=None):
    """
    Run the full analysis for one target variable.

    Parameters
    ----------
    dataset : Dataset
        Sample points
    target_variable : str
        Attribute to interpolate
    predictor_variables : str or iterable of str, optional
        Selected predictors; any selection makes the run predictor-based.
        A single name may be passed as a plain string.
    config : AnalysisConfig, optional
        Run options (default: ``AnalysisConfig()``)
    monitor : ProgressMonitor, optional
        Receives stage progress and can cancel the run

    Returns
    -------
    AnalysisResult

    Raises
    ------
    ValidationError, ComputationError
        Propagated unchanged from the failing stage
    AnalysisCancelled
        If the monitor was cancelled
    """
    config = config if config is not None else AnalysisConfig()
    monitor = monitor if monitor is not None else ProgressMonitor(verbose=config.verbose)
    if isinstance(predictor_variables, str):
        predictor_variables = (predictor_variables,)
    predictors = frozenset(predictor_variables or ())
    verbose = config.verbose
    n_jobs = config.n_jobs

    analysis_type = determine_analysis_type(predictors)
    if verbose:
        label = 'Model-based Prediction' if analysis_type == PREDICTOR_BASED else 'Pure Interpolation'
        print(f"Starting analysis for: {target_variable} ({label})")
        if predictors:
            print(f"Using {len(predictors)} predictor variable(s): {', '.join(sorted(predictors))}")

    monitor.update(10, 'Validating data...')
    validate_inputs(dataset, target_variable, predictors, config)

    monitor.update(20, 'Preparing interpolation grid...')
    bounds = resolve_extent(dataset, config.extent_mode, config.bounds, config.extent_points,
                            config.buffer_fraction, config.buffer_cap)
    grid = build_grid(bounds, config.cell_size_meters, config.max_cells, verbose=verbose)

    monitor.update(40, 'Running interpolation...')
    surface = interpolate(grid, dataset, target_variable, config.idw_power, n_jobs=n_jobs,
                          checkpoint=monitor.checkpoint, verbose=verbose)
    min_val, max_val = surface_range(surface)

    monitor.update(55, 'Generating output layers...')
    classified, breaks = None, None
    if config.classify:
        classified, breaks = classify_cells(surface, config.num_classes, config.class_method)
        breaks = tuple(breaks)

    monitor.update(65, 'Calculating validation metrics...')
    predictions = cross_validate_predictions(dataset, target_variable, config.idw_power,
                                             config.cv_folds, checkpoint=monitor.checkpoint,
                                             verbose=verbose)
    metrics = compute_metrics(predictions)

    accuracy, residuals, uncertainty = None, None, None
    if analysis_type == SINGLE_VARIABLE:
        accuracy = project_onto_grid(surface, dataset, errors_by_point(predictions, 'accuracy'),
                                     'accuracy')
    else:
        residuals = project_onto_grid(surface, dataset, errors_by_point(predictions, 'residual'),
                                      'residual')
        monitor.update(72, 'Calculating prediction uncertainty...')
        uncertainty = estimate_uncertainty(surface, dataset, target_variable, n_jobs=n_jobs,
                                           checkpoint=monitor.checkpoint, verbose=verbose)

    monitor.update(80, 'Calculating reliable prediction extent...')
    rpe = compute_rpe(surface, dataset, uncertainty, analysis_type,
                      hull_padding=config.hull_padding,
                      max_distance_km=config.rpe_distance_km,
                      uncertainty_threshold=config.uncertainty_threshold,
                      hull_test=config.hull_test, verbose=verbose)

    result = AnalysisResult(
        continuous=ContinuousSurface(grid=surface, min_val=min_val, max_val=max_val),
        rpe=rpe,
        metrics=metrics,
        target_variable=target_variable,
        analysis_type=analysis_type,
        predictor_variables=predictors,
        classified=classified,
        class_breaks=breaks,
        accuracy=accuracy,
        residuals=residuals,
        uncertainty=uncertainty,
        config=config
    )

    monitor.update(100, 'Complete!')
    return result
