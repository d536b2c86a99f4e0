"""
Reliable Surface Analysis Package

This package estimates a continuous surface from sparse geotagged sample
measurements with Inverse Distance Weighting, quantifies how trustworthy the
surface is through k-fold cross-validation and local uncertainty, and marks
the Reliable Prediction Extent (RPE) where the estimate should be trusted.
"""

__version__ = "1.0.0"

from .exceptions import (
    AnalysisError,
    ValidationError,
    ComputationError,
    EmptyExtentError,
    MissingVariableError,
    ConfigurationError,
    EmptyResultError,
    AnalysisCancelled
)
from .data_processing import SamplePoint, Dataset, load_demo_dataset
from .pipeline import AnalysisConfig, AnalysisResult, load_config, run_analysis

__all__ = [
    'AnalysisError',
    'ValidationError',
    'ComputationError',
    'EmptyExtentError',
    'MissingVariableError',
    'ConfigurationError',
    'EmptyResultError',
    'AnalysisCancelled',
    'SamplePoint',
    'Dataset',
    'load_demo_dataset',
    'AnalysisConfig',
    'AnalysisResult',
    'load_config',
    'run_analysis'
]
