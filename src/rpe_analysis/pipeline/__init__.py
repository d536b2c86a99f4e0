"""Analysis configuration, orchestration and results."""

from .config import AnalysisConfig, load_config, merge_options
from .progress import ProgressMonitor
from .result import LAYERS, ContinuousSurface, AnalysisResult
from .orchestrator import (
    MIN_POINTS,
    determine_analysis_type,
    validate_inputs,
    run_analysis
)

__all__ = [
    'AnalysisConfig',
    'load_config',
    'merge_options',
    'ProgressMonitor',
    'LAYERS',
    'ContinuousSurface',
    'AnalysisResult',
    'MIN_POINTS',
    'determine_analysis_type',
    'validate_inputs',
    'run_analysis'
]
