"""Error taxonomy raised by the analysis engine."""


class AnalysisError(Exception):
    """Base class for every error raised by the engine."""
    pass


class ValidationError(AnalysisError, ValueError):
    """Error raised when inputs cannot be analysed as given."""
    pass


class EmptyExtentError(ValidationError):
    """Error raised when the analysis extent has zero latitude or longitude span."""
    pass


class MissingVariableError(ValidationError):
    """Error raised when the target variable is absent or never numeric."""
    pass


class ConfigurationError(ValidationError):
    """Error raised when an analysis configuration option is invalid."""
    pass


class ComputationError(AnalysisError, RuntimeError):
    """Error raised when a stage cannot produce a usable result."""
    pass


class EmptyResultError(ComputationError):
    """Error raised when interpolation yields no valid grid cells."""
    pass


class AnalysisCancelled(AnalysisError):
    """Raised at a progress checkpoint after the caller requested cancellation."""
    pass
