"""Analysis configuration and YAML loading."""

import math
import numbers
from dataclasses import dataclass, fields, asdict
from typing import Optional, Sequence, Tuple

import yaml

from ..exceptions import ConfigurationError
from ..classification.breaks import CLASS_METHODS
from ..grid.builder import DEFAULT_MAX_CELLS, EXTENT_MODES
from ..reliability.rpe import HULL_TESTS

_INTEGER_OPTIONS = ('cv_folds', 'num_classes', 'max_cells', 'n_jobs')
_REAL_OPTIONS = ('idw_power', 'cell_size_meters', 'buffer_fraction', 'buffer_cap',
                 'hull_padding', 'rpe_distance_km', 'uncertainty_threshold')
_FLAG_OPTIONS = ('classify', 'verbose')


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Immutable options for one analysis run.

    Attributes
    ----------
    idw_power : float
        IDW distance decay exponent
    cell_size_meters : float
        Requested lattice cell size
    cv_folds : int
        Cross-validation folds (at least 2, fewer than the sample count)
    class_method : str
        'equal', 'quantile' or 'jenks' (approximate)
    num_classes : int
        Number of classes (at least 2)
    extent_mode : str
        'auto', 'manual' or 'upload'
    classify : bool
        Produce the classified layer
    bounds : tuple, optional
        (south, west, north, east) for 'manual' extents
    extent_points : tuple, optional
        (lat, lng) polygon vertices for 'upload' extents
    max_cells : int
        Grid cell budget
    buffer_fraction, buffer_cap : float
        Bounding box buffer for 'auto' extents
    hull_padding : float
        Padding ratio of the RPE hull bounds test
    hull_test : str
        'bounds' (padded hull bounding box) or 'polygon' (exact hull)
    rpe_distance_km : float
        RPE nearest-sample distance threshold
    uncertainty_threshold : float
        RPE uncertainty threshold for predictor-based runs
    n_jobs : int
        joblib workers for per-cell stages
    verbose : bool
        Print stage progress
    """

    idw_power: float = 2.0
    cell_size_meters: float = 500.0
    cv_folds: int = 5
    class_method: str = 'quantile'
    num_classes: int = 5
    extent_mode: str = 'auto'
    classify: bool = True
    bounds: Optional[Tuple[float, float, float, float]] = None
    extent_points: Optional[Tuple[Tuple[float, float], ...]] = None
    max_cells: int = DEFAULT_MAX_CELLS
    buffer_fraction: float = 0.05
    buffer_cap: float = 0.1
    hull_padding: float = 0.1
    hull_test: str = 'bounds'
    rpe_distance_km: float = 10.0
    uncertainty_threshold: float = 0.3
    n_jobs: int = 1
    verbose: bool = False

    def __post_init__(self):
        # YAML may give whole numbers as floats, e.g. "cv_folds: 5.0"
        for name in _INTEGER_OPTIONS:
            value = getattr(self, name)
            if isinstance(value, float) and value.is_integer():
                object.__setattr__(self, name, int(value))
        try:
            if self.bounds is not None:
                object.__setattr__(self, 'bounds', tuple(float(b) for b in self.bounds))
            if self.extent_points is not None:
                object.__setattr__(self, 'extent_points',
                                   tuple(tuple(float(v) for v in p) for p in self.extent_points))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"bounds and extent_points must be numeric: {e}") from e
        self.validate()

    def validate(self):
        """Raise ConfigurationError on any out-of-range option."""
        for name in _INTEGER_OPTIONS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        for name in _REAL_OPTIONS:
            value = getattr(self, name)
            if (isinstance(value, bool) or not isinstance(value, numbers.Real)
                    or not math.isfinite(value)):
                raise ConfigurationError(f"{name} must be a finite number, got {value!r}")
        for name in _FLAG_OPTIONS:
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"{name} must be true or false, got {getattr(self, name)!r}")
        if self.idw_power <= 0:
            raise ConfigurationError(f"idw_power must be positive, got {self.idw_power}")
        if self.cell_size_meters <= 0:
            raise ConfigurationError(
                f"cell_size_meters must be positive, got {self.cell_size_meters}"
            )
        if self.cv_folds < 2:
            raise ConfigurationError(f"cv_folds must be at least 2, got {self.cv_folds}")
        if self.num_classes < 2:
            raise ConfigurationError(f"num_classes must be at least 2, got {self.num_classes}")
        if self.class_method not in CLASS_METHODS:
            raise ConfigurationError(
                f"class_method must be one of {CLASS_METHODS}, got '{self.class_method}'"
            )
        if self.extent_mode not in EXTENT_MODES:
            raise ConfigurationError(
                f"extent_mode must be one of {EXTENT_MODES}, got '{self.extent_mode}'"
            )
        if self.extent_mode == 'manual' and (self.bounds is None or len(self.bounds) != 4):
            raise ConfigurationError("extent_mode 'manual' requires bounds (south, west, north, east)")
        if self.extent_mode == 'upload' and not self.extent_points:
            raise ConfigurationError("extent_mode 'upload' requires extent_points")
        if self.hull_test not in HULL_TESTS:
            raise ConfigurationError(
                f"hull_test must be one of {HULL_TESTS}, got '{self.hull_test}'"
            )
        if self.max_cells < 1:
            raise ConfigurationError(f"max_cells must be at least 1, got {self.max_cells}")
        if self.n_jobs == 0:
            raise ConfigurationError("n_jobs must be non-zero")

    @classmethod
    def from_dict(cls, options):
        """
        Build a config from a mapping, rejecting unknown keys.

        Examples
        --------
        >>> AnalysisConfig.from_dict({'idw_power': 3}).idw_power
        3
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration options: {unknown}")
        return cls(**options)

    def to_dict(self):
        return asdict(self)

    def with_options(self, **changes):
        """A validated copy with ``changes`` applied."""
        return self.from_dict({**self.to_dict(), **changes})


def load_config(config_path):
    """
    Load an AnalysisConfig from a YAML file.

    Options may sit at the top level or under an ``analysis:`` section.

    Parameters
    ----------
    config_path : str or Path
        Path to the YAML file

    Returns
    -------
    AnalysisConfig
    """
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")

    options = config.get('analysis', config)
    return AnalysisConfig.from_dict(options or {})


def merge_options(config: AnalysisConfig, overrides: Sequence) -> AnalysisConfig:
    """Apply ``(name, value)`` pairs whose value is not None."""
    changes = {name: value for name, value in overrides if value is not None}
    return config.with_options(**changes) if changes else config
