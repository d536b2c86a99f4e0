import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from rpe_analysis.data_processing import Dataset, SamplePoint, load_demo_dataset


@pytest.fixture
def demo_dataset():
    return load_demo_dataset()


@pytest.fixture
def triangle_dataset():
    """Three samples at (0,0)=1, (0,1)=2 and (1,0)=3."""
    return Dataset((
        SamplePoint(0.0, 0.0, {'val': 1.0}),
        SamplePoint(0.0, 1.0, {'val': 2.0}),
        SamplePoint(1.0, 0.0, {'val': 3.0}),
    ))


@pytest.fixture
def square_dataset():
    """Samples on the corners of a one-degree square."""
    return Dataset((
        SamplePoint(0.0, 0.0, {'val': 1.0, 'aux': 10.0}),
        SamplePoint(0.0, 1.0, {'val': 2.0, 'aux': 20.0}),
        SamplePoint(1.0, 0.0, {'val': 3.0, 'aux': 30.0}),
        SamplePoint(1.0, 1.0, {'val': 4.0, 'aux': 40.0}),
    ))
