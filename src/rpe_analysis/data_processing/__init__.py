"""Sample point data model and bundled demo data."""

from .dataset import (
    CRS_LABEL,
    as_number,
    point_key,
    SamplePoint,
    Dataset
)
from .demo import DEMO_HEADERS, load_demo_dataset

__all__ = [
    'CRS_LABEL',
    'as_number',
    'point_key',
    'SamplePoint',
    'Dataset',
    'DEMO_HEADERS',
    'load_demo_dataset'
]
