"""Tests for the sample point data model."""

import numpy as np
import pandas as pd
import pytest

from rpe_analysis.data_processing import (
    Dataset, SamplePoint, as_number, point_key, load_demo_dataset, CRS_LABEL
)


@pytest.mark.parametrize("value,expected", [
    (3, 3.0), (2.5, 2.5), ("4.25", 4.25), (" 7 ", 7.0), (np.int64(5), 5.0),
    (True, None), (None, None), ("Maize", None), (float('nan'), None), ([1], None),
])
def test_as_number(value, expected):
    assert as_number(value) == expected


def test_sample_points_are_immutable():
    point = SamplePoint(1, 2, {'val': 3})
    assert point.lat == 1.0 and isinstance(point.lat, float)
    with pytest.raises(AttributeError):
        point.lat = 5.0
    with pytest.raises(TypeError):
        point.attributes['val'] = 4


def test_point_key_rounds_to_four_decimals():
    assert point_key(9.08204, 8.67531) == '9.0820_8.6753'
    assert SamplePoint(0.00004, -1.5, {}).key == '0.0000_-1.5000'


def test_from_records_with_and_without_properties():
    dataset = Dataset.from_records([
        {'lat': 0, 'lng': 1, 'val': 2},
        {'lat': 3, 'lng': 4, 'properties': {'val': 5, 'name': 'b'}},
    ])
    assert len(dataset) == 2
    assert dict(dataset[0].attributes) == {'val': 2}
    assert dict(dataset[1].attributes) == {'val': 5, 'name': 'b'}
    np.testing.assert_array_equal(dataset.coordinates(), [[0, 1], [3, 4]])


def test_from_dataframe_detects_coordinate_columns():
    df = pd.DataFrame({
        'Latitude': [9.0, 9.1, None],
        'Longitude': [8.6, 8.7, 8.8],
        'yield': [1.0, np.nan, 3.0],
    })
    dataset = Dataset.from_dataframe(df)

    assert len(dataset) == 2
    assert dataset[0].lat == 9.0 and dataset[0].lng == 8.6
    assert 'yield' not in dataset[1].attributes
    np.testing.assert_array_equal(dataset.values('yield'), [1.0, np.nan])


def test_from_dataframe_requires_coordinates():
    with pytest.raises(ValueError):
        Dataset.from_dataframe(pd.DataFrame({'x': [1], 'y': [2]}))


def test_values_and_has_variable():
    dataset = Dataset((SamplePoint(0, 0, {'a': 1}), SamplePoint(0, 1, {'a': 'x'}),
                       SamplePoint(1, 0, {})))
    np.testing.assert_array_equal(dataset.values('a'), [1.0, np.nan, np.nan])
    assert dataset.has_variable('a')
    assert not dataset.has_variable('b')


def test_demo_dataset_summary():
    dataset = load_demo_dataset()
    summary = dataset.summary()

    assert summary['rows'] == 30
    assert summary['fields'] == 6
    assert summary['crs'] == CRS_LABEL
    assert dataset.numeric_variables() == ['id', 'yield_kg', 'rainfall_mm', 'soil_ph', 'elevation_m']


def test_numeric_variables_skip_coordinate_names():
    dataset = Dataset((SamplePoint(0, 0, {'lat_deg': 1.0, 'Longitude': 2.0, 'ph': 6.5,
                                          'label': 'x'}),))
    assert dataset.numeric_variables() == ['ph']


def test_to_dataframe_round_trips_coordinates(demo_dataset):
    df = demo_dataset.to_dataframe()
    assert len(df) == 30
    assert {'lat', 'lng', 'yield_kg', 'crop_type'} <= set(df.columns)
