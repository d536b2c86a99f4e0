"""Bundled agronomic demo dataset (30 maize plots in central Nigeria)."""

from .dataset import Dataset, SamplePoint

DEMO_HEADERS = ['id', 'yield_kg', 'rainfall_mm', 'soil_ph', 'elevation_m', 'crop_type']

# (lat, lng, yield_kg, rainfall_mm, soil_ph, elevation_m)
_DEMO_ROWS = [
    (9.082, 8.675, 2500, 1200, 6.5, 350),
    (9.095, 8.690, 2800, 1250, 6.8, 360),
    (9.070, 8.660, 2200, 1180, 6.2, 340),
    (9.110, 8.705, 3100, 1300, 7.0, 380),
    (9.088, 8.680, 2650, 1220, 6.6, 355),
    (9.100, 8.695, 2900, 1270, 6.9, 370),
    (9.075, 8.670, 2400, 1190, 6.4, 345),
    (9.105, 8.700, 3000, 1290, 6.95, 375),
    (9.092, 8.685, 2750, 1240, 6.7, 362),
    (9.078, 8.665, 2350, 1170, 6.3, 342),
    (9.115, 8.710, 3200, 1320, 7.1, 385),
    (9.085, 8.678, 2600, 1210, 6.55, 352),
    (9.098, 8.692, 2850, 1260, 6.85, 368),
    (9.072, 8.668, 2300, 1185, 6.35, 343),
    (9.108, 8.703, 3050, 1295, 6.98, 378),
    (9.090, 8.683, 2700, 1230, 6.65, 358),
    (9.080, 8.673, 2450, 1195, 6.45, 348),
    (9.112, 8.708, 3150, 1310, 7.05, 382),
    (9.087, 8.681, 2620, 1215, 6.58, 354),
    (9.095, 8.688, 2820, 1255, 6.82, 365),
    (9.073, 8.662, 2250, 1175, 6.25, 338),
    (9.103, 8.698, 2950, 1280, 6.92, 372),
    (9.084, 8.676, 2550, 1205, 6.52, 350),
    (9.097, 8.691, 2880, 1265, 6.88, 367),
    (9.077, 8.671, 2380, 1188, 6.38, 346),
    (9.107, 8.702, 3020, 1292, 6.96, 376),
    (9.089, 8.682, 2680, 1225, 6.62, 356),
    (9.101, 8.696, 2920, 1275, 6.90, 371),
    (9.074, 8.664, 2280, 1178, 6.28, 341),
    (9.113, 8.707, 3180, 1315, 7.08, 384),
]


def load_demo_dataset():
    """
    Load the bundled demo dataset.

    Returns
    -------
    Dataset
        30 sample points with yield, rainfall, soil pH, elevation and crop type

    Examples
    --------
    >>> ds = load_demo_dataset()
    >>> len(ds)
    30
    >>> ds.numeric_variables()
    ['id', 'yield_kg', 'rainfall_mm', 'soil_ph', 'elevation_m']
    """
    points = []
    for i, (lat, lng, yield_kg, rainfall, ph, elevation) in enumerate(_DEMO_ROWS, start=1):
        attributes = {
            'id': i,
            'yield_kg': yield_kg,
            'rainfall_mm': rainfall,
            'soil_ph': ph,
            'elevation_m': elevation,
            'crop_type': 'Maize'
        }
        points.append(SamplePoint(lat, lng, attributes))
    return Dataset(tuple(points))
