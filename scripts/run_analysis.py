#!/usr/bin/env python
"""
Analysis Runner

Interpolates a target variable from sample points, cross-validates the
surface, and reports the reliable prediction extent.

Usage:
    python run_analysis.py --config config/analysis_parameters.yaml --target yield_kg
    python run_analysis.py --target yield_kg --predictors rainfall_mm soil_ph
    python run_analysis.py --data samples.csv --target yield_kg --folds 10
"""

import argparse
import sys
import time
from pathlib import Path

import pandas as pd

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from rpe_analysis import (
    AnalysisError,
    Dataset,
    load_demo_dataset,
    load_config,
    run_analysis
)
from rpe_analysis.pipeline import AnalysisConfig, merge_options


def load_dataset(data_path):
    """Load samples from a delimited table, or the demo dataset when no path is given."""
    if data_path is None:
        print("No data file given, using the bundled demo dataset")
        return load_demo_dataset()
    df = pd.read_csv(data_path)
    return Dataset.from_dataframe(df)


def main(args):
    """Run one analysis and print its summary."""
    print(f"\n{'='*70}")
    print("RELIABLE SURFACE ANALYSIS")
    print(f"{'='*70}\n")

    config = load_config(args.config) if args.config else AnalysisConfig()
    config = merge_options(config, [
        ('idw_power', args.power),
        ('cell_size_meters', args.cell_size),
        ('cv_folds', args.folds),
        ('class_method', args.class_method),
        ('num_classes', args.num_classes),
        ('n_jobs', args.n_jobs),
    ])

    dataset = load_dataset(args.data)
    summary = dataset.summary()
    print(f"Rows: {summary['rows']}  Fields: {summary['fields']}  CRS: {summary['crs']}")
    print(f"Numeric variables: {', '.join(dataset.numeric_variables())}\n")

    start_time = time.time()
    try:
        result = run_analysis(dataset, args.target, args.predictors or (), config)
    except AnalysisError as e:
        print(f"\n✗ Analysis failed: {e}")
        return 1
    elapsed = time.time() - start_time

    print(f"\n{result.summary()}")
    print(f"\n✓ Analysis completed in {elapsed:.1f}s")

    return 0


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Interpolate sample points and compute the reliable prediction extent')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to analysis parameters YAML')
    parser.add_argument('--data', type=str, default=None,
                        help='CSV with latitude/longitude columns (default: demo dataset)')
    parser.add_argument('--target', type=str, required=True,
                        help='Target variable to interpolate')
    parser.add_argument('--predictors', type=str, nargs='*', default=None,
                        help='Predictor variables (makes the run predictor-based)')
    parser.add_argument('--power', type=float, default=None,
                        help='IDW power')
    parser.add_argument('--cell-size', type=float, default=None,
                        help='Cell size in meters')
    parser.add_argument('--folds', type=int, default=None,
                        help='Cross-validation folds')
    parser.add_argument('--class-method', type=str, default=None,
                        choices=['equal', 'quantile', 'jenks'],
                        help='Classification method')
    parser.add_argument('--num-classes', type=int, default=None,
                        help='Number of classes')
    parser.add_argument('--n-jobs', type=int, default=None,
                        help='Parallel workers for per-cell stages')

    args = parser.parse_args()
    sys.exit(main(args))
