#!/usr/bin/env python3
"""
Spending Analysis Example

This example demonstrates how to use the spending_cv package to:
1. Load (or simulate) annual health care spending data
2. Fit OLS on the full data
3. Cross-validate predictions over contiguous folds in parallel
4. Bootstrap a confidence interval for mean predicted spending
5. Compare sequential and parallel runs
"""

import logging
import sys
import time

import matplotlib.pyplot as plt

from spending_cv import AnalysisConfig, create_sample_data, load_spending_data, run_analysis
from spending_cv.utils import fold_metrics, parallel_normal_draws
from spending_cv.data import prepare_spending_data
from spending_cv.visualization import plot_bootstrap_distribution, plot_fold_predictions


def main():
    """Run the spending analysis example."""

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)-32s [%(levelname)s] %(message)s"
    )

    print("=== Spending Cross-Validation Example ===")
    print()

    # Step 1: Load data from a CSV path if given, otherwise simulate it
    if len(sys.argv) > 1:
        print(f"1. Loading spending data from {sys.argv[1]}...")
        data = load_spending_data(sys.argv[1])
    else:
        print("1. Generating synthetic spending data...")
        data = create_sample_data(n_samples=5000, n_conditions=10, random_state=42)
    print(f"   Data shape: {data.shape}")
    print()

    # Step 2: Full analysis, sequential
    print("2. Running analysis with 1 worker...")
    config = AnalysisConfig(n_folds=5, n_resamples=500, n_workers=1, seed=1248)
    t0 = time.perf_counter()
    sequential = run_analysis(data, config)
    sequential_time = time.perf_counter() - t0

    lo, hi = sequential.interval
    print(f"   Bootstrapped mean spending: {sequential.bootstrap.mean:.2f}")
    print(f"   95% interval: [{lo:.2f}, {hi:.2f}]")
    print()

    # Step 3: Full analysis, parallel
    print("3. Running analysis with 4 workers...")
    t0 = time.perf_counter()
    parallel = run_analysis(data, config, n_workers=4)
    parallel_time = time.perf_counter() - t0

    lo, hi = parallel.interval
    print(f"   95% interval: [{lo:.2f}, {hi:.2f}]")
    print(f"   Wall-clock: {sequential_time:.2f} s sequential, {parallel_time:.2f} s parallel")
    for stage, seconds in parallel.timings.items():
        print(f"     {stage:<18s} {seconds:.3f} s")
    print()

    # Step 4: Per-fold accuracy
    print("4. Per-fold accuracy of out-of-fold predictions:")
    encoded = prepare_spending_data(data)
    print(fold_metrics(parallel.predictions, encoded).round(2).to_string())
    print()

    # Step 5: Reproducible parallel random numbers
    print("5. Parallel random draws (seed 1248, one sub-stream per worker):")
    for i, draws in enumerate(parallel_normal_draws(n_streams=4, size=3, seed=1248)):
        print(f"   worker {i + 1}: {draws.round(4)}")
    print()

    # Step 6: Plots
    print("6. Saving plots...")
    fig, _ = plot_bootstrap_distribution(parallel.bootstrap, save_path='bootstrap_means.png')
    plt.close(fig)
    fig, _ = plot_fold_predictions(
        parallel.predictions, observed=data['totpay'], save_path='fold_predictions.png'
    )
    plt.close(fig)
    print("   Saved bootstrap_means.png and fold_predictions.png")


if __name__ == '__main__':
    main()
