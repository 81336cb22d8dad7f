"""
Basic functionality tests for the spending cross-validation package.
"""

import unittest
import numpy as np
import pandas as pd
import matplotlib

matplotlib.use('Agg')
import matplotlib.pyplot as plt

from spending_cv import (
    AnalysisConfig,
    EmptyFoldError,
    InvalidConfigurationError,
    create_sample_data,
    run_analysis
)
from spending_cv.visualization import plot_bootstrap_distribution, plot_fold_predictions


class TestBasicFunctionality(unittest.TestCase):
    """Test the end-to-end analysis pipeline."""

    def setUp(self):
        """Set up test fixtures."""
        self.data = create_sample_data(n_samples=200, n_conditions=4, random_state=42)
        self.config = AnalysisConfig(
            n_folds=4,
            n_resamples=200,
            n_workers=2,
            backend='threading',
            seed=1248
        )

    def test_run_analysis(self):
        """Test a full run on synthetic data."""
        result = run_analysis(self.data, self.config)

        self.assertEqual(len(result.predictions), len(self.data))
        self.assertEqual(sorted(result.predictions['fold'].unique()), [1, 2, 3, 4])

        lo, hi = result.interval
        self.assertLessEqual(lo, hi)
        self.assertTrue(lo <= result.bootstrap.mean <= hi)

        self.assertIn('region_west', result.model.feature_names_)
        self.assertEqual(
            set(result.timings), {'prepare', 'ols', 'cross-validation', 'bootstrap'}
        )

    def test_reproducible(self):
        """Same seed and pool size give the same interval."""
        first = run_analysis(self.data, self.config)
        second = run_analysis(self.data, self.config)
        self.assertEqual(first.interval, second.interval)

    def test_overrides(self):
        """Keyword overrides replace config fields."""
        result = run_analysis(self.data, self.config, n_folds=5, n_workers=1)
        self.assertEqual(result.config.n_folds, 5)
        self.assertEqual(self.config.n_folds, 4)

    def test_invalid_override(self):
        with self.assertRaises(InvalidConfigurationError):
            run_analysis(self.data, self.config, n_folds=1)

    def test_too_few_records_names_stage(self):
        data = pd.DataFrame({'age': [30.0, 40.0, 50.0], 'totpay': [100.0, 200.0, 300.0]})
        config = AnalysisConfig(n_folds=5, n_workers=1)

        with self.assertRaisesRegex(EmptyFoldError, "cross-validation fold 3") as ctx:
            run_analysis(data, config)
        self.assertEqual(ctx.exception.fold, 3)

    def test_summary(self):
        summary = run_analysis(self.data, self.config).summary()
        self.assertEqual(summary['n_records'], 200)
        self.assertEqual(summary['missing_predictions'], 0)
        self.assertEqual(summary['missing_resamples'], 0)

    def test_missing_values_pipeline(self):
        """Missing features are excluded, never zeroed."""
        data = create_sample_data(n_samples=200, missing_rate=0.02, random_state=3)
        result = run_analysis(data, self.config)
        n_missing = int(result.predictions['pred'].isna().sum())

        self.assertGreater(n_missing, 0)
        self.assertFalse(np.isnan(result.bootstrap.lower))

    def test_plots(self):
        result = run_analysis(self.data, self.config)

        fig, ax = plot_bootstrap_distribution(result.bootstrap)
        self.assertIsInstance(fig, plt.Figure)
        plt.close(fig)

        fig, ax = plot_fold_predictions(result.predictions, observed=self.data['totpay'])
        self.assertEqual(len(ax.get_xticklabels()), 4)
        plt.close(fig)


class TestPackageIntegration(unittest.TestCase):
    """Test package integration and imports."""

    def test_imports(self):
        """Test that all main components can be imported."""
        try:
            from spending_cv import (
                load_spending_data,
                OLSRegressor,
                cross_validate,
                bootstrap_ci,
                run_analysis
            )
        except ImportError as e:
            self.fail(f"Import failed: {e}")

    def test_package_metadata(self):
        """Test package metadata."""
        import spending_cv

        self.assertTrue(hasattr(spending_cv, '__version__'))
        self.assertTrue(hasattr(spending_cv, '__author__'))


if __name__ == '__main__':
    unittest.main()
