"""Tests for AnalysisConfig."""
import pytest
import numpy as np

from spending_cv.config import AnalysisConfig
from spending_cv.exceptions import InvalidConfigurationError


class TestAnalysisConfig:
    """Tests for AnalysisConfig."""

    def test_default_config(self):
        """Default config should have reasonable values."""
        config = AnalysisConfig()
        assert config.n_folds == 5
        assert config.n_resamples == 500
        assert (config.lower, config.upper) == (0.025, 0.975)
        assert config.n_workers == 4
        assert config.target == 'totpay'

    @pytest.mark.parametrize("overrides", [
        {'n_folds': 1},
        {'n_folds': 2.5},
        {'n_resamples': 0},
        {'n_resamples': -10},
        {'lower': 0.6, 'upper': 0.4},
        {'upper': 1.2},
        {'lower': 'a'},
        {'upper': None},
        {'n_workers': 0},
        {'backend': 'spark'},
        {'target': ''},
    ])
    def test_invalid_values(self, overrides):
        with pytest.raises(InvalidConfigurationError):
            AnalysisConfig(**overrides)

    def test_invalid_config_is_value_error(self):
        with pytest.raises(ValueError):
            AnalysisConfig(n_folds=0)

    def test_numpy_integers_accepted(self):
        config = AnalysisConfig(n_folds=np.int64(4), n_resamples=np.int32(100))
        assert config.n_folds == 4

    def test_from_dict(self):
        config = AnalysisConfig.from_dict({'n_folds': 4, 'seed': 7})
        assert config.n_folds == 4
        assert config.seed == 7
        assert config.n_resamples == 500

    def test_from_dict_unknown_key(self):
        with pytest.raises(InvalidConfigurationError, match="nfolds"):
            AnalysisConfig.from_dict({'nfolds': 4})

    def test_round_trip(self):
        config = AnalysisConfig(n_folds=3, backend='threading')
        assert AnalysisConfig.from_dict(config.to_dict()) == config
