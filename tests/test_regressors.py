"""Tests for the OLS spending regressor."""
import pytest
import numpy as np
import pandas as pd

from spending_cv.exceptions import InsufficientDataError
from spending_cv.models import OLSRegressor, fit, predict


class TestOLSRegressor:
    """Tests for OLSRegressor."""

    def test_exact_fit(self, linear_data):
        """A noiseless line is recovered exactly."""
        model = OLSRegressor(target='y').fit(linear_data)
        coefs = model.coefficients()
        assert coefs['(Intercept)'] == pytest.approx(0.0, abs=1e-9)
        assert coefs['x'] == pytest.approx(2.0)
        np.testing.assert_allclose(model.predict(linear_data), linear_data['y'])

    def test_predictions_follow_input_order(self, noisy_linear_data):
        model = OLSRegressor().fit(noisy_linear_data)
        reversed_data = noisy_linear_data.iloc[::-1]
        np.testing.assert_allclose(
            model.predict(reversed_data),
            model.predict(noisy_linear_data)[::-1]
        )

    def test_recovers_coefficients(self, noisy_linear_data):
        coefs = OLSRegressor().fit(noisy_linear_data).coefficients()
        assert coefs['x1'] == pytest.approx(3.0, abs=0.3)
        assert coefs['x2'] == pytest.approx(-2.0, abs=0.3)

    def test_fit_with_separate_target(self, noisy_linear_data):
        X = noisy_linear_data[['x1', 'x2']]
        y = noisy_linear_data['totpay'].values
        model = OLSRegressor().fit(X, y)
        assert model.feature_names_ == ['x1', 'x2']
        assert model.n_train_ == 60

    def test_insufficient_records(self):
        """Fewer records than features + 1 cannot be fitted."""
        data = pd.DataFrame({
            'a': [1.0, 2.0], 'b': [0.0, 1.0], 'totpay': [10.0, 20.0]
        })
        with pytest.raises(InsufficientDataError, match="at least 3"):
            OLSRegressor().fit(data)

    def test_incomplete_rows_are_dropped(self, linear_data):
        data = linear_data.copy()
        data.loc[4] = [np.nan, 100.0]
        data.loc[5] = [5.0, np.nan]
        model = OLSRegressor(target='y').fit(data)
        assert model.n_train_ == 4
        assert model.coefficients()['x'] == pytest.approx(2.0)

    def test_missing_feature_predicts_missing(self, linear_data):
        model = OLSRegressor(target='y').fit(linear_data)
        test = pd.DataFrame({'x': [5.0, np.nan]})
        preds = model.predict(test)
        assert preds[0] == pytest.approx(10.0)
        assert np.isnan(preds[1])

    def test_predict_before_fit(self, linear_data):
        with pytest.raises(ValueError, match="fitted"):
            OLSRegressor(target='y').predict(linear_data)

    def test_missing_target_column(self, linear_data):
        with pytest.raises(ValueError, match="not found"):
            OLSRegressor(target='totpay').fit(linear_data)

    def test_categorical_feature_rejected(self, raw_spending_data):
        with pytest.raises(ValueError, match="encode_categoricals"):
            OLSRegressor().fit(raw_spending_data)

    def test_predict_missing_feature_column(self, noisy_linear_data):
        model = OLSRegressor().fit(noisy_linear_data)
        with pytest.raises(ValueError, match="x2"):
            model.predict(noisy_linear_data[['x1']])


class TestModuleFunctions:
    """Tests for the fit / predict functions."""

    def test_fit_predict(self, linear_data):
        model = fit(linear_data.iloc[2:], target='y')
        preds = predict(model, linear_data.iloc[:2])
        np.testing.assert_allclose(preds, [2.0, 4.0])
