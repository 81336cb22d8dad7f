"""Tests for spending table validation and encoding."""
import pytest
import numpy as np
import pandas as pd

from spending_cv.data.preprocessing import (
    encode_categoricals,
    prepare_spending_data,
    validate_dataset
)


class TestValidateDataset:
    """Tests for validate_dataset."""

    def test_summary(self, raw_spending_data):
        summary = validate_dataset(raw_spending_data)
        assert summary['n_records'] == 120
        assert summary['n_features'] == 6
        assert summary['categorical_features'] == ['region']
        assert summary['missing_values'] == {}

    def test_counts_missing_values(self, linear_data):
        data = linear_data.copy()
        data.loc[0, 'x'] = np.nan
        summary = validate_dataset(data, target='y')
        assert summary['missing_values'] == {'x': 1}

    def test_missing_target(self, linear_data):
        with pytest.raises(ValueError, match="not found"):
            validate_dataset(linear_data)

    def test_non_numeric_target(self):
        data = pd.DataFrame({'x': [1.0, 2.0], 'totpay': ['a', 'b']})
        with pytest.raises(ValueError, match="numeric"):
            validate_dataset(data)

    def test_no_features(self):
        with pytest.raises(ValueError, match="no feature columns"):
            validate_dataset(pd.DataFrame({'totpay': [1.0, 2.0]}))

    def test_duplicate_columns(self):
        data = pd.DataFrame([[1.0, 2.0, 3.0]], columns=['x', 'x', 'totpay'])
        with pytest.raises(ValueError, match="Duplicate"):
            validate_dataset(data)

    def test_not_a_dataframe(self):
        with pytest.raises(ValueError, match="DataFrame"):
            validate_dataset([[1, 2]])


class TestEncodeCategoricals:
    """Tests for encode_categoricals."""

    def test_drops_reference_level(self, raw_spending_data):
        encoded = encode_categoricals(raw_spending_data)
        region_cols = [c for c in encoded.columns if c.startswith('region_')]
        assert region_cols == ['region_northeast', 'region_south', 'region_west']
        assert 'region' not in encoded.columns
        assert all(pd.api.types.is_numeric_dtype(encoded[c]) for c in encoded.columns)

    def test_keeps_column_order(self, raw_spending_data):
        encoded = encode_categoricals(raw_spending_data)
        assert encoded.columns[:2].tolist() == ['age', 'female']
        assert encoded.columns[-1] == 'totpay'

    def test_missing_category_stays_missing(self):
        data = pd.DataFrame({
            'region': ['south', None, 'west', 'south'],
            'totpay': [1.0, 2.0, 3.0, 4.0]
        })
        encoded = encode_categoricals(data)
        assert encoded.loc[1].drop('totpay').isnull().all()
        assert encoded.loc[0, 'region_west'] == 0.0

    def test_numeric_only_is_copied(self, linear_data):
        encoded = encode_categoricals(linear_data, target='y')
        pd.testing.assert_frame_equal(encoded, linear_data)
        assert encoded is not linear_data

    def test_input_not_modified(self, raw_spending_data):
        before = raw_spending_data.copy()
        encode_categoricals(raw_spending_data)
        pd.testing.assert_frame_equal(raw_spending_data, before)


class TestPrepareSpendingData:
    """Tests for prepare_spending_data."""

    def test_validates_and_encodes(self, raw_spending_data):
        prepared = prepare_spending_data(raw_spending_data)
        assert 'region' not in prepared.columns
        assert len(prepared) == len(raw_spending_data)

    def test_rejects_invalid(self, linear_data):
        with pytest.raises(ValueError):
            prepare_spending_data(linear_data)
