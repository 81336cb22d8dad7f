"""
Ordinary least squares model for annual health care spending.
"""

import logging
from typing import Optional, Tuple, Union

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, RegressorMixin
from sklearn.linear_model import LinearRegression

from ..config import DEFAULT_TARGET
from ..exceptions import InsufficientDataError

logger = logging.getLogger(__name__)


class OLSRegressor(RegressorMixin, BaseEstimator):
    """
    Linear regression of a spending target on every other column.

    The least-squares solve is delegated to scikit-learn's LinearRegression.
    Records with a missing value are left out of the fit, and get a missing
    prediction rather than a numeric one.

    Parameters
    ----------
    target : str, default='totpay'
        Name of the target column when ``fit`` receives a single table.
    fit_intercept : bool, default=True
        Whether to estimate an intercept.

    Attributes
    ----------
    model_ : LinearRegression
        The fitted scikit-learn estimator.
    feature_names_ : list
        Feature columns, in the order used for fitting.
    n_train_ : int
        Number of complete records used for fitting.

    Examples
    --------
    >>> model = OLSRegressor(target='totpay').fit(train_df)
    >>> predictions = model.predict(test_df)
    """

    def __init__(self, target: str = DEFAULT_TARGET, fit_intercept: bool = True):
        self.target = target
        self.fit_intercept = fit_intercept

        self.model_ = None
        self.feature_names_ = None
        self.n_train_ = None
        self.is_fitted_ = False

    def _split_target(
        self,
        X: pd.DataFrame,
        y: Optional[Union[np.ndarray, pd.Series]] = None
    ) -> Tuple[pd.DataFrame, pd.Series]:
        """Separate features from the target column."""
        if not isinstance(X, pd.DataFrame):
            X = pd.DataFrame(X)
            X.columns = [f"x{i}" for i in range(X.shape[1])]

        if y is None:
            if self.target not in X.columns:
                raise ValueError(f"Target column '{self.target}' not found in data")
            y = X[self.target]
            X = X.drop(columns=[self.target])
        else:
            y = pd.Series(np.asarray(y), index=X.index, name=self.target)

        if not pd.api.types.is_numeric_dtype(y):
            raise ValueError(f"Target column '{self.target}' must be numeric")

        non_numeric = [
            col for col in X.columns if not pd.api.types.is_numeric_dtype(X[col])
        ]
        if non_numeric:
            raise ValueError(
                f"Non-numeric feature columns {non_numeric}; "
                f"encode them first with encode_categoricals()"
            )

        return X, y

    def fit(
        self,
        X: pd.DataFrame,
        y: Optional[Union[np.ndarray, pd.Series]] = None
    ) -> 'OLSRegressor':
        """
        Fit the regression on the complete records of ``X``.

        Parameters
        ----------
        X : pd.DataFrame
            Training records. If ``y`` is None, must contain the target column.
        y : array-like, optional
            Target values, if not taken from ``X``.

        Returns
        -------
        OLSRegressor
            Fitted model

        Raises
        ------
        InsufficientDataError
            If fewer than ``n_features + 1`` complete records are available.
        """
        features, target = self._split_target(X, y)
        n_features = features.shape[1]
        if n_features == 0:
            raise ValueError("No feature columns to regress the target on")

        complete = features.notna().all(axis=1) & target.notna()
        n_complete = int(complete.sum())
        n_dropped = len(features) - n_complete
        if n_dropped:
            logger.debug("Dropped %d incomplete records before fitting", n_dropped)

        if n_complete < n_features + 1:
            raise InsufficientDataError(
                f"OLS with {n_features} features needs at least {n_features + 1} "
                f"complete training records, got {n_complete}"
            )

        self.model_ = LinearRegression(fit_intercept=self.fit_intercept)
        self.model_.fit(
            features.loc[complete].to_numpy(dtype=float),
            target.loc[complete].to_numpy(dtype=float)
        )

        self.feature_names_ = features.columns.tolist()
        self.n_features_in_ = n_features
        self.n_train_ = n_complete
        self.is_fitted_ = True
        return self

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        """
        Predict spending for each record of ``X``, in input order.

        Records with a missing feature value get ``NaN``.

        Parameters
        ----------
        X : pd.DataFrame
            Records to predict. The target column, if present, is ignored.

        Returns
        -------
        np.ndarray
            One prediction per record
        """
        if not self.is_fitted_:
            raise ValueError("Model must be fitted before making predictions")

        if isinstance(X, pd.DataFrame):
            absent = [col for col in self.feature_names_ if col not in X.columns]
            if absent:
                raise ValueError(f"Feature columns missing from data: {absent}")
            values = X[self.feature_names_].to_numpy(dtype=float)
        else:
            values = np.asarray(X, dtype=float)
            if values.ndim != 2 or values.shape[1] != len(self.feature_names_):
                raise ValueError(
                    f"Expected {len(self.feature_names_)} feature columns, "
                    f"got array of shape {values.shape}"
                )

        predictions = np.full(len(values), np.nan)
        complete = ~np.isnan(values).any(axis=1)
        if complete.any():
            predictions[complete] = self.model_.predict(values[complete])

        return predictions

    def coefficients(self) -> pd.Series:
        """Intercept and coefficients keyed by column name."""
        if not self.is_fitted_:
            raise ValueError("Model must be fitted first")

        return pd.Series(
            np.concatenate([[self.model_.intercept_], self.model_.coef_]),
            index=['(Intercept)'] + self.feature_names_,
            name='coefficient'
        )


def fit(training: pd.DataFrame, target: str = DEFAULT_TARGET) -> OLSRegressor:
    """Fit ``target`` on all other columns of ``training``."""
    return OLSRegressor(target=target).fit(training)


def predict(model: OLSRegressor, test: pd.DataFrame) -> np.ndarray:
    """Predict one value per record of ``test``, in input order."""
    return model.predict(test)
