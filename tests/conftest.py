"""
Shared fixtures for the stratbag tests.

Provides:
- Stub base estimators with fully predictable behaviour
- Small labelled datasets as arrays and as DataFrames
"""
import numpy as np
import pandas as pd
import pytest
from sklearn.base import BaseEstimator, RegressorMixin


# =============================================================================
# STUB ESTIMATORS
# =============================================================================

class ColumnEstimator(RegressorMixin, BaseEstimator):
    """Predicts the value of one feature column, whatever it was trained on."""

    def __init__(self, column=0):
        self.column = column

    def fit(self, X, y):
        self.n_features_in_ = np.asarray(X).shape[1]
        return self

    def predict(self, X):
        return np.asarray(X)[:, self.column].astype(float)


class RecordingEstimator(BaseEstimator):
    """Keeps a copy of the data it was trained on."""

    def fit(self, X, y):
        self.X_ = np.array(X, copy=True)
        self.y_ = np.array(y, copy=True)
        return self

    def predict(self, X):
        return np.zeros(len(X))


class FailingEstimator(BaseEstimator):
    """Fails on every fit."""

    def fit(self, X, y):
        raise RuntimeError("fit failed")

    def predict(self, X):
        return np.zeros(len(X))


class ShortEstimator(BaseEstimator):
    """Returns one prediction fewer than there are rows."""

    def fit(self, X, y):
        return self

    def predict(self, X):
        return np.zeros(len(X) - 1)


class ProbaEstimator(BaseEstimator):
    """Returns the same class probabilities for every row."""

    def __init__(self, proba=(0.5, 0.5)):
        self.proba = proba

    def fit(self, X, y):
        return self

    def predict(self, X):
        return np.full(len(X), float(np.argmax(self.proba)))

    def predict_proba(self, X):
        return np.tile(np.asarray(self.proba, dtype=float), (len(X), 1))


# =============================================================================
# DATA FIXTURES
# =============================================================================

@pytest.fixture
def ten_rows():
    """10 rows, feature 0 is 1.0 on rows 0-4 and 0.0 on rows 5-9."""
    X = np.column_stack([
        np.array([1.0] * 5 + [0.0] * 5),
        np.arange(10, dtype=float),
    ])
    y = np.array([0, 1, 0, 1, 0, 1, 0, 1, 0, 1])
    return X, y


@pytest.fixture
def imbalanced_data():
    """200 rows, 2 informative features, class 1 is the 10% minority."""
    rng = np.random.RandomState(0)
    n_major, n_minor = 180, 20
    X = np.vstack([
        rng.normal(loc=0.0, scale=1.0, size=(n_major, 2)),
        rng.normal(loc=3.0, scale=1.0, size=(n_minor, 2)),
    ])
    y = np.array([0] * n_major + [1] * n_minor)
    return X, y


@pytest.fixture
def ten_rows_frame(ten_rows):
    X, y = ten_rows
    return pd.DataFrame({"f0": X[:, 0], "f1": X[:, 1], "label": y})


@pytest.fixture
def unit_rates():
    return {0: 1.0, 1: 1.0}
