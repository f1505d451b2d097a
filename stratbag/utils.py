# utils.py
import logging

import numpy as np
import pandas as pd
from imblearn.metrics import geometric_mean_score
from sklearn.metrics import balanced_accuracy_score, classification_report

from .exceptions import SchemaMismatch

logger = logging.getLogger(__name__)


def feature_columns(columns, features_col=None, exclude=()):
    """
    Resolve the feature column names of a table.

    Parameters:
        columns: Column names of the table
        features_col: A column name, a list of column names, or None for every
            column not listed in `exclude`
        exclude: Columns never used as features (label, prediction)

    Returns:
        List of feature column names
    """
    columns = list(columns)
    if features_col is None:
        resolved = [c for c in columns if c not in exclude]
    elif isinstance(features_col, str):
        resolved = [features_col]
    else:
        resolved = list(features_col)
    missing = [c for c in resolved if c not in columns]
    if missing:
        raise SchemaMismatch(f"Feature column(s) {missing} not found in {columns}")
    if not resolved:
        raise SchemaMismatch("No feature columns left to train on")
    return resolved


def frame_features(frame, features_col=None, exclude=()):
    """
    Extract the feature matrix from a DataFrame.

    A single column whose cells hold array-likes is treated as a vector column
    and stacked into a 2-D matrix.
    """
    cols = feature_columns(frame.columns, features_col, exclude)
    if len(cols) == 1 and len(frame) and np.ndim(frame[cols[0]].iloc[0]) > 0:
        return np.vstack(frame[cols[0]].to_numpy()).astype(float)
    return frame[cols].to_numpy()


def frame_to_xy(frame, features_col=None, label_col="label", prediction_col="prediction"):
    if label_col not in frame.columns:
        raise SchemaMismatch(f"Label column {label_col!r} not found in {list(frame.columns)}")
    X = frame_features(frame, features_col, exclude=(label_col, prediction_col))
    return X, frame[label_col].to_numpy()


def zip_with_index(frame, offset=1, col_name="id", in_front=True):
    """
    Add a consecutive row id column to a DataFrame.

    Parameters:
        frame: Input DataFrame
        offset: Id of the first row (default: 1)
        col_name: Name of the id column (default: 'id')
        in_front: Insert the id as first column (True) or append it as last (False)

    Returns:
        New DataFrame, the input is left untouched
    """
    ids = pd.Series(np.arange(len(frame), dtype=np.int64) + offset, index=frame.index)
    out = frame.copy()
    if in_front:
        out.insert(0, col_name, ids)
    else:
        out[col_name] = ids
    return out


def evaluate_model(model, X_test, y_test, verbose=True):
    """
    Evaluate model performance with imbalance-aware metrics

    Parameters:
        model: Trained classifier
        X_test: Test features
        y_test: True test labels
        verbose: Whether to log the detailed report (default: True)

    Returns:
        Dictionary of evaluation metrics
    """
    y_pred = model.predict(X_test)

    results = {
        'balanced_accuracy': balanced_accuracy_score(y_test, y_pred),
        'geometric_mean': geometric_mean_score(y_test, y_pred),
    }

    if verbose:
        logger.info("Classification Report:\n%s", classification_report(y_test, y_pred, zero_division=0))
        logger.info("Balanced Accuracy: %.4f, G-mean: %.4f",
                    results['balanced_accuracy'], results['geometric_mean'])

    return results
