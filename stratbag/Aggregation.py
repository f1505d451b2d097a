# Aggregation.py
"""
Rules combining the per-row predictions of the ensemble members.

Every rule takes a sequence of prediction vectors (one per member, all of the
same length) plus the ensemble threshold and returns one value per row.
"""
from functools import reduce

import numpy as np
from scipy import stats

from .exceptions import EmptyEnsemble, SchemaMismatch


def _as_vectors(predictions):
    vectors = [np.asarray(p, dtype=float).ravel() for p in predictions]
    if not vectors:
        raise EmptyEnsemble("Aggregation requires predictions from at least one model")
    n_rows = len(vectors[0])
    for i, v in enumerate(vectors[1:], start=1):
        if len(v) != n_rows:
            raise SchemaMismatch(
                f"Predictions of model {i} have {len(v)} rows, expected {n_rows}"
            )
    return vectors


def _fold(vectors):
    return reduce(np.add, vectors[1:], vectors[0].copy())


def sum_predictions(predictions):
    """
    Row-wise sum of the member predictions.

    The sum is a left fold over the member list. Reordering the members can
    change the result by floating point rounding only.
    """
    return _fold(_as_vectors(predictions))


def aggregate(predictions, threshold):
    """
    Sum the member predictions and compare against `threshold`.

    Rows whose sum reaches the threshold are decided as 0.0, all others as 1.0.
    """
    total = sum_predictions(predictions)
    return np.where(total >= threshold, 0.0, 1.0)


def vote(predictions, threshold=None):
    """Per-row majority vote, ties resolved towards the smallest value."""
    stacked = np.vstack(_as_vectors(predictions))
    mode_prediction, _ = stats.mode(stacked, axis=0, keepdims=True)
    return mode_prediction.ravel()


def average(predictions, threshold=None):
    """Per-row mean of the member predictions."""
    vectors = _as_vectors(predictions)
    return _fold(vectors) / len(vectors)
