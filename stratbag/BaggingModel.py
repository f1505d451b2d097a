# BaggingModel.py
import logging

import numpy as np
from joblib import Parallel, delayed
from sklearn.utils.validation import check_array

from .Aggregation import sum_predictions
from .BaggingParams import BaggingConfig
from .exceptions import EmptyEnsemble, InvalidConfig, SchemaMismatch
from .interface import get_aggregation_rule
from .utils import feature_columns, frame_features

logger = logging.getLogger(__name__)

OVERRIDABLE_PARAMS = ("threshold", "prediction_col", "features_col", "aggregation", "n_jobs")


def _predict_member(model, X):
    return np.asarray(model.predict(X), dtype=float).ravel()


def output_columns(columns, config):
    columns = list(columns)
    feature_columns(columns, config.features_col, exclude=(config.label_col, config.prediction_col))
    if config.prediction_col in columns:
        raise SchemaMismatch(f"Output column {config.prediction_col!r} already exists")
    logger.debug("Input columns %s -> output column %r", columns, config.prediction_col)
    return columns + [config.prediction_col]


class BaggingModel:
    """
    Fitted bootstrap aggregating ensemble.

    Holds the models trained by StratifiedBagging, in the order their bootstrap
    samples were drawn, together with the BaggingConfig in force at fit time.
    Instances are never modified: with_params returns a new model sharing the
    fitted members.

    By default the member predictions are summed per row and every row whose sum
    reaches `threshold` is decided as 0.0, every other row as 1.0. The same rule
    is used whether or not `is_classifier` is set; 'vote' and 'average' are
    available through the `aggregation` parameter.
    """
    def __init__(self, models, config=None, parent=None):
        models = tuple(models)
        if not models:
            raise EmptyEnsemble(f"BaggingModel requires > 0 models to aggregate over, got {len(models)}")
        self._models = models
        self._config = (config if config is not None else BaggingConfig()).validate()
        self._rule = get_aggregation_rule(self._config.aggregation)
        self._parent = parent

    @property
    def models(self):
        return self._models

    @property
    def config(self):
        return self._config

    @property
    def parent(self):
        """The StratifiedBagging estimator that produced this model, if any."""
        return self._parent

    @property
    def threshold(self):
        return self._config.threshold

    @property
    def prediction_col(self):
        return self._config.prediction_col

    def __len__(self):
        return len(self._models)

    def __repr__(self):
        return (f"{type(self).__name__}(n_models={len(self._models)}, "
                f"threshold={self._config.threshold}, aggregation={self._config.aggregation!r})")

    def with_params(self, **overrides):
        """Return a copy of this model with aggregation or column settings replaced."""
        unknown = set(overrides) - set(OVERRIDABLE_PARAMS)
        if unknown:
            raise InvalidConfig(f"Cannot override {sorted(unknown)} on a fitted BaggingModel")
        return BaggingModel(self._models, self._config.with_params(**overrides), parent=self._parent)

    def member_predictions(self, X):
        """One prediction vector per member, row-aligned with X."""
        X = check_array(X)
        predictions = Parallel(n_jobs=self._config.n_jobs, prefer="threads")(
            delayed(_predict_member)(model, X) for model in self._models
        )
        for i, p in enumerate(predictions):
            if len(p) != X.shape[0]:
                raise SchemaMismatch(
                    f"Model {i} returned {len(p)} predictions for {X.shape[0]} input rows"
                )
        return predictions

    def decision_function(self, X):
        """Row-wise sum of the member predictions."""
        return sum_predictions(self.member_predictions(X))

    def predict(self, X):
        return self._rule(self.member_predictions(X), self._config.threshold)

    def predict_proba(self, X):
        """Mean of the members' class probabilities."""
        if not all(hasattr(model, "predict_proba") for model in self._models):
            raise AttributeError("Not every ensemble member supports predict_proba")
        X = check_array(X)
        probas = [model.predict_proba(X) for model in self._models]
        if len({p.shape for p in probas}) > 1:
            raise SchemaMismatch("Ensemble members disagree on the number of classes")
        return np.mean(np.asarray(probas), axis=0)

    def transform_schema(self, columns):
        """Column names of the frame produced by transform for input `columns`."""
        return output_columns(columns, self._config)

    def transform(self, frame):
        """Return a copy of `frame` with the ensemble decision in `prediction_col`."""
        self.transform_schema(frame.columns)
        cfg = self._config
        X = frame_features(frame, cfg.features_col, exclude=(cfg.label_col, cfg.prediction_col))
        out = frame.copy()
        out[cfg.prediction_col] = self.predict(X)
        return out
