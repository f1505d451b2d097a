# StratifiedBagging.py
import logging

import numpy as np
from joblib import Parallel, delayed
from sklearn.base import BaseEstimator, ClassifierMixin, clone
from sklearn.tree import DecisionTreeClassifier
from sklearn.utils import check_random_state
from sklearn.utils.validation import check_X_y, check_is_fitted

from .BaggingModel import BaggingModel, output_columns
from .BaggingParams import BaggingConfig
from .StratifiedSampler import StratifiedSampler
from .utils import frame_to_xy

logger = logging.getLogger(__name__)


def _fit_estimator(estimator, X, y):
    estimator.fit(X, y)
    return estimator


class StratifiedBagging(ClassifierMixin, BaseEstimator):
    """
    Stratified Bootstrap Aggregating (bagging) ensemble.

    Given a dataset, `n_estimators` stratified bootstrap samples are drawn and a
    clone of `estimator` is trained on each one. Every class is resampled at its
    own rate from `sampling_rates`, so the samples can rebalance skewed classes.
    At prediction time the member predictions are summed per row and compared
    against `threshold` (see BaggingModel).

    All bootstrap index sets are drawn in sequence from one generator seeded by
    `random_state` before any member is fitted, so the samples depend on the seed
    and `n_estimators` only. The fits themselves run through joblib with `n_jobs`
    workers.

    Source: Breiman, L. (1996). Bagging predictors. Machine learning, 24(2), 123-140.

    Parameters:
        n_estimators: Number of bootstrapped models (>= 1, default: 3)
        estimator: Base estimator (default: None, meaning DecisionTreeClassifier(random_state=42))
        is_classifier: Whether the bagged model is a classifier (default: True)
        threshold: Cutoff on the summed member predictions (>= 1, default: 2)
        random_state: Seed for the bootstrap draws. None draws fresh entropy on every
            fit, so only an explicit seed makes two fits reproducible
        sampling_rates: Mapping of class label to sampling rate
            (default: None, meaning {2: 0.05, 1: 10.0, 0: 1.0})
        aggregation: 'threshold' (default), 'vote' or 'average'
        features_col: Feature column(s) for fit_frame/transform
        label_col: Label column for fit_frame (default: 'label')
        prediction_col: Output column of transform (default: 'prediction')
        n_jobs: Number of joblib workers (default: None, sequential)
    """
    def __init__(self, n_estimators=3, estimator=None, is_classifier=True, threshold=2,
                 random_state=None, sampling_rates=None, aggregation="threshold",
                 features_col=None, label_col="label", prediction_col="prediction", n_jobs=None):
        self.n_estimators = n_estimators
        self.estimator = estimator
        self.is_classifier = is_classifier
        self.threshold = threshold
        self.random_state = random_state
        self.sampling_rates = sampling_rates
        self.aggregation = aggregation
        self.features_col = features_col
        self.label_col = label_col
        self.prediction_col = prediction_col
        self.n_jobs = n_jobs

    @classmethod
    def from_config(cls, config):
        return cls(**{name: getattr(config, name) for name in cls._get_param_names()})

    def get_config(self):
        """Validated, immutable snapshot of the current parameters."""
        return BaggingConfig.from_params(self.get_params(deep=False))

    def with_params(self, **overrides):
        """Return a new unfitted estimator with `overrides` applied."""
        return self.from_config(self.get_config().with_params(**overrides))

    def fit_ensemble(self, X, y):
        """
        Train the ensemble and return it as a BaggingModel.

        A failing member fit aborts the whole ensemble; the exception raised by
        the base estimator is propagated as is.
        """
        config = self.get_config()
        X, y = check_X_y(X, y)
        base = config.estimator if config.estimator is not None else DecisionTreeClassifier(random_state=42)

        rng = check_random_state(config.random_state)
        sampler = StratifiedSampler(config.sampling_rates)
        boot_indices = [sampler.sample_indices(y, rng) for _ in range(config.n_estimators)]

        logger.info("Fitting %d models on stratified bootstrap samples of %d rows",
                    config.n_estimators, X.shape[0])
        for b, idx in enumerate(boot_indices):
            logger.debug("boot_%d: %d rows", b, len(idx))

        models = Parallel(n_jobs=config.n_jobs)(
            delayed(_fit_estimator)(clone(base), X[idx], y[idx]) for idx in boot_indices
        )
        logger.info("Fitted %d models", len(models))
        return BaggingModel(models, config, parent=self)

    def fit(self, X, y):
        self.get_config()
        X, y = check_X_y(X, y)
        ensemble = self.fit_ensemble(X, y)
        self.ensemble_ = ensemble
        self.estimators_ = list(ensemble.models)
        self.classes_ = np.unique(y)
        self.n_features_in_ = X.shape[1]
        return self

    def fit_frame(self, frame):
        """Train on a DataFrame using `features_col` and `label_col`."""
        self.get_config()
        X, y = frame_to_xy(frame, self.features_col, self.label_col, self.prediction_col)
        return self.fit_ensemble(X, y)

    def transform_schema(self, columns):
        """Output columns of a model fitted by this estimator for input `columns`."""
        return output_columns(columns, self.get_config())

    def decision_function(self, X):
        check_is_fitted(self, 'ensemble_')
        return self.ensemble_.decision_function(X)

    def predict(self, X):
        check_is_fitted(self, 'ensemble_')
        return self.ensemble_.predict(X)

    def predict_proba(self, X):
        check_is_fitted(self, 'ensemble_')
        return self.ensemble_.predict_proba(X)

    def transform(self, frame):
        check_is_fitted(self, 'ensemble_')
        return self.ensemble_.transform(frame)
