# BaggingParams.py
import numbers
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

from .exceptions import InvalidConfig
from .interface import get_aggregation_rule


@dataclass(frozen=True)
class BaggingConfig:
    """
    Immutable parameter set shared by StratifiedBagging and BaggingModel.

    Parameters:
        n_estimators: Number of models trained on bootstrap samples (>= 1, default: 3)
        estimator: Base scikit-learn estimator, cloned once per model
            (default: None, meaning DecisionTreeClassifier(random_state=42))
        is_classifier: Whether the bagged model is a classifier (True) or a regressor
            (False). Informational only, the aggregation rule is chosen by `aggregation`.
        threshold: Cutoff applied to the summed member predictions (>= 1, default: 2)
        random_state: Seed or RandomState driving every bootstrap draw. None is not
            reproducible: each fit draws different samples
        sampling_rates: Mapping of class label to sampling rate
            (default: None, meaning StratifiedSampler.DEFAULT_SAMPLING_RATES)
        aggregation: Name of the rule combining member predictions (default: 'threshold')
        features_col: Feature column(s) used by the DataFrame API
        label_col: Label column used by the DataFrame API (default: 'label')
        prediction_col: Output column added by transform (default: 'prediction')
        n_jobs: Number of joblib workers for fitting and scoring members
    """
    n_estimators: int = 3
    estimator: Any = None
    is_classifier: bool = True
    threshold: int = 2
    random_state: Any = None
    sampling_rates: Optional[Dict[Any, float]] = None
    aggregation: str = "threshold"
    features_col: Any = None
    label_col: str = "label"
    prediction_col: str = "prediction"
    n_jobs: Optional[int] = None

    def validate(self):
        _check_positive_int("n_estimators", self.n_estimators)
        _check_positive_int("threshold", self.threshold)
        get_aggregation_rule(self.aggregation)
        return self

    def with_params(self, **overrides):
        """Return a validated copy of this config with `overrides` applied."""
        names = {f.name for f in fields(self)}
        unknown = set(overrides) - names
        if unknown:
            raise InvalidConfig(f"Invalid parameter(s) {sorted(unknown)} for BaggingConfig")
        return replace(self, **overrides).validate()

    @classmethod
    def from_params(cls, params):
        """Build a validated config from a `get_params(deep=False)` style mapping."""
        names = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in params.items() if k in names}
        if kwargs.get("sampling_rates") is not None:
            kwargs["sampling_rates"] = dict(kwargs["sampling_rates"])
        return cls(**kwargs).validate()


def _check_positive_int(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidConfig(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidConfig(f"{name} must be >= 1, got {value}")
