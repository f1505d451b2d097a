# StratifiedSampler.py
import logging

import numpy as np
from sklearn.utils import check_random_state

from .exceptions import InvalidSamplingSpec

logger = logging.getLogger(__name__)

DEFAULT_SAMPLING_RATES = {2: 0.05, 1: 10.0, 0: 1.0}


class StratifiedSampler:
    """
    Per-class bootstrap sampler.

    Each class is resampled independently at its own rate. For a class with n_c
    rows, rate * n_c rows rounded half up are drawn: with replacement when rate >= 1
    (a rate of 1.0 is the classic bootstrap), without replacement when rate < 1.
    Rates other than 1.0 rebalance the classes on purpose.

    Parameters:
        sampling_rates: Mapping of class label to a non-negative rate
            (default: None, meaning DEFAULT_SAMPLING_RATES)
    """
    def __init__(self, sampling_rates=None):
        rates = DEFAULT_SAMPLING_RATES if sampling_rates is None else sampling_rates
        for label, rate in rates.items():
            if rate < 0:
                raise InvalidSamplingSpec(f"Sampling rate for class {label} must be >= 0, got {rate}")
        self.sampling_rates = dict(rates)

    def sample_indices(self, y, rng):
        """
        Draw the row indices of one stratified bootstrap sample.

        Randomness is consumed from `rng` only, so a sequence of calls sharing one
        generator is reproducible from its seed. The indices are returned sorted,
        which keeps the sample in the row order of the input.
        """
        rng = check_random_state(rng)
        y = np.asarray(y).ravel()
        drawn = []
        for label in np.unique(y):
            if label not in self.sampling_rates:
                raise InvalidSamplingSpec(f"No sampling rate configured for class {label}")
            rate = self.sampling_rates[label]
            class_indices = np.flatnonzero(y == label)
            size = int(np.floor(rate * len(class_indices) + 0.5))
            drawn.append(rng.choice(class_indices, size=size, replace=rate >= 1))
            logger.debug("Class %r: drew %d of %d rows at rate %s", label, size, len(class_indices), rate)
        if not drawn:
            return np.empty(0, dtype=int)
        return np.sort(np.concatenate(drawn))

    def sample(self, X, y, rng):
        idx = self.sample_indices(y, rng)
        return np.asarray(X)[idx], np.asarray(y)[idx]

    def sample_frame(self, frame, label_col, rng):
        """Stratified bootstrap sample of a DataFrame, keyed on `label_col`."""
        idx = self.sample_indices(frame[label_col].to_numpy(), rng)
        return frame.iloc[idx].reset_index(drop=True)
