"""Exceptions raised by the stratbag estimators."""


class InvalidConfig(ValueError):
    """Raised when an ensemble parameter is out of range.

    Detected before any sampling or training takes place.
    """


class InvalidSamplingSpec(ValueError):
    """Raised when a class label has no sampling rate or a rate is negative."""


class SchemaMismatch(ValueError):
    """Raised when predictions or columns do not line up with the input rows."""


class EmptyEnsemble(ValueError):
    """Raised when an ensemble would hold no fitted models."""
