from .Aggregation import aggregate, average, sum_predictions, vote
from .BaggingModel import BaggingModel
from .BaggingParams import BaggingConfig
from .StratifiedBagging import StratifiedBagging
from .StratifiedSampler import DEFAULT_SAMPLING_RATES, StratifiedSampler
from .exceptions import EmptyEnsemble, InvalidConfig, InvalidSamplingSpec, SchemaMismatch
from .interface import AGGREGATION_RULES, get_aggregation_rule

__version__ = "0.0.1"

__all__ = [
    'AGGREGATION_RULES',
    'BaggingConfig',
    'BaggingModel',
    'DEFAULT_SAMPLING_RATES',
    'EmptyEnsemble',
    'InvalidConfig',
    'InvalidSamplingSpec',
    'SchemaMismatch',
    'StratifiedBagging',
    'StratifiedSampler',
    'aggregate',
    'average',
    'get_aggregation_rule',
    'sum_predictions',
    'vote'
]
