from .Aggregation import aggregate, average, vote
from .exceptions import InvalidConfig

AGGREGATION_RULES = {
    'threshold': aggregate,
    'vote': vote,
    'average': average
}


def get_aggregation_rule(name='threshold'):
    if not isinstance(name, str):
        raise InvalidConfig(f"Aggregation rule must be given by name, got {name!r}")
    rule = AGGREGATION_RULES.get(name.lower())
    if rule is None:
        raise InvalidConfig(f"Aggregation rule {name} is not recognized or implemented.")
    return rule
