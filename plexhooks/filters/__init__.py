from .base import MISSING, Operator, is_rule_well_formed, is_sequence, stringify
from .evaluator import FilterEvaluator
from .lookup import get_path
from .normalizer import normalize_filters

__all__ = [
    "MISSING",
    "Operator",
    "FilterEvaluator",
    "get_path",
    "is_rule_well_formed",
    "is_sequence",
    "normalize_filters",
    "stringify",
]
