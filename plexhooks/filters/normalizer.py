import typing

from .base import FilterSet, is_sequence, is_trivial_rule


def normalize_filters(filters: typing.Any) -> typing.List[typing.Any]:
    """
    Canonicalise a filter set read from configuration.

    A group made only of default-operator rules is replaced by an empty
    group, which matches unconditionally. Groups holding at least one
    non-default operator are kept as they are, malformed rules included,
    and so are groups that are not sequences at all; the evaluator deals
    with both. Absent, empty or non-sequence input yields an empty set.

    The input is never modified and the function never raises.
    """
    if not is_sequence(filters) or len(filters) == 0:
        return []

    filters = typing.cast(FilterSet, filters)
    normalized = []
    for group in filters:
        if is_sequence(group) and all(is_trivial_rule(rule) for rule in group):
            normalized.append([])
        else:
            normalized.append(group)
    return normalized
