import typing
from collections.abc import Mapping
from enum import Enum
from typing import TypeAlias

__all__ = [
    "MISSING",
    "Operator",
    "FilterRule",
    "FilterGroup",
    "FilterSet",
    "is_sequence",
    "is_rule_well_formed",
    "is_trivial_rule",
    "stringify",
]


class _Missing:
    """Marker for a path that does not exist in the payload."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class Operator(str, Enum):
    """Comparison operators understood by a filter rule."""

    EQUAL = "==="
    NOT_EQUAL = "!=="


FilterRule: TypeAlias = typing.Mapping[str, typing.Any]
FilterGroup: TypeAlias = typing.Sequence[FilterRule]
FilterSet: TypeAlias = typing.Sequence[FilterGroup]


def is_sequence(obj: typing.Any) -> bool:
    """
    True for the list-like containers used for filter sets and groups.
    Strings and mappings are not sequences here.
    """
    return isinstance(obj, (list, tuple))


def is_rule_well_formed(rule: typing.Any) -> bool:
    """
    A rule needs a non-empty path and a value key. Falsy values such as
    ``""``, ``0`` or ``None`` are still valid values.
    """
    if not isinstance(rule, Mapping):
        return False
    return bool(rule.get("path")) and "value" in rule


def is_trivial_rule(rule: typing.Any) -> bool:
    """A rule that uses the default equality operator."""
    operator = rule.get("operator") if isinstance(rule, Mapping) else None
    return not operator or operator == Operator.EQUAL.value


def stringify(value: typing.Any) -> str:
    """
    String form of a value at the comparison boundary.

    Booleans and ``None`` use their JSON spelling so that configuration
    values read from JSON compare the way they were written. Lists join
    their items with commas, and ``None`` items render as empty strings.
    Mappings all read as ``[object Object]``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Mapping):
        return "[object Object]"
    if is_sequence(value):
        return ",".join("" if item is None else stringify(item) for item in value)
    return str(value)
