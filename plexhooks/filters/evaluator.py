import typing

from .base import (
    MISSING,
    FilterGroup,
    Operator,
    is_rule_well_formed,
    is_sequence,
    stringify,
)
from .lookup import get_path

if typing.TYPE_CHECKING:
    from plexhooks.verbose import SupportsVerbose

__all__ = ["FilterEvaluator"]


class FilterEvaluator:
    """
    Decide whether a webhook payload satisfies a filter set.

    The filter set is an OR of groups and each group is an AND of rules.
    Every comparison is written to ``log.verbose`` so that a match can be
    replayed from the trace. Malformed input never raises: a malformed
    group is skipped, a malformed rule fails the group it belongs to.
    """

    def __init__(
        self,
        log: "SupportsVerbose",
        payload: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        filters: typing.Any = None,
    ) -> None:
        self.log = log
        self.payload = payload or {}
        self.filters: typing.List[typing.Any] = (
            list(filters) if is_sequence(filters) else []
        )

    def match_pair(
        self, path: str, value: typing.Any, operator: str = Operator.EQUAL.value
    ) -> bool:
        """
        Compare the value found at ``path`` with the expected ``value``.
        Both sides are compared as strings; an absent path reads as "".
        Unknown operators behave like equality.
        """
        found = get_path(self.payload, path)
        expected = stringify(value)
        actual = "" if found is MISSING or found is None else stringify(found)

        if operator == Operator.NOT_EQUAL.value:
            is_matched = expected != actual
        else:
            is_matched = expected == actual

        self.log.verbose(
            f' {"+" if is_matched else "-"} looking for "{expected}" at "{path}", found "{actual}"'
        )
        return is_matched

    def match_group(self, group: FilterGroup) -> bool:
        if not is_sequence(group):
            return False

        for rule in group:
            if not is_rule_well_formed(rule):
                return False

            if not self.match_pair(
                rule["path"],
                rule["value"],
                rule.get("operator") or Operator.EQUAL.value,
            ):
                return False

        return True

    def match(self) -> bool:
        if len(self.filters) == 0:
            self.log.verbose(" > no filters provided → matching by default")
            return True

        for index, group in enumerate(self.filters, start=1):
            if not is_sequence(group):
                continue

            self.log.verbose(f" > filter group #{index}")

            if self.match_group(group):
                return True

        return False
