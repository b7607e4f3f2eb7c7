"""Next-occurrence search for schedule rules.

The search is a bounded heuristic rather than a calendar solver:

    1. Round the minute up to the next accepted minute. If that stays within
       the current hour and the candidate matches, it is the answer.
    2. Otherwise round the hour up the same way, keeping the chosen minute,
       and move one day ahead if the candidate is not after the start.
    3. Step forward one whole day at a time until the rule matches or the
       step cap is reached.

When the cap is reached the search gives up and :func:`next_after` returns a
far-future sentinel instead of raising. :func:`search` exposes the same
result as an explicit outcome.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Iterator

from tickrules.config import DEFAULT_CONFIG, SearchConfig
from tickrules.fields import FIELD_CONSTRAINTS, FieldSpec, FieldType

if TYPE_CHECKING:
    from tickrules.rule import Rule

logger = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)
# 2000 is a leap year, so February gets 29 days.
_LEAP_YEAR = 2000


class SearchOutcome(str, Enum):
    """Outcome of a next-occurrence search."""

    FOUND = "found"
    UNSATISFIABLE = "unsatisfiable"  # No calendar date can ever match
    EXHAUSTED = "exhausted"  # Gave up after the step cap


@dataclass(frozen=True)
class SearchResult:
    """Result of a next-occurrence search.

    Attributes:
        outcome: Whether a match was found and, if not, why.
        at: The matching timestamp when found, otherwise None.
    """

    outcome: SearchOutcome
    at: datetime | None = None

    @property
    def found(self) -> bool:
        return self.outcome is SearchOutcome.FOUND


def _round_up(current: int, spec: FieldSpec, modulus: int) -> tuple[int, bool]:
    """Find the next accepted value above ``current``.

    Returns:
        Tuple of (value, wrapped). ``wrapped`` is True when no accepted value
        lies above ``current`` and the smallest accepted value was taken.
    """
    if spec.is_any:
        value = current + 1
        if value >= modulus:
            return 0, True
        return value, False

    above = [v for v in spec.values if current < v < modulus]
    if above:
        return min(above), False
    return min(spec.values), True


def _is_unsatisfiable(rule: "Rule") -> bool:
    """Check whether no month in the rule can hold any accepted day."""
    if rule.day_of_month.is_any:
        return False

    first_day = min(rule.day_of_month.values)
    constraints = FIELD_CONSTRAINTS[FieldType.MONTH]
    months = rule.month.values or range(
        constraints.min_value, constraints.max_value + 1
    )
    return all(
        first_day > calendar.monthrange(_LEAP_YEAR, month)[1] for month in months
    )


def search(
    rule: "Rule",
    after: datetime,
    config: SearchConfig | None = None,
) -> SearchResult:
    """Search for the next timestamp strictly after ``after`` matching ``rule``.

    Args:
        rule: Rule to satisfy.
        after: Exclusive starting instant.
        config: Search configuration (default: DEFAULT_CONFIG).

    Returns:
        SearchResult with the matching timestamp, truncated to the minute,
        or the reason none was found.
    """
    config = config or DEFAULT_CONFIG
    start = after.replace(second=0, microsecond=0)

    minute, wrapped = _round_up(after.minute, rule.minute, 60)
    candidate = start.replace(minute=minute)
    if not wrapped and rule.matches(candidate):
        return SearchResult(SearchOutcome.FOUND, candidate)

    hour, _ = _round_up(after.hour, rule.hour, 24)
    candidate = candidate.replace(hour=hour)

    try:
        if candidate <= after:
            candidate += _ONE_DAY

        steps = 0
        while not rule.matches(candidate):
            if steps >= config.max_day_steps:
                break
            candidate += _ONE_DAY
            steps += 1
        else:
            return SearchResult(SearchOutcome.FOUND, candidate)
    except OverflowError:
        logger.debug(f"Search for {rule} ran past the end of the calendar")

    if _is_unsatisfiable(rule):
        return SearchResult(SearchOutcome.UNSATISFIABLE)
    return SearchResult(SearchOutcome.EXHAUSTED)


def next_after(
    rule: "Rule",
    after: datetime,
    config: SearchConfig | None = None,
) -> datetime:
    """Get the next timestamp strictly after ``after`` matching ``rule``.

    Never raises. When no match is found within ``config.max_day_steps`` day
    steps the configured sentinel is returned, carrying ``after``'s tzinfo.
    Use :func:`is_sentinel` to tell the two apart.
    """
    config = config or DEFAULT_CONFIG
    result = search(rule, after, config)
    if result.at is not None:
        return result.at

    logger.debug(
        f"No occurrence of '{rule}' after {after.isoformat()} "
        f"({result.outcome.value}), returning sentinel"
    )
    return config.sentinel.replace(tzinfo=after.tzinfo)


def is_sentinel(dt: datetime, config: SearchConfig | None = None) -> bool:
    """Check whether a timestamp is the search sentinel."""
    sentinel = (config or DEFAULT_CONFIG).sentinel
    return dt.replace(tzinfo=None) == sentinel.replace(tzinfo=None)


def next_n(
    rule: "Rule",
    n: int,
    after: datetime,
    config: SearchConfig | None = None,
) -> list[datetime]:
    """Get up to ``n`` successive matching timestamps.

    Stops early, without a sentinel, when the search gives up.
    """
    return list(RuleIterator(rule, after, n, config))


class RuleIterator(Iterator[datetime]):
    """Iterator over successive matching timestamps.

    Each step searches from the previous result, so no matches are held in
    memory. Iteration stops at ``limit`` or when a search finds nothing.
    """

    def __init__(
        self,
        rule: "Rule",
        after: datetime,
        limit: int | None = None,
        config: SearchConfig | None = None,
    ) -> None:
        self._rule = rule
        self._current = after
        self._limit = limit
        self._config = config
        self._count = 0

    def __iter__(self) -> "RuleIterator":
        return self

    def __next__(self) -> datetime:
        if self._limit is not None and self._count >= self._limit:
            raise StopIteration

        result = search(self._rule, self._current, self._config)
        if result.at is None:
            raise StopIteration

        self._current = result.at
        self._count += 1

        return result.at
