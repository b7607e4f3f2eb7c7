"""Schedule rules built from five cron-like field expressions.

Example:
    >>> rule = new_rule("*/15", "9", "*", "*", "1")
    >>> rule.matches(datetime(2024, 1, 15, 9, 30))  # Monday
    True
    >>> rule.next_after(datetime(2024, 1, 15, 9, 30))
    datetime.datetime(2024, 1, 15, 9, 45)
    >>> str(rule)
    '*/15 9 * * 1'
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from tickrules.errors import FieldCountError, FieldError, RuleError
from tickrules.fields import FIELD_CONSTRAINTS, FieldSpec, FieldType
from tickrules.grammar import parse_field
from tickrules.search import RuleIterator, next_after, next_n
from tickrules.validation import validate_range

if TYPE_CHECKING:
    from tickrules.config import SearchConfig

# Order in which fields are parsed and validated. The first error wins.
_VALIDATION_ORDER = (
    FieldType.MINUTE,
    FieldType.HOUR,
    FieldType.DAY_OF_WEEK,
    FieldType.DAY_OF_MONTH,
    FieldType.MONTH,
)


def build_field(field_type: FieldType, text: str) -> FieldSpec:
    """Parse and validate a single field.

    Raises:
        FieldError: Wrapping the grammar or range error.
    """
    constraints = FIELD_CONSTRAINTS[field_type]
    # Stepped wildcards start from the field minimum so */N is usable for
    # day-of-month and month.
    try:
        values = parse_field(text, constraints.modulus, start=constraints.min_value)
        validate_range(values, constraints.min_value, constraints.max_value)
    except RuleError as e:
        raise FieldError(field_type, e) from e
    return FieldSpec(field_type, text, values)


class Rule:
    """An immutable cron-like schedule rule.

    A Rule is created with :func:`new_rule` or :meth:`Rule.parse` and is
    read-only afterwards, so it can be shared freely between callers.
    """

    __slots__ = (
        "_minute",
        "_hour",
        "_day_of_month",
        "_month",
        "_day_of_week",
    )

    def __init__(
        self,
        minute: FieldSpec,
        hour: FieldSpec,
        day_of_month: FieldSpec,
        month: FieldSpec,
        day_of_week: FieldSpec,
    ) -> None:
        object.__setattr__(self, "_minute", minute)
        object.__setattr__(self, "_hour", hour)
        object.__setattr__(self, "_day_of_month", day_of_month)
        object.__setattr__(self, "_month", month)
        object.__setattr__(self, "_day_of_week", day_of_week)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_fields(
        cls,
        minute: str,
        hour: str,
        day_of_month: str,
        month: str,
        day_of_week: str,
    ) -> "Rule":
        """Build and validate a rule from five field expressions.

        Args:
            minute: Minute expression (0-59).
            hour: Hour expression (0-23).
            day_of_month: Day of month expression (1-31).
            month: Month expression (1-12).
            day_of_week: Day of week expression (0-7, 0 or 7 is Sunday).

        Returns:
            Validated Rule.

        Raises:
            FieldError: For the first invalid field.
        """
        texts = {
            FieldType.MINUTE: minute,
            FieldType.HOUR: hour,
            FieldType.DAY_OF_MONTH: day_of_month,
            FieldType.MONTH: month,
            FieldType.DAY_OF_WEEK: day_of_week,
        }
        specs = {ft: build_field(ft, texts[ft]) for ft in _VALIDATION_ORDER}
        return cls(
            specs[FieldType.MINUTE],
            specs[FieldType.HOUR],
            specs[FieldType.DAY_OF_MONTH],
            specs[FieldType.MONTH],
            specs[FieldType.DAY_OF_WEEK],
        )

    @classmethod
    def parse(cls, expression: str) -> "Rule":
        """Build a rule from a whitespace separated 5-field expression.

        Raises:
            FieldCountError: If the expression does not have five fields.
            FieldError: For the first invalid field.
        """
        parts = expression.split()
        if len(parts) != 5:
            raise FieldCountError(expression, len(parts))
        return cls.from_fields(*parts)

    @property
    def minute(self) -> FieldSpec:
        return self._minute

    @property
    def hour(self) -> FieldSpec:
        return self._hour

    @property
    def day_of_month(self) -> FieldSpec:
        return self._day_of_month

    @property
    def month(self) -> FieldSpec:
        return self._month

    @property
    def day_of_week(self) -> FieldSpec:
        return self._day_of_week

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        """Fields in expression order."""
        return (
            self._minute,
            self._hour,
            self._day_of_month,
            self._month,
            self._day_of_week,
        )

    def matches(self, dt: datetime) -> bool:
        """Check if a timestamp satisfies every field of the rule.

        Args:
            dt: Timestamp to check.

        Returns:
            True if the timestamp matches.
        """
        # Python weekday: Monday=0, Sunday=6
        # Cron weekday: Sunday=0, Saturday=6
        cron_weekday = (dt.weekday() + 1) % 7
        return (
            self._month.matches(dt.month)
            and self._day_of_week.matches(cron_weekday)
            and self._day_of_month.matches(dt.day)
            and self._hour.matches(dt.hour)
            and self._minute.matches(dt.minute)
        )

    def next_after(
        self,
        after: datetime,
        config: "SearchConfig | None" = None,
    ) -> datetime:
        """Get the next matching timestamp strictly after ``after``.

        Returns the configured sentinel when no match is found.
        """
        return next_after(self, after, config)

    def next_n(
        self,
        n: int,
        after: datetime,
        config: "SearchConfig | None" = None,
    ) -> list[datetime]:
        """Get up to ``n`` successive matching timestamps."""
        return next_n(self, n, after, config)

    def iter(
        self,
        after: datetime,
        limit: int | None = None,
        config: "SearchConfig | None" = None,
    ) -> RuleIterator:
        """Create an iterator over successive matching timestamps."""
        return RuleIterator(self, after, limit, config)

    def to_text(self) -> str:
        """Echo the original five field expressions."""
        return " ".join(f.raw_text for f in self.fields)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"Rule({self.to_text()!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Rule):
            return self.to_text() == other.to_text()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.to_text())


def new_rule(
    minute: str,
    hour: str,
    day_of_month: str,
    month: str,
    day_of_week: str,
) -> Rule:
    """Build and validate a rule from five field expressions.

    Each field accepts one of:
        "*"        any value
        "*/N"      the field minimum and every N after it
        "A/B/C.."  exactly A, B, C (strictly increasing)
        "N"        exactly N

    Raises:
        FieldError: For the first invalid field.
    """
    return Rule.from_fields(minute, hour, day_of_month, month, day_of_week)


# =============================================================================
# Validation Functions
# =============================================================================


def validate_expression(expression: str) -> list[str]:
    """Validate a 5-field expression.

    Args:
        expression: Expression to validate.

    Returns:
        List of validation errors (empty if valid).
    """
    errors = []

    try:
        Rule.parse(expression)
    except RuleError as e:
        errors.append(str(e))

    return errors


def is_valid_expression(expression: str) -> bool:
    """Check if a 5-field expression is valid."""
    try:
        Rule.parse(expression)
        return True
    except RuleError:
        return False
