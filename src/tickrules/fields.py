"""Field types, their legal ranges, and the parsed field value."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FieldType(Enum):
    """The five schedule fields, in expression order."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY_OF_MONTH = "day_of_month"
    MONTH = "month"
    DAY_OF_WEEK = "day_of_week"

    @property
    def label(self) -> str:
        """Human readable name used in error messages."""
        return _LABELS[self]


_LABELS: dict[FieldType, str] = {
    FieldType.MINUTE: "Minute",
    FieldType.HOUR: "Hour",
    FieldType.DAY_OF_MONTH: "Day of Month",
    FieldType.MONTH: "Month",
    FieldType.DAY_OF_WEEK: "Day of Week",
}


@dataclass(frozen=True)
class FieldConstraints:
    """Constraints for a schedule field.

    Attributes:
        min_value: Smallest legal value (inclusive).
        max_value: Largest legal value (inclusive).
        modulus: Cycle length used when generating stepped wildcards.
    """

    min_value: int
    max_value: int
    modulus: int


FIELD_CONSTRAINTS: dict[FieldType, FieldConstraints] = {
    FieldType.MINUTE: FieldConstraints(0, 59, 60),
    FieldType.HOUR: FieldConstraints(0, 23, 24),
    FieldType.DAY_OF_MONTH: FieldConstraints(1, 31, 31),
    FieldType.MONTH: FieldConstraints(1, 12, 12),
    # 0 and 7 are both Sunday
    FieldType.DAY_OF_WEEK: FieldConstraints(0, 7, 7),
}

SUNDAY = 0
SUNDAY_ALIAS = 7


@dataclass(frozen=True)
class FieldSpec:
    """A parsed and validated schedule field.

    Attributes:
        field_type: Which field this is.
        raw_text: The original expression, kept verbatim.
        values: Accepted values in generation order. Empty means any value.
    """

    field_type: FieldType
    raw_text: str
    values: tuple[int, ...] = ()

    @property
    def is_any(self) -> bool:
        return not self.values

    def matches(self, value: int) -> bool:
        """Check whether a component value satisfies this field."""
        if self.is_any:
            return True
        if value in self.values:
            return True
        return (
            self.field_type is FieldType.DAY_OF_WEEK
            and value == SUNDAY
            and SUNDAY_ALIAS in self.values
        )

    def __str__(self) -> str:
        return self.raw_text
