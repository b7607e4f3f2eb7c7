"""Exceptions raised while building schedule rules.

All errors are raised at construction time. Querying a rule (matching or
searching for the next occurrence) never raises.

Hierarchy:
    RuleError
    ├── FieldParseError
    │   ├── UnsupportedFormError
    │   ├── ZeroStepError
    │   ├── NonDividingStepError
    │   └── OrderingError
    ├── RangeError
    ├── FieldError
    ├── FieldCountError
    └── ConfigError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tickrules.fields import FieldType


class RuleError(ValueError):
    """Base exception for all rule construction errors."""

    pass


# =============================================================================
# Grammar Errors
# =============================================================================


class FieldParseError(RuleError):
    """Raised when a field expression cannot be parsed."""

    def __init__(self, message: str, text: str = "") -> None:
        self.text = text
        super().__init__(message)


class UnsupportedFormError(FieldParseError):
    """Raised when a field matches none of the recognised forms."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Rule item '{text}' is not supported", text)


class ZeroStepError(FieldParseError):
    """Raised for a stepped wildcard with a step of zero."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Rule item '{text}' cannot be 0", text)


class NonDividingStepError(FieldParseError):
    """Raised when a stepped wildcard's step is not below the modulus."""

    def __init__(self, text: str, step: int, modulus: int) -> None:
        self.step = step
        self.modulus = modulus
        super().__init__(
            f"Rule item '{text}' does not divide: step {step} >= {modulus}",
            text,
        )


class OrderingError(FieldParseError):
    """Raised when an explicit list is not strictly increasing."""

    def __init__(self, text: str, previous: int, value: int) -> None:
        self.previous = previous
        self.value = value
        super().__init__(
            f"Rule item '{text}' has bad ordering: {value} follows {previous}",
            text,
        )


# =============================================================================
# Validation Errors
# =============================================================================


class RangeError(RuleError):
    """Raised when a parsed value falls outside the field's legal range."""

    def __init__(self, value: int, bound: int, is_upper: bool) -> None:
        self.value = value
        self.bound = bound
        self.is_upper = is_upper
        op = ">" if is_upper else "<"
        super().__init__(f"{value} is {op} {bound}")


class FieldError(RuleError):
    """Wraps a field-level error with the name of the offending field."""

    def __init__(self, field_type: "FieldType", cause: RuleError) -> None:
        self.field_type = field_type
        self.cause = cause
        super().__init__(f"{field_type.label} rule invalid: {cause}")


class FieldCountError(RuleError):
    """Raised when an expression does not have exactly five fields."""

    def __init__(self, expression: str, count: int) -> None:
        self.expression = expression
        self.count = count
        super().__init__(
            f"Invalid number of fields: {count}. Expected 5 fields."
        )


class ConfigError(RuleError):
    """Raised for invalid search configuration values."""

    pass
