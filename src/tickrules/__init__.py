"""tickrules - Cron-like schedule rules.

Build a rule from five field expressions, test timestamps against it, and
find the next timestamp that satisfies it.

Syntax Reference:
    Field         Values          Forms
    ──────────────────────────────────────────────
    Minute        0-59            *  */N  A/B/C  N
    Hour          0-23            *  */N  A/B/C  N
    Day of Month  1-31            *  */N  A/B/C  N
    Month         1-12            *  */N  A/B/C  N
    Day of Week   0-7 (0, 7=Sun)  *  */N  A/B/C  N

Forms:
    *       Any value
    */N     Every N, starting at the field minimum
    A/B/C   Exactly these values, strictly increasing
    N       Exactly N

Usage:
    >>> from datetime import datetime
    >>> from tickrules import new_rule
    >>>
    >>> rule = new_rule("*/25", "*/2", "*", "*", "*")
    >>> rule.matches(datetime(2000, 1, 1, 2, 25))
    True
    >>> rule.next_after(datetime(2000, 1, 1, 1, 0, 1))
    datetime.datetime(2000, 1, 1, 2, 25)

The core never reads the clock; callers pass "now" in explicitly.
"""

from tickrules.config import DEFAULT_MAX_DAY_STEPS, FAR_FUTURE, SearchConfig
from tickrules.errors import (
    ConfigError,
    FieldCountError,
    FieldError,
    FieldParseError,
    NonDividingStepError,
    OrderingError,
    RangeError,
    RuleError,
    UnsupportedFormError,
    ZeroStepError,
)
from tickrules.fields import FIELD_CONSTRAINTS, FieldConstraints, FieldSpec, FieldType
from tickrules.grammar import FieldForm, classify_field, parse_field
from tickrules.rule import Rule, is_valid_expression, new_rule, validate_expression
from tickrules.search import (
    RuleIterator,
    SearchOutcome,
    SearchResult,
    is_sentinel,
    next_after,
    next_n,
    search,
)
from tickrules.validation import validate_range

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Rule
    "Rule",
    "new_rule",
    "validate_expression",
    "is_valid_expression",
    # Fields
    "FieldType",
    "FieldConstraints",
    "FieldSpec",
    "FIELD_CONSTRAINTS",
    # Grammar
    "FieldForm",
    "classify_field",
    "parse_field",
    "validate_range",
    # Search
    "search",
    "next_after",
    "next_n",
    "is_sentinel",
    "RuleIterator",
    "SearchOutcome",
    "SearchResult",
    "SearchConfig",
    "FAR_FUTURE",
    "DEFAULT_MAX_DAY_STEPS",
    # Errors
    "RuleError",
    "FieldParseError",
    "UnsupportedFormError",
    "ZeroStepError",
    "NonDividingStepError",
    "OrderingError",
    "RangeError",
    "FieldError",
    "FieldCountError",
    "ConfigError",
]
