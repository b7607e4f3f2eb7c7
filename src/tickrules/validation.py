"""Range validation for parsed field values."""

from __future__ import annotations

from typing import Iterable

from tickrules.errors import RangeError


def validate_range(values: Iterable[int], min_value: int, max_value: int) -> None:
    """Check every value lies within ``[min_value, max_value]``.

    Raises:
        RangeError: For the first value outside the range.
    """
    for value in values:
        if value > max_value:
            raise RangeError(value, max_value, is_upper=True)
        if value < min_value:
            raise RangeError(value, min_value, is_upper=False)
