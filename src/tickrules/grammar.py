"""Field expression grammar.

Each field accepts exactly one of four forms::

    field      := "*" | stepped | list | integer
    stepped    := "*/" digits
    list       := digits ("/" digits)+      ; strictly increasing
    integer    := ["+" | "-"] digits

Forms are recognised by a small scanner rather than regular expressions and
tested in the order above. The parsed result is a tuple of accepted values;
an empty tuple means the field matches any value.
"""

from __future__ import annotations

from enum import Enum, auto

from tickrules.errors import (
    NonDividingStepError,
    OrderingError,
    UnsupportedFormError,
    ZeroStepError,
)

WILDCARD = "*"
SEPARATOR = "/"
_DIGITS = frozenset("0123456789")


class FieldForm(Enum):
    """Syntactic form of a field expression."""

    WILDCARD = auto()
    STEPPED = auto()
    LIST = auto()
    INTEGER = auto()
    UNSUPPORTED = auto()


def _is_digits(token: str) -> bool:
    # str.isdigit() also accepts superscripts and other non-ASCII digits
    return bool(token) and all(ch in _DIGITS for ch in token)


def _is_integer(token: str) -> bool:
    if token[:1] in ("+", "-"):
        token = token[1:]
    return _is_digits(token)


def classify_field(text: str) -> FieldForm:
    """Classify a field expression into one of the grammar forms.

    Args:
        text: Field expression.

    Returns:
        The matching FieldForm, or FieldForm.UNSUPPORTED.
    """
    if text == WILDCARD:
        return FieldForm.WILDCARD

    head, sep, tail = text.partition(SEPARATOR)
    if sep:
        if head == WILDCARD:
            return FieldForm.STEPPED if _is_digits(tail) else FieldForm.UNSUPPORTED
        if all(_is_digits(token) for token in text.split(SEPARATOR)):
            return FieldForm.LIST
        return FieldForm.UNSUPPORTED

    if _is_integer(text):
        return FieldForm.INTEGER
    return FieldForm.UNSUPPORTED


def parse_field(text: str, modulus: int, start: int = 0) -> tuple[int, ...]:
    """Parse a single field expression into its accepted values.

    Args:
        text: Field expression.
        modulus: Cycle length for stepped wildcards.
        start: First value emitted by a stepped wildcard.

    Returns:
        Accepted values in generation order; empty for a wildcard.

    Raises:
        UnsupportedFormError: Text is not one of the recognised forms.
        ZeroStepError: Stepped wildcard with a step of 0.
        NonDividingStepError: Stepped wildcard whose step is >= modulus.
        OrderingError: Explicit list that is not strictly increasing.
    """
    form = classify_field(text)

    if form is FieldForm.WILDCARD:
        return ()
    if form is FieldForm.STEPPED:
        return _parse_stepped(text, modulus, start)
    if form is FieldForm.LIST:
        return _parse_list(text)
    if form is FieldForm.INTEGER:
        return (int(text),)
    raise UnsupportedFormError(text)


def _parse_stepped(text: str, modulus: int, start: int) -> tuple[int, ...]:
    step = int(text[len(WILDCARD + SEPARATOR):])
    if step == 0:
        raise ZeroStepError(text)
    if step >= modulus:
        raise NonDividingStepError(text, step, modulus)

    values = []
    value = start
    while True:
        values.append(value)
        value += step
        if value >= start + modulus:
            break
    return tuple(values)


def _parse_list(text: str) -> tuple[int, ...]:
    values: list[int] = []
    for token in text.split(SEPARATOR):
        value = int(token)
        if values and value <= values[-1]:
            raise OrderingError(text, values[-1], value)
        values.append(value)
    return tuple(values)
