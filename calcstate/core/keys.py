"""Key definitions: digits and binary operators."""

from __future__ import annotations

from enum import Enum

from calcstate.core.errors import InvalidDigit, InvalidOperator


class Digit(str, Enum):
    ZERO = "0"
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"


class Operator(str, Enum):
    PLUS = "+"
    MINUS = "-"
    MULT = "*"
    DIV = "/"


def to_digit(value) -> Digit:
    """Coerce ``Digit``, ``"0".."9"`` or ``0..9`` to a ``Digit``."""
    if isinstance(value, bool):
        raise InvalidDigit(f"Invalid Digit: {value!r}")
    if isinstance(value, int):
        value = str(value)
    try:
        return Digit(value)
    except ValueError:
        raise InvalidDigit(f"Invalid Digit: {value!r}") from None


def to_operator(value) -> Operator:
    """Coerce ``Operator`` or one of ``+ - * /`` to an ``Operator``."""
    try:
        return Operator(value)
    except ValueError:
        raise InvalidOperator(f"Invalid Operator: {value!r}") from None
