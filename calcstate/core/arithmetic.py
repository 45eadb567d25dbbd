"""Arithmetic primitives and buffer <-> number conversion.

Buffers stay text until a computation runs; the numbers in between are
``Decimal`` so that every operand a buffer can hold is represented exactly::

    "12." --parse_operand--> Decimal("12.") --add/.../divide--> Decimal --format_number--> "12"
"""

from __future__ import annotations

import operator as _op
from decimal import Decimal, localcontext

from calcstate.core.errors import DivisionByZero, ResultOverflow

DEFAULT_PRECISION = 15
DEFAULT_MAX_DIGITS = 16


def add(a: Decimal, b: Decimal) -> Decimal:
    return _op.add(a, b)


def subtract(a: Decimal, b: Decimal) -> Decimal:
    return _op.sub(a, b)


def multiply(a: Decimal, b: Decimal) -> Decimal:
    return _op.mul(a, b)


def divide(a: Decimal, b: Decimal) -> Decimal:
    if b == 0:
        raise DivisionByZero()
    return _op.truediv(a, b)


def parse_operand(buffer: str) -> Decimal:
    """Parse a buffer; an empty buffer or a bare separator counts as zero."""
    if buffer in ("", ".", "-", "-."):
        return Decimal(0)
    return Decimal(buffer)


def format_number(value, precision: int = DEFAULT_PRECISION,
                  max_digits: int = DEFAULT_MAX_DIGITS) -> str:
    """Render a result the way it is written back into a buffer.

    The text is always plain positional notation with at most *max_digits*
    digits. Integral values are exact (``6 -> "6"``); others are rounded to
    *precision* significant digits, then to the decimals that still fit,
    without trailing zeros.

    Raises ``ResultOverflow`` for non-finite values and for values whose
    integer part needs more than *max_digits* digits.
    """
    number = value if isinstance(value, Decimal) else Decimal(repr(float(value)))
    if not number.is_finite():
        raise ResultOverflow(f"result is not finite: {value!r}")
    limit = 10 ** max_digits
    if abs(number) >= limit:
        raise ResultOverflow(f"result does not fit in {max_digits} digits: {value!r}")
    if number == 0:
        return "0"  # also folds -0

    with localcontext() as ctx:
        ctx.prec = max_digits + 2
        if number == number.to_integral_value():
            return str(int(number))

        int_digits = len(str(int(abs(number))))
        places = max(max_digits - int_digits, 0)
        ctx.prec = precision
        rounded = +number
        ctx.prec = max_digits + 2
        if rounded.as_tuple().exponent < -places:
            rounded = rounded.quantize(Decimal(1).scaleb(-places))
        if abs(rounded) >= limit:
            raise ResultOverflow(f"result does not fit in {max_digits} digits: {value!r}")
        text = format(rounded, "f")

    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text
