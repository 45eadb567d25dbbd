"""KeyDispatcher — turns key characters into calculator actions."""

from __future__ import annotations

import logging

import calcstate.log  # registers TRACE level and logger.trace()
from calcstate.core.errors import InvalidKey
from calcstate.core.keys import Digit, Operator

logger = logging.getLogger(__name__)

SEPARATOR_KEYS = {'.', ','}
EQUALS_KEYS = {'=', '\n', '\r'}
CLEAR_KEYS = {'c', 'C', '\x1b'}  # Esc

# Alternative spellings found on keypads
OPERATOR_ALIASES = {
    'x': Operator.MULT,
    'X': Operator.MULT,
    '×': Operator.MULT,
    '÷': Operator.DIV,
}

DIGIT_KEYS = {d.value for d in Digit}
OPERATOR_KEYS = {op.value for op in Operator}


class KeyDispatcher:
    """Maps single keys onto a ``CalculatorContext``.

    ``0-9`` digit, ``.``/``,`` decimal separator, ``+ - * /`` (and ``x × ÷``)
    operator, ``=``/Enter equals, ``c``/``C``/Esc clear. Other whitespace is
    skipped; anything else raises ``InvalidKey``.
    """

    def __init__(self, context):
        self.context = context

    def press(self, key: str) -> str:
        """Apply one key and return the display text afterwards."""
        logger.trace("Key: %r", key)  # type: ignore[attr-defined]
        ctx = self.context
        if key in DIGIT_KEYS:
            ctx.digit(key)
        elif key in SEPARATOR_KEYS:
            ctx.decimal_separator()
        elif key in OPERATOR_KEYS:
            ctx.binary_operator(key)
        elif key in OPERATOR_ALIASES:
            ctx.binary_operator(OPERATOR_ALIASES[key])
        elif key in EQUALS_KEYS:
            ctx.equals()
        elif key in CLEAR_KEYS:
            ctx.clear()
        elif key.isspace():
            pass
        else:
            raise InvalidKey(f"Invalid Key: {key!r}")
        return ctx.display()

    def feed(self, keys: str) -> str:
        """Press every character of *keys* in order; returns the final display."""
        for key in keys:
            self.press(key)
        return self.context.display()
