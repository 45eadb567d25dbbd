"""Calculator states.

Each state owns one ``StateData`` and implements the same set of actions.
A state either mutates its data in place or asks the context to install a
new state via ``context.change_state()``:

    EnteringFirstNumber  --operator-->        EnteringSecondNumber
    EnteringSecondNumber --operator, =-->     EnteringSecondNumber (chained)
    EnteringSecondNumber --x / 0, overflow--> Error
    any state            --clear-->           EnteringFirstNumber (fresh data)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import calcstate.log  # registers TRACE level and logger.trace()
from calcstate.core import arithmetic
from calcstate.core.errors import DivisionByZero, ResultOverflow
from calcstate.core.events import EventType, ResultData
from calcstate.core.keys import Operator, to_digit, to_operator
from calcstate.core.state_data import (
    StateData,
    append_digit,
    append_separator,
    default_state_data,
)

logger = logging.getLogger(__name__)


class CalculatorState(ABC):
    """Base class for all calculator states."""

    def __init__(self, context, data: StateData | None = None):
        self.context = context
        self.data = data if data is not None else default_state_data()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.data!r})"

    @abstractmethod
    def digit(self, d) -> None: ...

    @abstractmethod
    def decimal_separator(self) -> None: ...

    @abstractmethod
    def binary_operator(self, op) -> None: ...

    @abstractmethod
    def equals(self) -> None: ...

    @abstractmethod
    def display(self) -> str: ...

    def clear(self) -> None:
        """Discard everything and start over with a fresh first number."""
        self.context.change_state(EnteringFirstNumberState(self.context, default_state_data()))

    # -- helpers ---------------------------------------------------------

    def _option(self, key: str, default=None):
        return self.context.config.get(key, default)

    def _type_digit(self, buffer: str, d) -> str:
        digit = to_digit(d)
        typed = append_digit(buffer, digit, self._option('max_digits'))
        if typed == buffer and buffer != "0":
            logger.debug("Buffer full, digit %s dropped", digit.value)
        return typed

    def _display_data(self) -> str:
        return self.data.display(self._option('empty_display', '0'))


class EnteringFirstNumberState(CalculatorState):
    """Typing the first operand; initial state and the target of ``clear``."""

    def digit(self, d) -> None:
        self.data.first_buffer = self._type_digit(self.data.first_buffer, d)

    def decimal_separator(self) -> None:
        self.data.first_buffer = append_separator(self.data.first_buffer)

    def binary_operator(self, op) -> None:
        self.data.first_operator = to_operator(op)
        self.context.change_state(EnteringSecondNumberState(self.context, self.data))

    def equals(self) -> None:
        # Nothing pending yet; listeners still get notified.
        self.context.change_state(self)

    def display(self) -> str:
        return self._display_data()


class EnteringSecondNumberState(CalculatorState):
    """Operator chosen; typing goes into the second operand.

    Pressing another operator or ``=`` resolves the pending computation into
    ``first_buffer`` so that ``1 + 2 + 3 =`` chains left to right.
    """

    PRIMITIVES = {
        Operator.PLUS: 'add',
        Operator.MINUS: 'subtract',
        Operator.MULT: 'multiply',
        Operator.DIV: 'divide',
    }

    add = staticmethod(arithmetic.add)
    subtract = staticmethod(arithmetic.subtract)
    multiply = staticmethod(arithmetic.multiply)
    divide = staticmethod(arithmetic.divide)

    def digit(self, d) -> None:
        self.data.second_buffer = self._type_digit(self.data.second_buffer, d)

    def decimal_separator(self) -> None:
        self.data.second_buffer = append_separator(self.data.second_buffer)

    def binary_operator(self, op) -> None:
        op = to_operator(op)
        if not self.data.second_buffer:
            logger.debug("Pending operator %s replaced by %s", self.data.first_operator, op)
            self.data.first_operator = op
            return
        if self._resolve():
            self.data.first_operator = op

    def equals(self) -> None:
        if self.data.second_buffer and not self._resolve():
            return
        self.context.change_state(self)

    def display(self) -> str:
        return self._display_data()

    def _resolve(self) -> bool:
        """Fold ``first_buffer first_operator second_buffer`` into ``first_buffer``.

        Returns False when the computation failed and the context has been
        moved to ``ErrorState``.
        """
        data = self.data
        left, op, right = data.first_buffer, data.first_operator, data.second_buffer
        if op is None:
            data.first_buffer, data.second_buffer = right, ""
            return True

        primitive = getattr(self, self.PRIMITIVES[op])
        try:
            value = primitive(arithmetic.parse_operand(left), arithmetic.parse_operand(right))
            result = arithmetic.format_number(
                value,
                self._option('precision', arithmetic.DEFAULT_PRECISION),
                self._option('max_digits', arithmetic.DEFAULT_MAX_DIGITS),
            )
        except DivisionByZero:
            logger.warning("Division by zero: %s %s %s", left or "0", op.value, right)
            return self._fail(EventType.DIVISION_BY_ZERO, ResultData(left, op, right))
        except ResultOverflow as exc:
            logger.warning("Overflow: %s %s %s (%s)", left or "0", op.value, right, exc)
            return self._fail(EventType.OVERFLOW, ResultData(left, op, right))

        logger.debug("Resolved %s %s %s = %s", left or "0", op.value, right, result)
        data.first_buffer = result
        data.second_buffer = ""
        self.context.publish(EventType.RESULT_COMPUTED, ResultData(left, op, right, result))
        return True

    def _fail(self, event_type: EventType, data: ResultData) -> bool:
        self.context.publish(event_type, data)
        self.context.change_state(ErrorState(self.context, self.data))
        return False


class ErrorState(CalculatorState):
    """Reached on division by zero or overflow; only ``clear`` leaves it."""

    def digit(self, d) -> None:
        logger.trace("Error state: digit %r ignored", d)  # type: ignore[attr-defined]

    def decimal_separator(self) -> None:
        logger.trace("Error state: decimal separator ignored")  # type: ignore[attr-defined]

    def binary_operator(self, op) -> None:
        logger.trace("Error state: operator %r ignored", op)  # type: ignore[attr-defined]

    def equals(self) -> None:
        logger.trace("Error state: equals ignored")  # type: ignore[attr-defined]

    def display(self) -> str:
        return self._option('error_display', 'Error')
