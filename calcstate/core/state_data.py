"""StateData — the buffers and pending operator owned by the current state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from calcstate.core.keys import Digit, Operator

DECIMAL_SEPARATOR = "."


@dataclass
class StateData:
    first_buffer: str = ""
    first_operator: Optional[Operator] = None
    second_buffer: str = ""

    def display(self, empty: str = "0") -> str:
        """Text to show: the second operand while it is being typed, else the first."""
        if self.second_buffer:
            return self.second_buffer
        return self.first_buffer or empty


def default_state_data() -> StateData:
    """Fresh data with empty buffers and no pending operator."""
    return StateData()


def count_digits(buffer: str) -> int:
    return sum(ch.isdigit() for ch in buffer)


def append_digit(buffer: str, digit: Digit, max_digits: int | None = None) -> str:
    """Return *buffer* with *digit* typed into it.

    A lone ``"0"`` is replaced instead of prefixed. When *max_digits* is set
    and the buffer is already full the buffer is returned unchanged.
    """
    if buffer == "0":
        return digit.value
    if max_digits is not None and count_digits(buffer) >= max_digits:
        return buffer
    return buffer + digit.value


def append_separator(buffer: str) -> str:
    """Return *buffer* with a decimal separator, unless it already has one."""
    if DECIMAL_SEPARATOR in buffer:
        return buffer
    return buffer + DECIMAL_SEPARATOR
