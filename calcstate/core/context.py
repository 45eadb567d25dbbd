"""CalculatorContext — holds the current state and forwards actions to it."""

from __future__ import annotations

import logging
import time
from typing import Any

import calcstate.log  # registers TRACE level and logger.trace()
from calcstate.config import validate_config
from calcstate.core.event_bus import EventBus
from calcstate.core.events import Event, EventType, StateChangeData
from calcstate.core.state_data import default_state_data
from calcstate.core.states import CalculatorState, EnteringFirstNumberState

logger = logging.getLogger(__name__)


class CalculatorContext:
    """Owns exactly one live state; states replace themselves via ``change_state``."""

    def __init__(self, config: dict | None = None, bus: EventBus | None = None):
        self.config = validate_config(config)
        self.bus = bus if bus is not None else EventBus()
        self._state: CalculatorState = EnteringFirstNumberState(self, default_state_data())

    @property
    def state(self) -> CalculatorState:
        return self._state

    def change_state(self, new_state: CalculatorState) -> None:
        """Install *new_state*; fires STATE_CHANGED even if it is the current one."""
        previous = self._state
        if previous is new_state:
            logger.trace("State: %r re-entered", new_state)  # type: ignore[attr-defined]
        else:
            logger.debug("State: %r → %r", previous, new_state)
        self._state = new_state
        self.publish(EventType.STATE_CHANGED, StateChangeData(previous, new_state))

    def publish(self, event_type: EventType, data: Any) -> None:
        self.bus.publish(Event(event_type, data, time.time()))

    # -- actions ---------------------------------------------------------

    def digit(self, d) -> None:
        self._state.digit(d)

    def decimal_separator(self) -> None:
        self._state.decimal_separator()

    def binary_operator(self, op) -> None:
        self._state.binary_operator(op)

    def equals(self) -> None:
        self._state.equals()

    def clear(self) -> None:
        self._state.clear()

    def display(self) -> str:
        return self._state.display()
