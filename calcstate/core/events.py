"""Typed event definitions (dataclasses)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional

from calcstate.core.keys import Operator


class EventType(Enum):
    # Emitted by CalculatorContext.change_state, also for self-transitions
    STATE_CHANGED = auto()
    # Arithmetic lifecycle
    RESULT_COMPUTED = auto()
    DIVISION_BY_ZERO = auto()
    OVERFLOW = auto()


@dataclass
class Event:
    type: EventType
    data: Any
    timestamp: float


@dataclass
class StateChangeData:
    previous: Any       # CalculatorState
    current: Any        # CalculatorState


@dataclass
class ResultData:
    left: str
    operator: Operator
    right: str
    result: Optional[str] = None    # None when the computation failed
