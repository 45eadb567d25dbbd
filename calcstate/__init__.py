"""calcstate — input-processing core of a four-function calculator."""

__version__ = "1.0.0"

from calcstate.core.context import CalculatorContext
from calcstate.core.errors import DivisionByZero, InvalidDigit, InvalidOperator
from calcstate.core.keys import Digit, Operator

__all__ = [
    '__version__',
    'CalculatorContext',
    'Digit',
    'DivisionByZero',
    'InvalidDigit',
    'InvalidOperator',
    'Operator',
]
