"""Exceptions raised by the calculator core."""


class CalculatorError(Exception):
    pass


class InvalidKey(CalculatorError, ValueError):
    """A key outside the supported set reached the core."""


class InvalidOperator(InvalidKey):
    pass


class InvalidDigit(InvalidKey):
    pass


class DivisionByZero(CalculatorError, ZeroDivisionError):
    """Raised by ``divide``; states recover from it by entering ``ErrorState``."""

    def __init__(self, message: str = "division by zero"):
        super().__init__(message)


class ResultOverflow(CalculatorError, OverflowError):
    """A result that is not finite or does not fit into a buffer."""
