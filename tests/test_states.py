"""Tests for the individual calculator states."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch

import pytest

from calcstate.core.errors import InvalidDigit, InvalidOperator
from calcstate.core.events import EventType
from calcstate.core.keys import Digit, Operator
from calcstate.core.state_data import StateData, default_state_data
from calcstate.core.states import (
    EnteringFirstNumberState,
    EnteringSecondNumberState,
    ErrorState,
)


def second_state(context, first="", op=None, second=""):
    state = EnteringSecondNumberState(context, StateData(first, op, second))
    context.change_state(state)
    return state


# ------------------------------------------------------------------
# EnteringFirstNumberState
# ------------------------------------------------------------------

class TestEnteringFirstNumber:

    def test_digit_replaces_lone_zero(self, context):
        state = EnteringFirstNumberState(context, StateData(first_buffer="0"))
        state.digit(Digit.ONE)
        assert state.data.first_buffer == "1"

    def test_digit_appends(self, context):
        state = EnteringFirstNumberState(context, StateData(first_buffer="1"))
        state.digit("2")
        assert state.data.first_buffer == "12"

    def test_invalid_digit_raises(self, context):
        with pytest.raises(InvalidDigit):
            context.state.digit("x")

    def test_decimal_separator_on_empty_buffer(self, context):
        context.state.decimal_separator()
        assert context.state.data.first_buffer == "."

    def test_decimal_separator_twice(self, context):
        state = EnteringFirstNumberState(context, StateData(first_buffer="12"))
        state.decimal_separator()
        state.decimal_separator()
        assert state.data.first_buffer == "12."

    def test_digit_respects_max_digits(self, bus):
        from calcstate.core.context import CalculatorContext
        ctx = CalculatorContext({'max_digits': 3}, bus=bus)
        for d in "12345":
            ctx.digit(d)
        assert ctx.state.data.first_buffer == "123"

    def test_binary_operator_moves_data_to_second_state(self, context):
        state = context.state
        state.data.first_buffer = "12"
        state.binary_operator(Operator.PLUS)
        new_state = context.state
        assert isinstance(new_state, EnteringSecondNumberState)
        assert new_state.data is state.data
        assert new_state.data.first_buffer == "12"
        assert new_state.data.first_operator is Operator.PLUS
        assert new_state.data.second_buffer == ""

    def test_binary_operator_accepts_symbol(self, context):
        context.state.binary_operator("*")
        assert context.state.data.first_operator is Operator.MULT

    def test_invalid_operator_raises(self, context):
        state = context.state
        with pytest.raises(InvalidOperator, match="Invalid Operator"):
            state.binary_operator("INVALID_OPERATOR")
        assert context.state is state
        assert state.data.first_operator is None

    def test_equals_is_noop_but_renotifies(self, context, state_changes):
        state = context.state
        state.data.first_buffer = "42"
        state.equals()
        assert context.state is state
        assert state.data == StateData(first_buffer="42")
        assert len(state_changes) == 1
        assert state_changes[0].previous is state
        assert state_changes[0].current is state

    def test_clear_installs_fresh_state(self, context):
        state = context.state
        state.data.first_buffer = "42"
        state.clear()
        assert isinstance(context.state, EnteringFirstNumberState)
        assert context.state is not state
        assert context.state.data == default_state_data()

    def test_display_delegates_to_data(self, context):
        state = context.state
        with patch.object(StateData, 'display', return_value='displayValue') as display:
            assert state.display() == 'displayValue'
        display.assert_called_once_with('0')


# ------------------------------------------------------------------
# EnteringSecondNumberState
# ------------------------------------------------------------------

class TestEnteringSecondNumber:

    def test_digit_replaces_lone_zero(self, context):
        state = second_state(context, "1", Operator.PLUS, "0")
        state.digit(Digit.ONE)
        assert state.data.second_buffer == "1"

    def test_digit_appends_to_second_buffer(self, context):
        state = second_state(context, "1", Operator.PLUS)
        state.digit(Digit.ONE)
        assert state.data.second_buffer == "1"
        assert state.data.first_buffer == "1"

    def test_decimal_separator_on_empty_buffer(self, context):
        state = second_state(context)
        state.decimal_separator()
        assert state.data.second_buffer == "."

    def test_decimal_separator_appends(self, context):
        state = second_state(context, second="12")
        state.decimal_separator()
        assert state.data.second_buffer == "12."

    def test_decimal_separator_existing(self, context):
        state = second_state(context, second="12.34")
        state.decimal_separator()
        assert state.data.second_buffer == "12.34"

    @pytest.mark.parametrize('first, op, second, primitive, expected', [
        ("1", Operator.PLUS, "1", 'add', "2"),
        ("3", Operator.MINUS, "1", 'subtract', "2"),
        ("2", Operator.MULT, "3", 'multiply', "6"),
        ("10", Operator.DIV, "2", 'divide', "5"),
    ])
    def test_binary_operator_chains(self, context, first, op, second, primitive, expected):
        state = second_state(context, first, op, second)
        real = getattr(state, primitive)
        with patch.object(state, primitive, wraps=real) as spy:
            state.binary_operator(op)
        spy.assert_called_once_with(Decimal(first), Decimal(second))
        assert context.state is state
        assert state.data.first_buffer == expected
        assert state.data.first_operator is op
        assert state.data.second_buffer == ""

    def test_binary_operator_switches_pending_operator(self, context):
        state = second_state(context, "2", Operator.MULT, "3")
        state.binary_operator(Operator.PLUS)
        assert state.data.first_buffer == "6"
        assert state.data.first_operator is Operator.PLUS

    def test_operator_without_second_operand_replaces_operator(self, context):
        state = second_state(context, "5", Operator.PLUS)
        with patch.object(state, 'add') as add:
            state.binary_operator(Operator.MINUS)
        add.assert_not_called()
        assert state.data == StateData("5", Operator.MINUS, "")

    def test_invalid_operator_raises(self, context):
        state = second_state(context, "1", Operator.PLUS, "2")
        with pytest.raises(InvalidOperator, match="Invalid Operator"):
            state.binary_operator("INVALID_OPERATOR")
        assert state.data == StateData("1", Operator.PLUS, "2")

    def test_equals_stays_in_same_state(self, context, state_changes):
        state = second_state(context)
        state_changes.clear()
        state.equals()
        assert context.state is state
        assert [c.current for c in state_changes] == [state]

    @pytest.mark.parametrize('first, op, second, expected', [
        ("1", Operator.PLUS, "2", "3"),
        ("3", Operator.MINUS, "1", "2"),
        ("2", Operator.MULT, "3", "6"),
        ("10", Operator.DIV, "2", "5"),
        ("1", Operator.DIV, "4", "0.25"),
        ("1", Operator.MINUS, "3", "-2"),
    ])
    def test_equals_resolves(self, context, state_changes, first, op, second, expected):
        state = second_state(context, first, op, second)
        state_changes.clear()
        state.equals()
        assert state.data.first_buffer == expected
        assert state.data.second_buffer == ""
        assert state.data.first_operator is op
        assert state.display() == expected
        assert [c.current for c in state_changes] == [state]

    def test_equals_uses_instance_primitive(self, context):
        state = second_state(context, "10", Operator.DIV, "2")
        with patch.object(state, 'divide', return_value=5) as divide:
            state.equals()
        divide.assert_called_once_with(Decimal(10), Decimal(2))
        assert state.data.first_buffer == "5"

    def test_equals_publishes_result(self, context, bus):
        results = []
        bus.subscribe(EventType.RESULT_COMPUTED, lambda e: results.append(e.data))
        second_state(context, "2", Operator.MULT, "4").equals()
        assert len(results) == 1
        assert (results[0].left, results[0].operator, results[0].right, results[0].result) == \
            ("2", Operator.MULT, "4", "8")

    def test_equals_division_by_zero_enters_error(self, context, bus):
        errors = []
        bus.subscribe(EventType.DIVISION_BY_ZERO, lambda e: errors.append(e.data))
        state = second_state(context, "5", Operator.DIV, "0")
        state.equals()
        assert isinstance(context.state, ErrorState)
        assert context.display() == "Error"
        assert len(errors) == 1
        assert errors[0].result is None

    def test_operator_division_by_zero_enters_error(self, context):
        state = second_state(context, "5", Operator.DIV, "0.")
        state.binary_operator(Operator.PLUS)
        assert isinstance(context.state, ErrorState)

    def test_overflow_enters_error(self, context, bus):
        overflows = []
        bus.subscribe(EventType.OVERFLOW, lambda e: overflows.append(e.data))
        state = second_state(context, "9999999999999999", Operator.MULT, "9999999999999999")
        state.equals()
        assert isinstance(context.state, ErrorState)
        assert context.display() == "Error"
        assert len(overflows) == 1
        assert overflows[0].result is None
        assert state.data.first_buffer == "9999999999999999"

    def test_operator_overflow_enters_error(self, context):
        state = second_state(context, "9999999999999999", Operator.PLUS, "1")
        state.binary_operator(Operator.PLUS)
        assert isinstance(context.state, ErrorState)

    def test_large_integral_result_is_written_back_exactly(self, context):
        state = second_state(context, "1234567890123", Operator.PLUS, "0")
        state.equals()
        assert state.data.first_buffer == "1234567890123"

    def test_clear_installs_fresh_first_state(self, context):
        state = second_state(context, "1", Operator.PLUS, "2")
        state.clear()
        assert isinstance(context.state, EnteringFirstNumberState)
        assert context.state.data == default_state_data()

    def test_display(self, context):
        state = second_state(context, "12", Operator.PLUS)
        assert state.display() == "12"
        state.digit(Digit.THREE)
        assert state.display() == "3"


# ------------------------------------------------------------------
# ErrorState
# ------------------------------------------------------------------

class TestErrorState:

    @pytest.fixture
    def error_state(self, context):
        state = ErrorState(context, StateData("5", Operator.DIV, "0"))
        context.change_state(state)
        return state

    def test_actions_are_ignored(self, context, error_state, state_changes):
        state_changes.clear()
        error_state.digit(Digit.ONE)
        error_state.decimal_separator()
        error_state.binary_operator(Operator.PLUS)
        error_state.binary_operator("INVALID_OPERATOR")
        error_state.equals()
        assert context.state is error_state
        assert error_state.display() == "Error"
        assert error_state.data == StateData("5", Operator.DIV, "0")
        assert state_changes == []

    def test_display_is_configurable(self, bus):
        from calcstate.core.context import CalculatorContext
        ctx = CalculatorContext({'error_display': 'E'}, bus=bus)
        assert ErrorState(ctx).display() == "E"

    def test_clear_is_the_way_out(self, context, error_state):
        error_state.clear()
        assert isinstance(context.state, EnteringFirstNumberState)
        assert context.state.data == default_state_data()
        assert context.display() == "0"
