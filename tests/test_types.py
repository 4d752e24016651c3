import pytest

from scrawl.errors import OperandTypeError, ScrawlRuntimeError
from scrawl.tokens import TokenKind
from scrawl.types import BoolValue, FloatValue, IntValue, StringValue, VoidValue


def test_mixed_arithmetic_promotes_to_float():
    assert IntValue(3).apply_operator(TokenKind.ADD, FloatValue(1.5)) == FloatValue(4.5)
    assert FloatValue(1.5).apply_operator(TokenKind.MULTIPLY, IntValue(2)) == FloatValue(3.0)
    assert FloatValue(1.0).apply_operator(TokenKind.ADD, FloatValue(2.0)) == FloatValue(3.0)


def test_int_arithmetic_stays_int():
    assert IntValue(7).apply_operator(TokenKind.SUBTRACT, IntValue(10)) == IntValue(-3)
    assert IntValue(7).apply_operator(TokenKind.ASSIGN_MULTIPLY, IntValue(3)) == IntValue(21)


def test_int_division_truncates_toward_zero():
    assert IntValue(7).apply_operator(TokenKind.DIVIDE, IntValue(2)) == IntValue(3)
    assert IntValue(-7).apply_operator(TokenKind.DIVIDE, IntValue(2)) == IntValue(-3)
    assert IntValue(-7).apply_operator(TokenKind.MODULO, IntValue(2)) == IntValue(-1)
    assert IntValue(7).apply_operator(TokenKind.ASSIGN_MODULO, IntValue(-2)) == IntValue(1)


def test_division_by_zero():
    with pytest.raises(ScrawlRuntimeError):
        IntValue(1).apply_operator(TokenKind.DIVIDE, IntValue(0))
    with pytest.raises(ScrawlRuntimeError):
        FloatValue(1.0).apply_operator(TokenKind.DIVIDE, IntValue(0))


def test_float_modulo_is_rejected():
    with pytest.raises(OperandTypeError):
        FloatValue(5.5).apply_operator(TokenKind.MODULO, IntValue(2))


def test_comparisons_yield_bool():
    assert IntValue(1).apply_operator(TokenKind.LESS_THAN, FloatValue(1.5)) == BoolValue(True)
    assert IntValue(2).apply_operator(TokenKind.EQUAL, IntValue(2)) == BoolValue(True)
    assert BoolValue(True).apply_operator(TokenKind.NOT_EQUAL, BoolValue(False)) == BoolValue(True)


def test_int_plus_string_is_an_error():
    with pytest.raises(OperandTypeError) as exc:
        IntValue(1).apply_operator(TokenKind.ADD, StringValue('a'))
    assert str(exc.value) == "invalid operands for expression: 'int' + 'string'"


def test_string_concatenation_uses_textual_form():
    assert StringValue('n=').apply_operator(TokenKind.ADD, IntValue(3)) == StringValue('n=3')
    assert StringValue('').apply_operator(TokenKind.ASSIGN_ADD, BoolValue(True)) == StringValue('true')


def test_string_equality():
    assert StringValue('a').apply_operator(TokenKind.EQUAL, StringValue('a')) == BoolValue(True)
    assert StringValue('1').apply_operator(TokenKind.EQUAL, IntValue(1)) == BoolValue(False)
    assert StringValue('1').apply_operator(TokenKind.NOT_EQUAL, IntValue(1)) == BoolValue(True)


def test_boolean_logic():
    assert BoolValue(True).apply_operator(TokenKind.AND, BoolValue(False)) == BoolValue(False)
    assert BoolValue(False).apply_operator(TokenKind.OR, BoolValue(True)) == BoolValue(True)
    assert BoolValue(True).apply_operator(TokenKind.NOT) == BoolValue(False)
    with pytest.raises(OperandTypeError):
        BoolValue(True).apply_operator(TokenKind.AND, IntValue(1))


def test_unary_operators():
    assert IntValue(4).apply_operator(TokenKind.NEGATIVE) == IntValue(-4)
    assert IntValue(4).apply_operator(TokenKind.INCREMENT) == IntValue(5)
    assert FloatValue(0.5).apply_operator(TokenKind.DECREMENT) == FloatValue(-0.5)
    with pytest.raises(OperandTypeError) as exc:
        IntValue(1).apply_operator(TokenKind.NOT)
    assert str(exc.value) == "invalid operand for expression: !'int'"


def test_assignment_takes_the_right_hand_variant():
    assert IntValue(1).apply_operator(TokenKind.ASSIGN, StringValue('a')) == StringValue('a')
    assert VoidValue().apply_operator(TokenKind.ASSIGN, IntValue(2)) == IntValue(2)
    assert BoolValue(True).apply_operator(TokenKind.ASSIGN, VoidValue()) == VoidValue()


def test_return_passes_value_through():
    assert IntValue(9).apply_operator(TokenKind.RETURN) == IntValue(9)
    assert VoidValue().apply_operator(TokenKind.RETURN) == VoidValue()


def test_void_cannot_be_evaluated():
    with pytest.raises(OperandTypeError) as exc:
        VoidValue().apply_operator(TokenKind.ADD, IntValue(1))
    assert str(exc.value) == "cannot evaluate type 'void'"


def test_textual_forms():
    assert IntValue(-3).to_string() == '-3'
    assert FloatValue(4.5).to_string() == '4.5'
    assert BoolValue(False).to_string() == 'false'
    assert VoidValue().to_string() == ''
