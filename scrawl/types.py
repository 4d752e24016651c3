"""Runtime values for Scrawl.

Every runtime datum is one of five immutable variants: Int, Float,
String, Bool and Void. Operators are applied through
`Value.apply_operator`, called on the left (or only) operand; it always
returns a new value and never mutates either operand.

Assignment (`=`) is handled identically for every variant: the result
takes the variant of the right-hand side, so a variable may change type
when it is reassigned. The `return` marker passes its operand through
unchanged so return statements share the unary operator path.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass, replace
from typing import Callable, ClassVar, Dict, Optional, Union

from .errors import OperandTypeError, ScrawlRuntimeError
from .tokens import TokenKind, symbol


ARITHMETIC: Dict[TokenKind, Callable] = {
    TokenKind.ADD: operator.add,
    TokenKind.ASSIGN_ADD: operator.add,
    TokenKind.SUBTRACT: operator.sub,
    TokenKind.ASSIGN_SUBTRACT: operator.sub,
    TokenKind.MULTIPLY: operator.mul,
    TokenKind.ASSIGN_MULTIPLY: operator.mul,
}

DIVISION = frozenset({TokenKind.DIVIDE, TokenKind.ASSIGN_DIVIDE})
MODULO = frozenset({TokenKind.MODULO, TokenKind.ASSIGN_MODULO})

COMPARISONS: Dict[TokenKind, Callable] = {
    TokenKind.LESS_THAN: operator.lt,
    TokenKind.GREATER_THAN: operator.gt,
    TokenKind.LESS_THAN_OR_EQUAL: operator.le,
    TokenKind.GREATER_THAN_OR_EQUAL: operator.ge,
    TokenKind.EQUAL: operator.eq,
    TokenKind.NOT_EQUAL: operator.ne,
}


def truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


@dataclass(frozen=True)
class Value:
    """Base class of all runtime values."""
    type_name: ClassVar[str] = 'value'

    def to_string(self) -> str:
        raise NotImplementedError

    def apply_operator(self, op: TokenKind, other: Optional['Value'] = None) -> 'Value':
        if op is TokenKind.ASSIGN and other is not None:
            return replace(other)
        if op is TokenKind.RETURN and other is None:
            return self
        if other is None:
            return self.apply_unary(op)
        return self.apply_binary(op, other)

    def apply_unary(self, op: TokenKind) -> 'Value':
        raise OperandTypeError(symbol(op), self.type_name)

    def apply_binary(self, op: TokenKind, other: 'Value') -> 'Value':
        raise OperandTypeError(symbol(op), self.type_name, other.type_name)


Number = Union['IntValue', 'FloatValue']


def apply_numeric(op: TokenKind, left: Number, right: Number) -> 'Value':
    """Apply a binary operator to two numbers, promoting to Float when mixed."""
    a, b = left.value, right.value
    as_float = isinstance(left, FloatValue) or isinstance(right, FloatValue)
    if op in COMPARISONS:
        return BoolValue(COMPARISONS[op](a, b))
    if op in ARITHMETIC:
        result = ARITHMETIC[op](a, b)
    elif op in DIVISION:
        if b == 0:
            raise ScrawlRuntimeError('division by zero')
        result = a / b if as_float else truncating_div(a, b)
    elif op in MODULO and not as_float:
        if b == 0:
            raise ScrawlRuntimeError('modulo by zero')
        result = a - b * truncating_div(a, b)
    else:
        raise OperandTypeError(symbol(op), left.type_name, right.type_name)
    if as_float:
        return FloatValue(float(result))
    return IntValue(result)


@dataclass(frozen=True)
class IntValue(Value):
    value: int
    type_name: ClassVar[str] = 'int'

    def to_string(self) -> str:
        return str(self.value)

    def apply_unary(self, op: TokenKind) -> Value:
        if op is TokenKind.NEGATIVE:
            return IntValue(-self.value)
        if op is TokenKind.INCREMENT:
            return IntValue(self.value + 1)
        if op is TokenKind.DECREMENT:
            return IntValue(self.value - 1)
        return super().apply_unary(op)

    def apply_binary(self, op: TokenKind, other: Value) -> Value:
        if isinstance(other, (IntValue, FloatValue)):
            return apply_numeric(op, self, other)
        return super().apply_binary(op, other)


@dataclass(frozen=True)
class FloatValue(Value):
    value: float
    type_name: ClassVar[str] = 'float'

    def to_string(self) -> str:
        return repr(self.value)

    def apply_unary(self, op: TokenKind) -> Value:
        if op is TokenKind.NEGATIVE:
            return FloatValue(-self.value)
        if op is TokenKind.INCREMENT:
            return FloatValue(self.value + 1.0)
        if op is TokenKind.DECREMENT:
            return FloatValue(self.value - 1.0)
        return super().apply_unary(op)

    def apply_binary(self, op: TokenKind, other: Value) -> Value:
        if isinstance(other, (IntValue, FloatValue)):
            return apply_numeric(op, self, other)
        return super().apply_binary(op, other)


@dataclass(frozen=True)
class StringValue(Value):
    value: str
    type_name: ClassVar[str] = 'string'

    def to_string(self) -> str:
        return self.value

    def apply_binary(self, op: TokenKind, other: Value) -> Value:
        if op in (TokenKind.ADD, TokenKind.ASSIGN_ADD):
            return StringValue(self.value + other.to_string())
        # Comparing against a non-string is never equal.
        if op is TokenKind.EQUAL:
            return BoolValue(isinstance(other, StringValue) and self.value == other.value)
        if op is TokenKind.NOT_EQUAL:
            return BoolValue(not isinstance(other, StringValue) or self.value != other.value)
        return super().apply_binary(op, other)


@dataclass(frozen=True)
class BoolValue(Value):
    value: bool
    type_name: ClassVar[str] = 'bool'

    def to_string(self) -> str:
        return 'true' if self.value else 'false'

    def apply_unary(self, op: TokenKind) -> Value:
        if op is TokenKind.NOT:
            return BoolValue(not self.value)
        return super().apply_unary(op)

    def apply_binary(self, op: TokenKind, other: Value) -> Value:
        if isinstance(other, BoolValue):
            if op is TokenKind.AND:
                return BoolValue(self.value and other.value)
            if op is TokenKind.OR:
                return BoolValue(self.value or other.value)
            if op in COMPARISONS:
                return BoolValue(COMPARISONS[op](self.value, other.value))
        return super().apply_binary(op, other)


@dataclass(frozen=True)
class VoidValue(Value):
    """The result of statements and calls that produce nothing."""
    type_name: ClassVar[str] = 'void'

    def to_string(self) -> str:
        return ''

    def apply_unary(self, op: TokenKind) -> Value:
        raise OperandTypeError(symbol(op), self.type_name, message="cannot evaluate type 'void'")

    def apply_binary(self, op: TokenKind, other: Value) -> Value:
        raise OperandTypeError(symbol(op), self.type_name, other.type_name,
                               message="cannot evaluate type 'void'")
