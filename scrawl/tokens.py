"""Token definitions for the Scrawl language.

A token is an immutable (kind, lexeme) pair. This module also holds the
operator classification used by the expression engine in the parser:
which kinds are operands, which operators are unary, which are
assignments, and the precedence ladder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Mapping


class TokenKind(Enum):
    # Keywords
    IF = auto()
    ELSE = auto()
    WHILE = auto()
    FOR = auto()
    FUNCTION = auto()
    VAR = auto()
    RETURN = auto()
    TRUE = auto()
    FALSE = auto()
    # Literals
    INT = auto()
    FLOAT = auto()
    STRING = auto()
    # Operators and punctuation
    ADD = auto()
    SUBTRACT = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    MODULO = auto()
    NEGATIVE = auto()
    INCREMENT = auto()
    DECREMENT = auto()
    LEFT_PARENTHESIS = auto()
    RIGHT_PARENTHESIS = auto()
    LEFT_BRACKET = auto()
    RIGHT_BRACKET = auto()
    COMMA = auto()
    # Assignment operators
    ASSIGN = auto()
    ASSIGN_ADD = auto()
    ASSIGN_SUBTRACT = auto()
    ASSIGN_MULTIPLY = auto()
    ASSIGN_DIVIDE = auto()
    ASSIGN_MODULO = auto()
    # Boolean operators
    EQUAL = auto()
    NOT_EQUAL = auto()
    GREATER_THAN = auto()
    LESS_THAN = auto()
    GREATER_THAN_OR_EQUAL = auto()
    LESS_THAN_OR_EQUAL = auto()
    AND = auto()
    OR = auto()
    NOT = auto()
    # Miscellaneous
    END_STATEMENT = auto()
    END_FILE = auto()
    IDENTIFIER = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.lexeme!r})"


KEYWORDS: Mapping[str, TokenKind] = MappingProxyType({
    'if': TokenKind.IF,
    'else': TokenKind.ELSE,
    'while': TokenKind.WHILE,
    'for': TokenKind.FOR,
    'function': TokenKind.FUNCTION,
    'var': TokenKind.VAR,
    'return': TokenKind.RETURN,
    'true': TokenKind.TRUE,
    'false': TokenKind.FALSE,
})

# Literal spelling of every fixed-lexeme token. NEGATIVE shares '-' with
# SUBTRACT; the lexer only ever produces SUBTRACT.
SYMBOLS: Mapping[TokenKind, str] = MappingProxyType({
    **{kind: word for word, kind in KEYWORDS.items()},
    TokenKind.ADD: '+',
    TokenKind.SUBTRACT: '-',
    TokenKind.MULTIPLY: '*',
    TokenKind.DIVIDE: '/',
    TokenKind.MODULO: '%',
    TokenKind.NEGATIVE: '-',
    TokenKind.INCREMENT: '++',
    TokenKind.DECREMENT: '--',
    TokenKind.LEFT_PARENTHESIS: '(',
    TokenKind.RIGHT_PARENTHESIS: ')',
    TokenKind.LEFT_BRACKET: '{',
    TokenKind.RIGHT_BRACKET: '}',
    TokenKind.COMMA: ',',
    TokenKind.ASSIGN: '=',
    TokenKind.ASSIGN_ADD: '+=',
    TokenKind.ASSIGN_SUBTRACT: '-=',
    TokenKind.ASSIGN_MULTIPLY: '*=',
    TokenKind.ASSIGN_DIVIDE: '/=',
    TokenKind.ASSIGN_MODULO: '%=',
    TokenKind.EQUAL: '==',
    TokenKind.NOT_EQUAL: '!=',
    TokenKind.GREATER_THAN: '>',
    TokenKind.LESS_THAN: '<',
    TokenKind.GREATER_THAN_OR_EQUAL: '>=',
    TokenKind.LESS_THAN_OR_EQUAL: '<=',
    TokenKind.AND: '&&',
    TokenKind.OR: '||',
    TokenKind.NOT: '!',
    TokenKind.END_STATEMENT: ';',
})

OPERANDS = frozenset({
    TokenKind.IDENTIFIER, TokenKind.INT, TokenKind.FLOAT,
    TokenKind.STRING, TokenKind.TRUE, TokenKind.FALSE,
})

UNARY_OPERATORS = frozenset({
    TokenKind.NOT, TokenKind.NEGATIVE, TokenKind.INCREMENT,
    TokenKind.DECREMENT, TokenKind.RETURN,
})

ASSIGN_OPERATORS = frozenset({
    TokenKind.ASSIGN, TokenKind.ASSIGN_ADD, TokenKind.ASSIGN_SUBTRACT,
    TokenKind.ASSIGN_MULTIPLY, TokenKind.ASSIGN_DIVIDE, TokenKind.ASSIGN_MODULO,
})

# Lower number binds tighter. Assignment sits below everything so that it is
# always the root of a statement-level expression.
PRECEDENCE: Mapping[TokenKind, int] = MappingProxyType({
    TokenKind.NOT: 1,
    TokenKind.NEGATIVE: 1,
    TokenKind.INCREMENT: 1,
    TokenKind.DECREMENT: 1,
    TokenKind.RETURN: 1,
    TokenKind.MULTIPLY: 2,
    TokenKind.DIVIDE: 2,
    TokenKind.MODULO: 2,
    TokenKind.ADD: 3,
    TokenKind.SUBTRACT: 3,
    TokenKind.LESS_THAN: 4,
    TokenKind.GREATER_THAN: 4,
    TokenKind.LESS_THAN_OR_EQUAL: 4,
    TokenKind.GREATER_THAN_OR_EQUAL: 4,
    TokenKind.EQUAL: 5,
    TokenKind.NOT_EQUAL: 5,
    TokenKind.AND: 6,
    TokenKind.OR: 7,
    **{kind: 8 for kind in ASSIGN_OPERATORS},
})


def is_operator(kind: TokenKind) -> bool:
    return kind in PRECEDENCE


def is_operand(kind: TokenKind) -> bool:
    return kind in OPERANDS


def is_unary(kind: TokenKind) -> bool:
    return kind in UNARY_OPERATORS


def is_assign(kind: TokenKind) -> bool:
    return kind in ASSIGN_OPERATORS


def precedence(kind: TokenKind) -> int:
    """Return the precedence level of an operator, or -1 for non-operators."""
    return PRECEDENCE.get(kind, -1)


def symbol(kind: TokenKind) -> str:
    return SYMBOLS.get(kind, kind.name.lower())
