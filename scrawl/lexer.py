"""Lexer for the Scrawl language.

The token table is expressed as a Lark grammar whose terminal names are
the names of `TokenKind` members, so every Lark token maps straight onto
a Scrawl `Token`. Only Lark's basic lexer is used; the grammar's single
rule exists to keep every terminal alive. Parsing proper happens in
`scrawl.parser`.
"""

from __future__ import annotations

from typing import List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LexerError
from .tokens import Token, TokenKind


SCRAWL_TOKENS = r"""
    start: _token*
    _token: IF | ELSE | WHILE | FOR | FUNCTION | VAR | RETURN | TRUE | FALSE
          | INT | FLOAT | STRING | IDENTIFIER
          | ADD | SUBTRACT | MULTIPLY | DIVIDE | MODULO | INCREMENT | DECREMENT
          | LEFT_PARENTHESIS | RIGHT_PARENTHESIS | LEFT_BRACKET | RIGHT_BRACKET | COMMA
          | ASSIGN | ASSIGN_ADD | ASSIGN_SUBTRACT | ASSIGN_MULTIPLY | ASSIGN_DIVIDE | ASSIGN_MODULO
          | EQUAL | NOT_EQUAL | GREATER_THAN | LESS_THAN | GREATER_THAN_OR_EQUAL | LESS_THAN_OR_EQUAL
          | AND | OR | NOT | END_STATEMENT

    // Keywords
    IF: "if"
    ELSE: "else"
    WHILE: "while"
    FOR: "for"
    FUNCTION: "function"
    VAR: "var"
    RETURN: "return"
    TRUE: "true"
    FALSE: "false"

    // Literals
    FLOAT: /\d+\.\d*/
    INT: /\d+/
    STRING: /"[^"]*"/
    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/

    // Operators and punctuation
    ADD: "+"
    SUBTRACT: "-"
    MULTIPLY: "*"
    DIVIDE: "/"
    MODULO: "%"
    INCREMENT: "++"
    DECREMENT: "--"
    LEFT_PARENTHESIS: "("
    RIGHT_PARENTHESIS: ")"
    LEFT_BRACKET: "{"
    RIGHT_BRACKET: "}"
    COMMA: ","
    END_STATEMENT: ";"

    // Assignment
    ASSIGN: "="
    ASSIGN_ADD: "+="
    ASSIGN_SUBTRACT: "-="
    ASSIGN_MULTIPLY: "*="
    ASSIGN_DIVIDE: "/="
    ASSIGN_MODULO: "%="

    // Boolean logic
    EQUAL: "=="
    NOT_EQUAL: "!="
    GREATER_THAN: ">"
    LESS_THAN: "<"
    GREATER_THAN_OR_EQUAL: ">="
    LESS_THAN_OR_EQUAL: "<="
    AND: "&&"
    OR: "||"
    NOT: "!"

    COMMENT: /\/\/[^\n]*/
    %import common.WS
    %ignore WS
    %ignore COMMENT
"""


SCRAWL_LEXER = Lark(
    SCRAWL_TOKENS,
    parser='lalr',
    lexer='basic',
)


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens.

    String literal lexemes are stored without their quotes. The list is
    not terminated by an END_FILE token; the parser supplies one when it
    runs past the end.
    """
    tokens: List[Token] = []
    try:
        for lark_token in SCRAWL_LEXER.lex(source):
            kind = TokenKind[lark_token.type]
            lexeme = str(lark_token)
            if kind is TokenKind.STRING:
                lexeme = lexeme[1:-1]
            tokens.append(Token(kind, lexeme, lark_token.line, lark_token.column))
    except UnexpectedCharacters as e:
        raise LexerError(f"unexpected character {e.char!r} at {e.line}:{e.column}") from e
    return tokens
