import pytest

from scrawl.errors import LexerError
from scrawl.lexer import tokenize
from scrawl.tokens import TokenKind


def kinds(source):
    return [t.kind for t in tokenize(source)]


def test_variable_definition_tokens():
    assert kinds('var x = 10;') == [
        TokenKind.VAR, TokenKind.IDENTIFIER, TokenKind.ASSIGN, TokenKind.INT, TokenKind.END_STATEMENT,
    ]


def test_keyword_prefix_is_identifier():
    tokens = tokenize('iffy if variable')
    assert [t.kind for t in tokens] == [TokenKind.IDENTIFIER, TokenKind.IF, TokenKind.IDENTIFIER]
    assert tokens[0].lexeme == 'iffy'


def test_multi_character_operators():
    assert kinds('a += 1; b++; c == d; e <= f; g != h; i && j || !k; l--') == [
        TokenKind.IDENTIFIER, TokenKind.ASSIGN_ADD, TokenKind.INT, TokenKind.END_STATEMENT,
        TokenKind.IDENTIFIER, TokenKind.INCREMENT, TokenKind.END_STATEMENT,
        TokenKind.IDENTIFIER, TokenKind.EQUAL, TokenKind.IDENTIFIER, TokenKind.END_STATEMENT,
        TokenKind.IDENTIFIER, TokenKind.LESS_THAN_OR_EQUAL, TokenKind.IDENTIFIER, TokenKind.END_STATEMENT,
        TokenKind.IDENTIFIER, TokenKind.NOT_EQUAL, TokenKind.IDENTIFIER, TokenKind.END_STATEMENT,
        TokenKind.IDENTIFIER, TokenKind.AND, TokenKind.IDENTIFIER, TokenKind.OR, TokenKind.NOT,
        TokenKind.IDENTIFIER, TokenKind.END_STATEMENT,
        TokenKind.IDENTIFIER, TokenKind.DECREMENT,
    ]


def test_minus_is_never_part_of_a_number():
    assert kinds('-5') == [TokenKind.SUBTRACT, TokenKind.INT]


def test_number_literals():
    tokens = tokenize('3.14 42 7.')
    assert [(t.kind, t.lexeme) for t in tokens] == [
        (TokenKind.FLOAT, '3.14'), (TokenKind.INT, '42'), (TokenKind.FLOAT, '7.'),
    ]


def test_string_lexeme_has_no_quotes():
    tokens = tokenize('output("hello world");')
    assert tokens[2].kind is TokenKind.STRING
    assert tokens[2].lexeme == 'hello world'


def test_comments_and_whitespace_are_skipped():
    tokens = tokenize('x; // a note\n  y;')
    assert [t.lexeme for t in tokens] == ['x', ';', 'y', ';']
    assert tokens[2].line == 2


def test_no_end_file_token():
    assert tokenize('') == []


def test_unknown_character_raises():
    with pytest.raises(LexerError) as exc:
        tokenize('var x = 1 @ 2;')
    assert "'@'" in str(exc.value)
