"""Parser for the Scrawl language.

Statements are parsed by recursive descent, dispatching on the next
token. Expressions are handled in three steps:

1. **Scanning**: tokens are collected into an infix buffer until the end
   of the statement, a top-level comma or an unmatched closing
   parenthesis. Function calls are parsed recursively on the spot and
   replaced by a single FUNCTION placeholder token; bare identifiers
   become Variable references. Both kinds of node are queued in order of
   appearance.

2. **Shunting-yard**: the infix buffer is reordered into postfix form
   using the precedence table from `scrawl.tokens`.

3. **Tree construction**: the postfix sequence is folded on an operand
   stack into Terminal, Variable, Function, Unary and Binary nodes.

`parse_program` is the usual entry point: it tokenizes the source and
returns the root `Block`.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional

from .ast import (
    Node, Block, Variable, Function, Terminal, Unary, Binary,
    If, While, For, children,
)
from .errors import ParseError
from .lexer import tokenize
from .tokens import (
    Token, TokenKind, is_operand, is_operator, is_unary, precedence,
)
from .types import BoolValue, FloatValue, IntValue, StringValue, Value, VoidValue


# Tokens that always end an expression.
EXPRESSION_STOPS = frozenset({
    TokenKind.END_STATEMENT, TokenKind.END_FILE,
    TokenKind.LEFT_BRACKET, TokenKind.RIGHT_BRACKET,
})

POSTFIX_CAPABLE = frozenset({TokenKind.INCREMENT, TokenKind.DECREMENT})


def describe(token: Token) -> str:
    if token.kind is TokenKind.END_FILE:
        return 'end of input'
    return f"{token.lexeme!r}"


def literal_value(token: Token) -> Value:
    if token.kind is TokenKind.INT:
        return IntValue(int(token.lexeme))
    if token.kind is TokenKind.FLOAT:
        return FloatValue(float(token.lexeme))
    if token.kind is TokenKind.STRING:
        return StringValue(token.lexeme)
    if token.kind is TokenKind.TRUE:
        return BoolValue(True)
    if token.kind is TokenKind.FALSE:
        return BoolValue(False)
    raise ParseError(f"{describe(token)} is not a literal")


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def peek(self, offset: int = 0) -> Token:
        index = self.pos + offset
        if index < len(self.tokens):
            return self.tokens[index]
        if self.tokens:
            last = self.tokens[-1]
            return Token(TokenKind.END_FILE, '', last.line, last.column + len(last.lexeme))
        return Token(TokenKind.END_FILE, '')

    def advance(self) -> Token:
        token = self.peek()
        if not self.at_end():
            self.pos += 1
        return token

    def match(self, kind: TokenKind) -> bool:
        return self.peek().kind is kind

    def consume(self, kind: TokenKind, message: str) -> Token:
        token = self.peek()
        if token.kind is not kind:
            raise ParseError(f"{message} at {token.line}:{token.column}, got {describe(token)}")
        self.pos += 1
        return token

    def error(self, message: str) -> ParseError:
        token = self.peek()
        return ParseError(f"{message} at {token.line}:{token.column}")

    def parse(self) -> Block:
        statements: List[Node] = []
        while not self.at_end():
            # stray semicolons
            if self.match(TokenKind.END_STATEMENT):
                self.advance()
                continue
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
        return Block(statements)

    def parse_statement(self) -> Optional[Node]:
        kind = self.peek().kind
        if kind is TokenKind.IF:
            return self.parse_if()
        if kind is TokenKind.WHILE:
            return self.parse_while()
        if kind is TokenKind.FOR:
            return self.parse_for()
        if kind is TokenKind.VAR:
            return self.parse_variable(is_definition=True)
        if kind is TokenKind.FUNCTION:
            return self.parse_function(is_definition=True)
        if kind is TokenKind.RETURN:
            return self.parse_return()
        expression = self.parse_expression()
        self.consume(TokenKind.END_STATEMENT, "Expected ';' after expression")
        return expression

    def parse_block(self) -> Block:
        self.consume(TokenKind.LEFT_BRACKET, "Expected '{'")
        statements: List[Node] = []
        while not self.match(TokenKind.RIGHT_BRACKET):
            if self.at_end():
                raise self.error("Expected '}' to close block, reached end of input")
            if self.match(TokenKind.END_STATEMENT):
                self.advance()
                continue
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
        self.consume(TokenKind.RIGHT_BRACKET, "Expected '}'")
        return Block(statements)

    def parse_if(self) -> If:
        self.consume(TokenKind.IF, "Expected 'if'")
        self.consume(TokenKind.LEFT_PARENTHESIS, "Expected '(' after 'if'")
        condition = self.require_expression("Expected condition after 'if ('")
        self.consume(TokenKind.RIGHT_PARENTHESIS, "Expected ')' after 'if' condition")
        true_body = self.parse_block()
        false_body: Optional[Node] = None
        if self.match(TokenKind.ELSE):
            self.advance()
            if self.match(TokenKind.IF):
                false_body = self.parse_if()
            else:
                false_body = self.parse_block()
        return If(condition, true_body, false_body)

    def parse_while(self) -> While:
        self.consume(TokenKind.WHILE, "Expected 'while'")
        self.consume(TokenKind.LEFT_PARENTHESIS, "Expected '(' after 'while'")
        condition = self.require_expression("Expected condition after 'while ('")
        self.consume(TokenKind.RIGHT_PARENTHESIS, "Expected ')' after 'while' condition")
        body = self.parse_block()
        return While(condition, body)

    def parse_for(self) -> For:
        self.consume(TokenKind.FOR, "Expected 'for'")
        self.consume(TokenKind.LEFT_PARENTHESIS, "Expected '(' after 'for'")
        # The initialization is a whole statement and consumes its own ';'.
        initialization = self.parse_statement()
        condition = self.parse_expression()
        self.consume(TokenKind.END_STATEMENT, "Expected ';' after 'for' condition")
        update = self.parse_expression()
        self.consume(TokenKind.RIGHT_PARENTHESIS, "Expected ')' after 'for' clauses")
        body = self.parse_block()
        return For(initialization, condition, update, body)

    def parse_variable(self, is_definition: bool) -> Variable:
        if not is_definition:
            token = self.consume(TokenKind.IDENTIFIER, "Expected identifier")
            return Variable(token.lexeme)
        self.consume(TokenKind.VAR, "Expected 'var'")
        name = self.peek()
        if name.kind is not TokenKind.IDENTIFIER:
            raise self.error("Expected variable name after 'var'")
        initializer = self.parse_expression()
        if not defines(initializer, name.lexeme):
            raise ParseError(f"Invalid definition of variable '{name.lexeme}' at {name.line}:{name.column}")
        self.consume(TokenKind.END_STATEMENT, "Expected ';' after variable definition")
        return Variable(name.lexeme, initializer, is_definition=True)

    def parse_function(self, is_definition: bool) -> Function:
        if is_definition:
            self.consume(TokenKind.FUNCTION, "Expected 'function'")
        name = self.consume(TokenKind.IDENTIFIER, "Expected function name")
        self.consume(TokenKind.LEFT_PARENTHESIS, f"Expected '(' after '{name.lexeme}'")
        parameters: List[Node] = []
        while not self.match(TokenKind.RIGHT_PARENTHESIS):
            parameter = self.parse_expression()
            if parameter is None:
                raise self.error(f"Expected parameter in '{name.lexeme}'")
            if is_definition and not (isinstance(parameter, Variable) and not parameter.is_definition):
                raise ParseError(f"Function parameter must be an identifier in '{name.lexeme}' "
                                 f"at {name.line}:{name.column}")
            parameters.append(parameter)
            if self.match(TokenKind.COMMA):
                self.advance()
            elif not self.match(TokenKind.RIGHT_PARENTHESIS):
                raise self.error(f"Expected ',' or ')' in '{name.lexeme}'")
        self.consume(TokenKind.RIGHT_PARENTHESIS, f"Expected ')' after parameters of '{name.lexeme}'")
        body = self.parse_block() if is_definition else None
        return Function(name.lexeme, parameters, body, is_definition)

    def parse_return(self) -> Unary:
        token = self.consume(TokenKind.RETURN, "Expected 'return'")
        value = self.parse_expression()
        if value is None:
            value = Terminal(VoidValue())
        self.consume(TokenKind.END_STATEMENT, "Expected ';' after return value")
        return Unary(token, value)

    def require_expression(self, message: str) -> Node:
        expression = self.parse_expression()
        if expression is None:
            raise self.error(message)
        return expression

    def parse_expression(self) -> Optional[Node]:
        """Parse one expression, or return None if it is empty."""
        depth = 0
        infix: List[Token] = []
        operands: Deque[Node] = deque()
        while True:
            token = self.peek()
            if token.kind in EXPRESSION_STOPS:
                break
            if depth == 0 and token.kind in (TokenKind.COMMA, TokenKind.RIGHT_PARENTHESIS):
                break
            if token.kind is TokenKind.IDENTIFIER:
                if self.peek(1).kind is TokenKind.LEFT_PARENTHESIS:
                    operands.append(self.parse_function(is_definition=False))
                    infix.append(Token(TokenKind.FUNCTION, token.lexeme, token.line, token.column))
                else:
                    operands.append(self.parse_variable(is_definition=False))
                    infix.append(token)
                continue
            self.advance()
            if token.kind is TokenKind.LEFT_PARENTHESIS:
                depth += 1
            elif token.kind is TokenKind.RIGHT_PARENTHESIS:
                depth -= 1
            elif token.kind is TokenKind.SUBTRACT and in_prefix_position(infix):
                token = Token(TokenKind.NEGATIVE, token.lexeme, token.line, token.column)
            elif token.kind is TokenKind.RETURN or not (is_operand(token.kind) or is_operator(token.kind)):
                raise ParseError(f"Unexpected {describe(token)} in expression at {token.line}:{token.column}")
            infix.append(token)
        if depth > 0:
            raise self.error("Expected ')' to close '('")
        if not infix:
            return None
        return self.build_tree(self.to_postfix(infix), operands)

    def to_postfix(self, infix: List[Token]) -> List[Token]:
        """Reorder an infix token sequence into postfix (shunting-yard)."""
        postfix: List[Token] = []
        stack: List[Token] = []
        after_operand = False
        for token in infix:
            kind = token.kind
            if is_operand(kind) or kind is TokenKind.FUNCTION:
                postfix.append(token)
                after_operand = True
            elif kind is TokenKind.LEFT_PARENTHESIS:
                stack.append(token)
                after_operand = False
            elif kind is TokenKind.RIGHT_PARENTHESIS:
                while stack and stack[-1].kind is not TokenKind.LEFT_PARENTHESIS:
                    postfix.append(stack.pop())
                if not stack:
                    raise ParseError(f"Unmatched ')' at {token.line}:{token.column}")
                stack.pop()
                after_operand = True
            elif kind in POSTFIX_CAPABLE and after_operand:
                # x++ applies to the operand already emitted
                postfix.append(token)
            elif is_unary(kind):
                # prefix operators are right-associative: push without popping
                stack.append(token)
                after_operand = False
            else:
                while (stack and stack[-1].kind is not TokenKind.LEFT_PARENTHESIS
                       and precedence(stack[-1].kind) <= precedence(kind)):
                    postfix.append(stack.pop())
                stack.append(token)
                after_operand = False
        while stack:
            token = stack.pop()
            if token.kind is TokenKind.LEFT_PARENTHESIS:
                raise ParseError(f"Expected ')' to close '(' at {token.line}:{token.column}")
            postfix.append(token)
        return postfix

    def build_tree(self, postfix: List[Token], operands: Deque[Node]) -> Optional[Node]:
        """Fold a postfix token sequence into an expression tree."""
        stack: List[Node] = []
        for token in postfix:
            kind = token.kind
            if kind in (TokenKind.IDENTIFIER, TokenKind.FUNCTION):
                stack.append(operands.popleft())
            elif is_operand(kind):
                stack.append(Terminal(literal_value(token)))
            elif is_unary(kind):
                if not stack:
                    raise ParseError(f"Missing operand for '{token.lexeme}' at {token.line}:{token.column}")
                stack.append(Unary(token, stack.pop()))
            else:
                if len(stack) < 2:
                    raise ParseError(f"Missing operand for '{token.lexeme}' at {token.line}:{token.column}")
                right = stack.pop()
                left = stack.pop()
                stack.append(Binary(token, left, right))
        if not stack:
            return None
        if len(stack) > 1:
            first = postfix[0]
            raise ParseError(f"Missing operator in expression at {first.line}:{first.column}")
        return stack[0]


def ends_operand(infix: List[Token]) -> bool:
    """True when the scanned tokens end with a complete operand."""
    end = len(infix)
    # `++`/`--` only close an operand when used as postfix operators
    while end and infix[end - 1].kind in POSTFIX_CAPABLE:
        end -= 1
    if end == 0:
        return False
    last = infix[end - 1].kind
    return is_operand(last) or last in (TokenKind.FUNCTION, TokenKind.RIGHT_PARENTHESIS)


def in_prefix_position(infix: List[Token]) -> bool:
    """True when the next token cannot continue an operand, so '-' is a negation."""
    return not ends_operand(infix)


def defines(initializer: Optional[Node], name: str) -> bool:
    """Check that a `var` initializer is `name` or `name = expr`."""
    if isinstance(initializer, Binary) and initializer.token.kind is TokenKind.ASSIGN:
        initializer = initializer.left
    return isinstance(initializer, Variable) and not initializer.is_definition and initializer.identifier == name


def parse(tokens: List[Token]) -> Block:
    return Parser(tokens).parse()


def parse_program(source: str) -> Block:
    """Tokenize and parse Scrawl source code into the program's root Block."""
    return parse(tokenize(source))


def draw_tree(root: Node) -> str:
    """Render a tree one node per line, children marked with branch glyphs."""
    lines = [root.label()]
    _draw_children(root, '', lines)
    return '\n'.join(lines)


def _draw_children(node: Node, padding: str, lines: List[str]) -> None:
    owned = children(node)
    for index, child in enumerate(owned):
        has_next = index + 1 < len(owned)
        pointer = '├── ' if has_next else '└── '
        lines.append(padding + pointer + child.label())
        _draw_children(child, padding + ('│   ' if has_next else '    '), lines)
