from typing import Optional


class ScrawlError(Exception):
    """Base class for every error raised while lexing, parsing or running Scrawl."""
    category = 'Scrawl'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LexerError(ScrawlError):
    category = 'Lexer'


class ParseError(ScrawlError):
    """Syntax error: a required token is missing or an expression is malformed."""
    category = 'Syntax'


class ScrawlRuntimeError(ScrawlError):
    """Error raised while executing a program."""
    category = 'Runtime'


class UndefinedError(ScrawlRuntimeError):
    def __init__(self, kind: str, name: str):
        super().__init__(f"{kind} {name} is not defined in this scope")
        self.kind = kind
        self.name = name


class ArityError(ScrawlRuntimeError):
    def __init__(self, name: str, expected: int, actual: int):
        amount = 'few' if actual < expected else 'many'
        super().__init__(f"Too {amount} arguments to function '{name}'. Expected: {expected}, Actual: {actual}")
        self.name = name
        self.expected = expected
        self.actual = actual


class OperandTypeError(ScrawlRuntimeError):
    """An operator was applied to operand types it does not support."""
    def __init__(self, symbol: str, left_type: str, right_type: Optional[str] = None,
                 message: Optional[str] = None):
        if message is None:
            if right_type is None:
                message = f"invalid operand for expression: {symbol}'{left_type}'"
            else:
                message = f"invalid operands for expression: '{left_type}' {symbol} '{right_type}'"
        super().__init__(message)
        self.symbol = symbol
        self.left_type = left_type
        self.right_type = right_type
