"""Interpreter for the Scrawl language.

The interpreter walks the AST produced by `scrawl.parser` using two
mutually recursive procedures:

* `visit(node)` executes a node for its effect (definitions, assignment,
  control flow);
* `evaluate(node)` computes the Value of an expression, a call, or a
  function body.

A function body yields the value of the first `return` statement found
among its own statements; statements before it run through `visit`.
A `return` nested inside an `if`, `while` or `for` does not leave the
function. Names are resolved through the scope stack in
`scrawl.environment`, which is searched from the innermost active frame
down to the global frame.
"""

from __future__ import annotations

import random
import sys
from typing import Dict, List, Optional

from .ast import Node, Block, Variable, Function, Terminal, Unary, Binary, If, While, For
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import ArityError, ScrawlRuntimeError, UndefinedError
from .lexer import tokenize
from .parser import draw_tree, parse, parse_program
from .std import populate_standard_builtins
from .tokens import TokenKind, is_assign
from .types import BoolValue, Value, VoidValue


RECURSION_LIMIT = 10000


def is_reference(node: Optional[Node]) -> bool:
    return isinstance(node, Variable) and not node.is_definition


class Interpreter:
    """Core interpreter that executes a Scrawl AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt', seed: Optional[int] = None):
        self.env = Environment()
        self.call_depth = 0
        self.builtins: Dict[str, BuiltinFunction] = populate_standard_builtins(random.Random(seed))
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str, level: int = 1):
        if self.debug_level >= level:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Block) -> None:
        # Each Scrawl call nests several Python frames.
        limit = sys.getrecursionlimit()
        sys.setrecursionlimit(max(limit, RECURSION_LIMIT))
        try:
            self.execute(program)
        except RecursionError:
            self.unwind()
            raise ScrawlRuntimeError("maximum recursion depth exceeded") from None
        finally:
            sys.setrecursionlimit(limit)
            self.close()

    def unwind(self) -> None:
        """Drop every call and loop frame, back to the global frame."""
        while self.env.depth:
            self.env.pop_frame()
        self.call_depth = 0

    def execute(self, program: Block) -> None:
        self.visit(program)

    def visit(self, node: Optional[Node]) -> None:
        if node is None:
            return
        if self.debug_level >= 3:
            self.debug(f"Visiting: {node.label()}", 3)
        if isinstance(node, Block):
            for statement in node.statements:
                self.visit(statement)
        elif isinstance(node, Variable):
            if node.is_definition:
                self.define_variable(node)
            else:
                self.evaluate(node)
        elif isinstance(node, Unary):
            self.visit_unary(node)
        elif isinstance(node, Binary):
            if is_assign(node.token.kind):
                self.assign(node)
            else:
                self.evaluate(node)
        elif isinstance(node, If):
            condition = self.evaluate(node.condition)
            if not isinstance(condition, BoolValue):
                raise ScrawlRuntimeError(
                    f"If condition must be a boolean expression, got '{condition.type_name}'")
            self.visit(node.true_body if condition.value else node.false_body)
        elif isinstance(node, While):
            self.env.push_frame()
            try:
                while self.test(node.condition):
                    self.visit(node.body)
            finally:
                self.env.pop_frame()
        elif isinstance(node, For):
            self.env.push_frame()
            try:
                self.visit(node.initialization)
                while self.test(node.condition):
                    self.visit(node.body)
                    self.visit(node.update)
            finally:
                self.env.pop_frame()
        elif isinstance(node, Function):
            if node.is_definition:
                self.env.declare_function(node)
                self.debug(f"define function {node.identifier}", 2)
            else:
                self.evaluate(node)
        elif isinstance(node, Terminal):
            pass
        else:
            raise NotImplementedError(f"visit: unexpected node type {type(node)}")

    def test(self, condition: Optional[Node]) -> bool:
        """Loop condition check; anything other than Bool true ends the loop."""
        if condition is None:
            return True
        value = self.evaluate(condition)
        return isinstance(value, BoolValue) and value.value

    def define_variable(self, node: Variable) -> None:
        initializer = node.initializer
        if isinstance(initializer, Binary) and initializer.token.kind is TokenKind.ASSIGN:
            value = self.evaluate(initializer.right)
        else:
            value = VoidValue()
        self.env.declare(node.identifier, value)
        if self.debug_level >= 2:
            self.debug(f"declare {node.identifier}: {value.type_name} = {value.to_string()!r}", 2)

    def visit_unary(self, node: Unary) -> None:
        kind = node.token.kind
        if kind is TokenKind.RETURN:
            # Only reached for returns nested below a function body's own statements,
            # which do not leave the function.
            if self.call_depth == 0:
                raise ScrawlRuntimeError("Return is not allowed here")
            return
        if kind in (TokenKind.INCREMENT, TokenKind.DECREMENT):
            if not is_reference(node.child):
                raise ScrawlRuntimeError(f"Expression is not assignable with '{node.token.lexeme}'")
            self.env.set(node.child.identifier, self.evaluate(node))
        else:
            self.evaluate(node)

    def assign(self, node: Binary) -> None:
        target = node.left
        if not is_reference(target):
            raise ScrawlRuntimeError(f"Left side of '{node.token.lexeme}' is not assignable")
        current = self.env.get(target.identifier)
        value = current.apply_operator(node.token.kind, self.evaluate(node.right))
        self.env.set(target.identifier, value)

    def evaluate(self, node: Node) -> Value:
        if self.debug_level >= 3:
            self.debug(f"Evaluating: {node.label()}", 3)
        if isinstance(node, Block):
            return self.evaluate_block(node)
        if is_reference(node):
            return self.env.get(node.identifier)
        if isinstance(node, Terminal):
            return node.value
        if isinstance(node, Unary):
            return self.evaluate(node.child).apply_operator(node.token.kind)
        if isinstance(node, Binary):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return left.apply_operator(node.token.kind, right)
        if isinstance(node, Function) and not node.is_definition:
            arguments = [self.evaluate(p) for p in node.parameters]
            return self.evaluate_function(node.identifier, arguments)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def evaluate_block(self, block: Block) -> Value:
        for statement in block.statements:
            if isinstance(statement, Unary) and statement.token.kind is TokenKind.RETURN:
                return self.evaluate(statement)
            self.visit(statement)
        return VoidValue()

    def evaluate_function(self, identifier: str, arguments: List[Value]) -> Value:
        builtin = self.builtins.get(identifier)
        if builtin is not None:
            if len(arguments) != builtin.arity:
                raise ArityError(identifier, builtin.arity, len(arguments))
            return builtin.fn(arguments)

        func = self.env.get_function(identifier)
        if func is None:
            raise UndefinedError('Function', identifier)
        if len(func.parameters) != len(arguments):
            raise ArityError(identifier, len(func.parameters), len(arguments))

        self.debug(f"call {identifier}({', '.join(a.to_string() for a in arguments)})", 2)
        self.env.push_frame()
        self.call_depth += 1
        try:
            for parameter, value in zip(func.parameters, arguments):
                self.env.declare(parameter.identifier, value)
            if self.debug_level >= 3:
                self.debug("Scope:\n" + self.env.dump(), 3)
            result = self.evaluate(func.body)
        finally:
            self.call_depth -= 1
            self.env.pop_frame()
        self.debug(f"return {identifier}: {result.type_name} = {result.to_string()!r}", 2)
        return result


def run_program(source: str, debug_level: int = 0, seed: Optional[int] = None) -> Interpreter:
    """Convenience function to tokenize, parse and run a Scrawl program from source."""
    tokens = tokenize(source)
    program = parse(tokens)
    interpreter = Interpreter(debug_level=debug_level, seed=seed)
    if interpreter.debug_level >= 1:
        interpreter.debug("Tokens: " + ' '.join(t.lexeme for t in tokens))
        interpreter.debug("AST:\n" + draw_tree(program))
    interpreter.run(program)
    return interpreter


def compile_module(file_path: str, debug_level: int = 0) -> Interpreter:
    """Compile and execute a Scrawl file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, debug_level=debug_level)


__all__ = ['Interpreter', 'run_program', 'compile_module', 'parse_program']
