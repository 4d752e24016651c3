"""Abstract Syntax Tree (AST) definitions for the Scrawl language.

The tree is strict: every node is owned by exactly one parent and the
root of a program is a `Block`. `Variable` and `Function` nodes are
dual-purpose; `is_definition` tells a `var`/`function` definition apart
from a reference or a call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .tokens import Token
from .types import StringValue, Value


@dataclass
class Node:
    """Base class for all AST nodes."""

    def label(self) -> str:
        return type(self).__name__.lower()


@dataclass
class Block(Node):
    statements: List[Node] = field(default_factory=list)

    def label(self) -> str:
        return 'block'


@dataclass
class Variable(Node):
    identifier: str
    initializer: Optional[Node] = None  # definitions only
    is_definition: bool = False

    def label(self) -> str:
        return f"var {self.identifier}" if self.is_definition else self.identifier


@dataclass
class Function(Node):
    identifier: str
    parameters: List[Node] = field(default_factory=list)
    body: Optional[Block] = None  # definitions only
    is_definition: bool = False

    def label(self) -> str:
        if self.is_definition:
            return f"function {self.identifier}"
        return f"{self.identifier}()"


@dataclass
class Terminal(Node):
    value: Value

    def label(self) -> str:
        if isinstance(self.value, StringValue):
            return f'"{self.value.value}"'
        return self.value.to_string() or self.value.type_name


@dataclass
class Unary(Node):
    token: Token
    child: Node

    def label(self) -> str:
        return self.token.lexeme


@dataclass
class Binary(Node):
    token: Token
    left: Node
    right: Node

    def label(self) -> str:
        return self.token.lexeme


@dataclass
class If(Node):
    condition: Node
    true_body: Block
    false_body: Optional[Node] = None  # Block for `else`, If for `else if`


@dataclass
class While(Node):
    condition: Node
    body: Block


@dataclass
class For(Node):
    initialization: Optional[Node]
    condition: Optional[Node]
    update: Optional[Node]
    body: Block


def children(node: Node) -> List[Node]:
    """Return the owned children of a node in source order."""
    if isinstance(node, Block):
        return list(node.statements)
    if isinstance(node, Variable):
        return [node.initializer] if node.initializer is not None else []
    if isinstance(node, Function):
        owned = list(node.parameters)
        if node.body is not None:
            owned.append(node.body)
        return owned
    if isinstance(node, Terminal):
        return []
    if isinstance(node, Unary):
        return [node.child]
    if isinstance(node, Binary):
        return [node.left, node.right]
    if isinstance(node, If):
        owned = [node.condition, node.true_body]
        if node.false_body is not None:
            owned.append(node.false_body)
        return owned
    if isinstance(node, While):
        return [node.condition, node.body]
    if isinstance(node, For):
        return [n for n in (node.initialization, node.condition, node.update, node.body) if n is not None]
    raise NotImplementedError(f"children: unexpected node type {type(node)}")
