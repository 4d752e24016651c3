"""JSON serialization/deserialization for the Scrawl AST.

This module converts between Scrawl AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. It supports a full
round-trip for all node types, runtime values and tokens.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import Block, Variable, Function, Terminal, Unary, Binary, If, While, For
from .tokens import Token, TokenKind
from .types import BoolValue, FloatValue, IntValue, StringValue, Value, VoidValue


VALUE_TYPES = {cls.type_name: cls for cls in (IntValue, FloatValue, StringValue, BoolValue)}


def value_to_obj(v: Value) -> Dict[str, Any]:
    if isinstance(v, VoidValue):
        return {"__type__": "Value", "kind": v.type_name}
    return {"__type__": "Value", "kind": v.type_name, "value": v.value}


def value_from_obj(o: Dict[str, Any]) -> Value:
    kind = o["kind"]
    if kind == VoidValue.type_name:
        return VoidValue()
    if kind not in VALUE_TYPES:
        raise ValueError(f"Unknown value kind: {kind}")
    cls = VALUE_TYPES[kind]
    if cls is FloatValue:
        return FloatValue(float(o["value"]))
    return cls(o["value"])


def token_to_obj(t: Token) -> Dict[str, Any]:
    return {"kind": t.kind.name, "lexeme": t.lexeme}


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenKind[o["kind"]], o["lexeme"])


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, Value):
        return value_to_obj(node)

    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Variable):
        return {
            "type": "Variable",
            "identifier": node.identifier,
            "initializer": ast_to_obj(node.initializer),
            "is_definition": node.is_definition,
        }
    if isinstance(node, Function):
        return {
            "type": "Function",
            "identifier": node.identifier,
            "parameters": [ast_to_obj(p) for p in node.parameters],
            "body": ast_to_obj(node.body),
            "is_definition": node.is_definition,
        }
    if isinstance(node, Terminal):
        return {"type": "Terminal", "value": ast_to_obj(node.value)}
    if isinstance(node, Unary):
        return {"type": "Unary", "token": token_to_obj(node.token), "child": ast_to_obj(node.child)}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "token": token_to_obj(node.token),
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "true_body": ast_to_obj(node.true_body),
            "false_body": ast_to_obj(node.false_body),
        }
    if isinstance(node, While):
        return {"type": "While", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, For):
        return {
            "type": "For",
            "initialization": ast_to_obj(node.initialization),
            "condition": ast_to_obj(node.condition),
            "update": ast_to_obj(node.update),
            "body": ast_to_obj(node.body),
        }

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    if obj.get("__type__") == "Value":
        return value_from_obj(obj)
    t = obj.get("type")
    if t == "Block":
        return Block(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "Variable":
        return Variable(
            identifier=obj["identifier"],
            initializer=ast_from_obj(obj.get("initializer")),
            is_definition=bool(obj.get("is_definition", False)),
        )
    if t == "Function":
        return Function(
            identifier=obj["identifier"],
            parameters=[ast_from_obj(p) for p in obj["parameters"]],
            body=ast_from_obj(obj.get("body")),
            is_definition=bool(obj.get("is_definition", False)),
        )
    if t == "Terminal":
        return Terminal(value=ast_from_obj(obj["value"]))
    if t == "Unary":
        return Unary(token=token_from_obj(obj["token"]), child=ast_from_obj(obj["child"]))
    if t == "Binary":
        return Binary(
            token=token_from_obj(obj["token"]),
            left=ast_from_obj(obj["left"]),
            right=ast_from_obj(obj["right"]),
        )
    if t == "If":
        return If(
            condition=ast_from_obj(obj["condition"]),
            true_body=ast_from_obj(obj["true_body"]),
            false_body=ast_from_obj(obj.get("false_body")),
        )
    if t == "While":
        return While(condition=ast_from_obj(obj["condition"]), body=ast_from_obj(obj["body"]))
    if t == "For":
        return For(
            initialization=ast_from_obj(obj.get("initialization")),
            condition=ast_from_obj(obj.get("condition")),
            update=ast_from_obj(obj.get("update")),
            body=ast_from_obj(obj["body"]),
        )

    raise ValueError(f"Unknown AST node type: {t}")
