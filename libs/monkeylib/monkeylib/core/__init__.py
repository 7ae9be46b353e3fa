"""Monkey core subpackage (Layer 1, expression nodes shared by the parser and its consumers)."""

from monkeylib.core.expressions import (
    Boolean,
    CallExpression,
    ExprNode,
    Identifier,
    InfixExpression,
    IntegerLiteral,
    Node,
    PrefixExpression,
)

__all__ = [
    "Node",
    "ExprNode",
    "Identifier",
    "IntegerLiteral",
    "Boolean",
    "PrefixExpression",
    "InfixExpression",
    "CallExpression",
]
