"""AST node types for the Monkey parser.

Expression nodes are defined in ``monkeylib.core.expressions`` and re-exported
here for convenience.  This module adds statement- and program-level nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

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
from monkeylib.parser.tokens import Token

# Re-export expression nodes so consumers can import everything from
# ``monkeylib.parser.ast_nodes``.
__all__ = [
    # Expression nodes (re-exported from core)
    "Node",
    "ExprNode",
    "Identifier",
    "IntegerLiteral",
    "Boolean",
    "PrefixExpression",
    "InfixExpression",
    "CallExpression",
    # Statement nodes
    "LetStatement",
    "ReturnStatement",
    "ExpressionStatement",
    # Statement union
    "StmtNode",
    # Program node
    "Program",
]


# ---------------------------------------------------------------------------
# Statement nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LetStatement(Node):
    """``let NAME = expr;`` binding."""

    token: Token = field(compare=False, repr=False)
    name: Identifier
    value: ExprNode

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Node):
    """``return expr;`` or a bare ``return;``."""

    token: Token = field(compare=False, repr=False)
    return_value: ExprNode | None = None

    def __str__(self) -> str:
        if self.return_value is None:
            return f"{self.token_literal()};"
        return f"{self.token_literal()} {self.return_value};"


@dataclass(frozen=True)
class ExpressionStatement(Node):
    """A statement consisting of a single expression (``x + 10;``).

    The token is the first token of the expression.
    """

    token: Token = field(compare=False, repr=False)
    expression: ExprNode

    def __str__(self) -> str:
        return str(self.expression)


# Union of all statement types the parser can produce.
StmtNode = Union[LetStatement, ReturnStatement, ExpressionStatement]


# ---------------------------------------------------------------------------
# Program node
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Program:
    """Top-level program: the ordered statements of a source text."""

    statements: tuple[StmtNode, ...] = ()

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)
