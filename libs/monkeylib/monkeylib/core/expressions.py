"""Expression AST nodes for Monkey."""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from monkeylib.parser.tokens import Token


class Node(ABC):
    """Base type for every AST node. All concrete subclasses are frozen dataclasses.

    Each node keeps the token it was built from.  That token takes no part in
    equality, so trees parsed from differently formatted text compare equal
    whenever their structure does.
    """

    token: Token

    def token_literal(self) -> str:
        """Return the literal text of the token this node was built from."""
        return self.token.literal


class ExprNode(Node):
    """Base type for expression nodes (value-producing constructs)."""


@dataclass(frozen=True)
class Identifier(ExprNode):
    """Identifier reference: ``x``, ``foobar``."""

    token: Token = field(compare=False, repr=False)
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(ExprNode):
    """Integer literal in the signed 64-bit range: ``5``, ``838383``."""

    token: Token = field(compare=False, repr=False)
    value: int

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class Boolean(ExprNode):
    """Boolean literal: ``true`` or ``false``."""

    token: Token = field(compare=False, repr=False)
    value: bool

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class PrefixExpression(ExprNode):
    """Unary operation: ``!right`` or ``-right``."""

    token: Token = field(compare=False, repr=False)
    operator: str
    right: ExprNode

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(ExprNode):
    """Binary operation: left op right. Op is one of + - * / < > == !=."""

    token: Token = field(compare=False, repr=False)
    left: ExprNode
    operator: str
    right: ExprNode

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class CallExpression(ExprNode):
    """Call: ``function(arg, arg, ...)``. The token is the opening ``(``."""

    token: Token = field(compare=False, repr=False)
    function: ExprNode
    arguments: tuple[ExprNode, ...] = ()

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"
