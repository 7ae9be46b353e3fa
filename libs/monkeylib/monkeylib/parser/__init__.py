"""Monkey parser subpackage (Layer 2 -- depends on core, diagnostics)."""

from monkeylib.parser.ast_nodes import (
    ExpressionStatement,
    LetStatement,
    Program,
    ReturnStatement,
    StmtNode,
)
from monkeylib.parser.errors import ParseError
from monkeylib.parser.lexer import Lexer
from monkeylib.parser.parser import Parser, Precedence, parse
from monkeylib.parser.tokens import KEYWORDS, Token, TokenKind

__all__ = [
    "TokenKind",
    "Token",
    "KEYWORDS",
    "Lexer",
    "Program",
    "LetStatement",
    "ReturnStatement",
    "ExpressionStatement",
    "StmtNode",
    "Parser",
    "Precedence",
    "parse",
    "ParseError",
]
