"""Token definitions for the Monkey lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from monkeylib.diagnostics.location import SourceLocation


class TokenKind(Enum):
    """All token types recognized by the Monkey lexer."""

    # === Special ===
    ILLEGAL = auto()  # any character the lexer does not recognize
    EOF = auto()  # end of input, literal is ""

    # === Identifiers and literals ===
    IDENT = auto()
    INT = auto()

    # === Operators ===
    ASSIGN = auto()  # =
    PLUS = auto()  # +
    MINUS = auto()  # -
    BANG = auto()  # !
    ASTERISK = auto()  # *
    SLASH = auto()  # /
    LT = auto()  # <
    GT = auto()  # >
    EQ = auto()  # ==
    NOT_EQ = auto()  # !=

    # === Delimiters ===
    COMMA = auto()  # ,
    SEMICOLON = auto()  # ;
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACE = auto()  # {
    RBRACE = auto()  # }

    # === Keywords ===
    LET = auto()
    RETURN = auto()
    TRUE = auto()
    FALSE = auto()

    def __str__(self) -> str:
        return self.name


# Keyword string -> TokenKind mapping.
# Identifiers are checked against this table during lexing.
KEYWORDS: dict[str, TokenKind] = {
    "let": TokenKind.LET,
    "return": TokenKind.RETURN,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
}


def lookup_ident(ident: str) -> TokenKind:
    """Return the keyword kind for *ident*, or ``IDENT`` if it is not reserved."""
    return KEYWORDS.get(ident, TokenKind.IDENT)


@dataclass(frozen=True)
class Token:
    """A single token produced by the Monkey lexer."""

    kind: TokenKind
    literal: str
    location: SourceLocation | None = None

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.literal!r})"
