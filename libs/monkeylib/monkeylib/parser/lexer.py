"""Lexer (tokenizer) for Monkey source code."""

from __future__ import annotations

import string
from collections.abc import Iterator

from monkeylib.diagnostics.location import SourceLocation
from monkeylib.parser.tokens import Token, TokenKind, lookup_ident

# ASCII only; other Unicode letters and digits lex as ILLEGAL.
_LETTERS = frozenset(string.ascii_letters + "_")
_DIGITS = frozenset(string.digits)


class Lexer:
    """Turn Monkey source into a lazy, forward-only token stream.

    Tokens are produced one at a time by :meth:`next_token`.  Whitespace is
    skipped and never emitted.  Characters the language does not know become
    ``ILLEGAL`` tokens rather than errors; it is up to the parser to reject
    them.  Once the end of input is reached every further call returns an
    ``EOF`` token with an empty literal.  The stream can only be restarted
    from the beginning, via :meth:`reset`.
    """

    # Single-character tokens that need no lookahead.
    _SINGLE_CHAR: dict[str, TokenKind] = {
        "=": TokenKind.ASSIGN,
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "!": TokenKind.BANG,
        "*": TokenKind.ASTERISK,
        "/": TokenKind.SLASH,
        "<": TokenKind.LT,
        ">": TokenKind.GT,
        ",": TokenKind.COMMA,
        ";": TokenKind.SEMICOLON,
        "(": TokenKind.LPAREN,
        ")": TokenKind.RPAREN,
        "{": TokenKind.LBRACE,
        "}": TokenKind.RBRACE,
    }

    # Two-character operators, keyed by their first character.
    _TWO_CHAR: dict[str, tuple[str, TokenKind]] = {
        "=": ("==", TokenKind.EQ),
        "!": ("!=", TokenKind.NOT_EQ),
    }

    _WHITESPACE = frozenset(" \t\n\r")

    def __init__(self, source: str, filename: str = "<string>") -> None:
        self._source = source
        self._filename = filename
        self.reset()

    # ------------------------------------------------------------------
    # Helper methods
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Rewind to the beginning of the source."""
        self._pos = 0
        self._line = 1
        self._col = 1

    def _peek(self, offset: int = 0) -> str:
        """Return character at current position + offset, or '' at EOF."""
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        """Consume and return the current character, updating line/col."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _loc(self) -> SourceLocation:
        return SourceLocation(
            file=self._filename, line=self._line, column=self._col, offset=self._pos
        )

    # ------------------------------------------------------------------
    # Scanning helpers
    # ------------------------------------------------------------------

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self._peek() in self._WHITESPACE:
            self._advance()

    @staticmethod
    def _is_letter(ch: str) -> bool:
        return ch in _LETTERS

    def _read_identifier(self) -> str:
        """Read a maximal run of letters, underscores and (trailing) digits."""
        begin = self._pos
        while not self._at_end() and (self._is_letter(self._peek()) or self._peek() in _DIGITS):
            self._advance()
        return self._source[begin : self._pos]

    def _read_number(self) -> str:
        """Read a maximal run of decimal digits."""
        begin = self._pos
        while not self._at_end() and self._peek() in _DIGITS:
            self._advance()
        return self._source[begin : self._pos]

    # ------------------------------------------------------------------
    # Main entry points
    # ------------------------------------------------------------------

    def next_token(self) -> Token:
        """Scan and return the next token."""
        self._skip_whitespace()
        loc = self._loc()

        if self._at_end():
            return Token(TokenKind.EOF, "", loc)

        ch = self._peek()

        # --- ``==`` and ``!=`` before their single-character prefixes ---
        two_char = self._TWO_CHAR.get(ch)
        if two_char is not None and self._peek(1) == two_char[0][1]:
            self._advance()
            self._advance()
            return Token(two_char[1], two_char[0], loc)

        if ch in self._SINGLE_CHAR:
            self._advance()
            return Token(self._SINGLE_CHAR[ch], ch, loc)

        # --- Identifier / keyword ---
        if self._is_letter(ch):
            ident = self._read_identifier()
            return Token(lookup_ident(ident), ident, loc)

        # --- Integer literal ---
        if ch in _DIGITS:
            return Token(TokenKind.INT, self._read_number(), loc)

        # --- Unknown character ---
        self._advance()
        return Token(TokenKind.ILLEGAL, ch, loc)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the first ``EOF``."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind == TokenKind.EOF:
                return

    def tokenize(self) -> list[Token]:
        """Tokenize the rest of the source. Returns list ending with an EOF token."""
        return list(self)
