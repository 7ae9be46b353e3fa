"""Pratt (top-down operator precedence) parser for Monkey source code.

Handles:
- ``let NAME = expr;``  bindings
- ``return expr;`` and bare ``return;``
- expression statements, with an optional trailing ``;``
- identifiers, integer and boolean literals
- prefix ``!`` and ``-``
- infix ``+ - * / < > == !=`` (left-associative)
- grouping ``( expr )`` and calls ``f(a, b)``

Errors never abort the parse.  Each one is recorded in the
``DiagnosticCollector``; the statement being parsed is dropped and the parser
skips ahead to the next ``;`` or ``let``/``return`` keyword.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

from monkeylib.diagnostics.collector import DiagnosticCollector
from monkeylib.parser.ast_nodes import (
    Boolean,
    CallExpression,
    ExpressionStatement,
    ExprNode,
    Identifier,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    StmtNode,
)
from monkeylib.parser.errors import ParseError
from monkeylib.parser.lexer import Lexer
from monkeylib.parser.tokens import Token, TokenKind

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class Precedence(IntEnum):
    """Binding power of operators, lowest to highest."""

    LOWEST = 1
    EQUALS = 2  # ==, !=
    LESSGREATER = 3  # <, >
    SUM = 4  # +, -
    PRODUCT = 5  # *, /
    PREFIX = 6  # -x, !x
    CALL = 7  # f(x)


PRECEDENCES: dict[TokenKind, Precedence] = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
}

# Tokens at which error recovery may restart statement parsing.
_STATEMENT_STARTS: frozenset[TokenKind] = frozenset({TokenKind.LET, TokenKind.RETURN})

PrefixParseFn = Callable[[], "ExprNode | None"]
InfixParseFn = Callable[[ExprNode], "ExprNode | None"]


class Parser:
    """Pratt parser for Monkey programs.

    The parser pulls tokens from a :class:`Lexer` one at a time and keeps
    two of them in view: the current token and a one-token peek buffer.
    """

    def __init__(
        self,
        lexer: Lexer,
        diagnostics: DiagnosticCollector | None = None,
    ) -> None:
        if lexer is None:
            raise TypeError("Parser requires a Lexer")
        self._lexer = lexer
        self._diag = diagnostics if diagnostics is not None else DiagnosticCollector()

        self._prefix_parse_fns: dict[TokenKind, PrefixParseFn] = {
            TokenKind.IDENT: self._parse_identifier,
            TokenKind.INT: self._parse_integer_literal,
            TokenKind.TRUE: self._parse_boolean,
            TokenKind.FALSE: self._parse_boolean,
            TokenKind.BANG: self._parse_prefix_expression,
            TokenKind.MINUS: self._parse_prefix_expression,
            TokenKind.LPAREN: self._parse_grouped_expression,
        }
        self._infix_parse_fns: dict[TokenKind, InfixParseFn] = {
            TokenKind.PLUS: self._parse_infix_expression,
            TokenKind.MINUS: self._parse_infix_expression,
            TokenKind.ASTERISK: self._parse_infix_expression,
            TokenKind.SLASH: self._parse_infix_expression,
            TokenKind.EQ: self._parse_infix_expression,
            TokenKind.NOT_EQ: self._parse_infix_expression,
            TokenKind.LT: self._parse_infix_expression,
            TokenKind.GT: self._parse_infix_expression,
            TokenKind.LPAREN: self._parse_call_expression,
        }

        # Read two tokens so that both current and peek are set.
        self._cur: Token = self._lexer.next_token()
        self._peek: Token = self._lexer.next_token()

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    @property
    def errors(self) -> list[str]:
        """Messages of every error recorded so far, in order."""
        return self._diag.messages()

    @property
    def diagnostics(self) -> DiagnosticCollector:
        return self._diag

    def _peek_error(self, kind: TokenKind) -> None:
        self._diag.error(
            f"expected next token to be {kind}, got {self._peek.kind} instead",
            self._peek.location,
        )

    def _no_prefix_parse_fn_error(self, tok: Token) -> None:
        self._diag.error(f"no prefix parse function for {tok.kind} found", tok.location)

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------

    def _next_token(self) -> None:
        """Shift peek into current and draw a new peek token."""
        self._cur = self._peek
        self._peek = self._lexer.next_token()

    def _cur_is(self, kind: TokenKind) -> bool:
        return self._cur.kind == kind

    def _peek_is(self, kind: TokenKind) -> bool:
        return self._peek.kind == kind

    def _expect_peek(self, kind: TokenKind) -> bool:
        """Advance if the peek token is *kind*, otherwise record an error."""
        if self._peek_is(kind):
            self._next_token()
            return True
        self._peek_error(kind)
        return False

    def _require_peek(self, kind: TokenKind) -> None:
        """Like :meth:`_expect_peek`, but abandon the statement on mismatch."""
        if not self._expect_peek(kind):
            raise ParseError(f"expected {kind}", self._peek.location)

    def _peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self._peek.kind, Precedence.LOWEST)

    def _cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self._cur.kind, Precedence.LOWEST)

    def _synchronize(self, start: Token) -> None:
        """Skip past the rest of a failed statement.

        Stops just after the next ``;``, on the next ``let``/``return`` keyword
        other than *start* (the token the failed statement began with), or at
        ``EOF``.
        """
        if self._cur is start and not self._cur_is(TokenKind.EOF):
            self._next_token()
        while not self._cur_is(TokenKind.EOF):
            if self._cur_is(TokenKind.SEMICOLON):
                self._next_token()
                return
            if self._cur.kind in _STATEMENT_STARTS:
                return
            self._next_token()

    # ------------------------------------------------------------------
    # Top-level program parsing
    # ------------------------------------------------------------------

    def parse_program(self) -> Program:
        """Parse statements until ``EOF``. Never raises; check :attr:`errors`."""
        stmts: list[StmtNode] = []
        while not self._cur_is(TokenKind.EOF):
            start = self._cur
            try:
                stmts.append(self._parse_statement())
            except ParseError:
                self._synchronize(start)
                continue
            self._next_token()
        return Program(statements=tuple(stmts))

    def _parse_statement(self) -> StmtNode:
        if self._cur_is(TokenKind.LET):
            return self._parse_let_statement()
        if self._cur_is(TokenKind.RETURN):
            return self._parse_return_statement()
        return self._parse_expression_statement()

    def _require_expression(self, precedence: Precedence) -> ExprNode:
        """Parse an expression or abandon the statement if it failed."""
        start = self._cur
        expr = self.parse_expression(precedence)
        if expr is None:
            raise ParseError("incomplete expression", start.location)
        return expr

    def _skip_optional_semicolon(self) -> None:
        if self._peek_is(TokenKind.SEMICOLON):
            self._next_token()

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _parse_let_statement(self) -> LetStatement:
        """Parse ``let NAME = expr [;]``."""
        let_tok = self._cur
        self._require_peek(TokenKind.IDENT)
        name = Identifier(token=self._cur, value=self._cur.literal)
        self._require_peek(TokenKind.ASSIGN)
        self._next_token()
        value = self._require_expression(Precedence.LOWEST)
        self._skip_optional_semicolon()
        return LetStatement(token=let_tok, name=name, value=value)

    def _parse_return_statement(self) -> ReturnStatement:
        """Parse ``return [expr] [;]``."""
        ret_tok = self._cur
        if self._peek_is(TokenKind.SEMICOLON) or self._peek_is(TokenKind.EOF):
            self._skip_optional_semicolon()
            return ReturnStatement(token=ret_tok)
        self._next_token()
        value = self._require_expression(Precedence.LOWEST)
        self._skip_optional_semicolon()
        return ReturnStatement(token=ret_tok, return_value=value)

    def _parse_expression_statement(self) -> ExpressionStatement:
        tok = self._cur
        expr = self._require_expression(Precedence.LOWEST)
        self._skip_optional_semicolon()
        return ExpressionStatement(token=tok, expression=expr)

    # ------------------------------------------------------------------
    # Expression parsing (precedence climbing)
    # ------------------------------------------------------------------

    def parse_expression(self, precedence: Precedence = Precedence.LOWEST) -> ExprNode | None:
        """Parse an expression starting at the current token.

        On return the current token is the last token of the expression.
        Returns ``None`` (after recording an error) if no expression could be
        built.
        """
        prefix = self._prefix_parse_fns.get(self._cur.kind)
        if prefix is None:
            self._no_prefix_parse_fn_error(self._cur)
            return None
        left = prefix()

        while (
            left is not None
            and not self._peek_is(TokenKind.SEMICOLON)
            and precedence < self._peek_precedence()
        ):
            infix = self._infix_parse_fns.get(self._peek.kind)
            if infix is None:
                return left
            self._next_token()
            left = infix(left)

        return left

    def _parse_identifier(self) -> ExprNode:
        return Identifier(token=self._cur, value=self._cur.literal)

    def _parse_integer_literal(self) -> ExprNode | None:
        tok = self._cur
        try:
            value = int(tok.literal, 10)
        except ValueError:
            value = None
        if value is None or not _INT64_MIN <= value <= _INT64_MAX:
            self._diag.error(f"could not parse {tok.literal!r} as integer", tok.location)
            return None
        return IntegerLiteral(token=tok, value=value)

    def _parse_boolean(self) -> ExprNode:
        return Boolean(token=self._cur, value=self._cur_is(TokenKind.TRUE))

    def _parse_prefix_expression(self) -> ExprNode | None:
        tok = self._cur
        self._next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(token=tok, operator=tok.literal, right=right)

    def _parse_infix_expression(self, left: ExprNode) -> ExprNode | None:
        tok = self._cur
        precedence = self._cur_precedence()
        self._next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(token=tok, left=left, operator=tok.literal, right=right)

    def _parse_grouped_expression(self) -> ExprNode | None:
        """Parse ``( expr )``. Grouping produces no node of its own."""
        self._next_token()
        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None or not self._expect_peek(TokenKind.RPAREN):
            return None
        return expr

    def _parse_call_expression(self, function: ExprNode) -> ExprNode | None:
        tok = self._cur
        arguments = self._parse_call_arguments()
        if arguments is None:
            return None
        return CallExpression(token=tok, function=function, arguments=arguments)

    def _parse_call_arguments(self) -> tuple[ExprNode, ...] | None:
        """Parse ``arg, arg, ...)`` with the current token on the ``(``."""
        args: list[ExprNode] = []
        if self._peek_is(TokenKind.RPAREN):
            self._next_token()
            return ()

        self._next_token()
        arg = self.parse_expression(Precedence.LOWEST)
        if arg is None:
            return None
        args.append(arg)

        while self._peek_is(TokenKind.COMMA):
            self._next_token()
            self._next_token()
            arg = self.parse_expression(Precedence.LOWEST)
            if arg is None:
                return None
            args.append(arg)

        if not self._expect_peek(TokenKind.RPAREN):
            return None
        return tuple(args)


# ------------------------------------------------------------------
# Convenience function
# ------------------------------------------------------------------


def parse(source: str, filename: str = "<string>") -> tuple[Program, DiagnosticCollector]:
    """Parse Monkey source code.

    Returns:
        A ``(program_ast, diagnostics)`` tuple.
    """
    diag = DiagnosticCollector()
    lexer = Lexer(source, filename)
    parser = Parser(lexer, diag)
    program = parser.parse_program()
    return program, diag
