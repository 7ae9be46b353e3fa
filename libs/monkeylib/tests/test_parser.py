"""Tests for the Monkey parser."""

from __future__ import annotations

import pytest

from monkeylib.core.expressions import (
    Boolean,
    CallExpression,
    ExprNode,
    Identifier,
    InfixExpression,
    IntegerLiteral,
    PrefixExpression,
)
from monkeylib.diagnostics.collector import DiagnosticCollector
from monkeylib.parser.ast_nodes import (
    ExpressionStatement,
    LetStatement,
    Program,
    ReturnStatement,
)
from monkeylib.parser.lexer import Lexer
from monkeylib.parser.parser import Parser, Precedence, parse

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def parse_ok(source: str) -> Program:
    """Parse *source* and assert no errors."""
    ast, diag = parse(source, "<test>")
    assert not diag.has_errors(), diag.format_all()
    return ast


def parse_errors(source: str) -> tuple[Program, list[str]]:
    """Parse *source* and return the program with the error messages."""
    parser = Parser(Lexer(source, "<test>"))
    program = parser.parse_program()
    return program, parser.errors


def parse_expr(source: str) -> ExprNode:
    """Parse a single expression statement and return its expression."""
    ast = parse_ok(source)
    assert len(ast.statements) == 1
    stmt = ast.statements[0]
    assert isinstance(stmt, ExpressionStatement)
    return stmt.expression


def check_literal(expr: ExprNode, expected: object) -> None:
    """Assert *expr* is the literal or identifier for *expected*."""
    if isinstance(expected, bool):
        assert isinstance(expr, Boolean)
        assert expr.value is expected
        assert expr.token_literal() == str(expected).lower()
    elif isinstance(expected, int):
        assert isinstance(expr, IntegerLiteral)
        assert expr.value == expected
        assert expr.token_literal() == str(expected)
    elif isinstance(expected, str):
        assert isinstance(expr, Identifier)
        assert expr.value == expected
        assert expr.token_literal() == expected
    else:
        raise TypeError(f"unhandled expected value {expected!r}")


def check_infix(expr: ExprNode, left: object, operator: str, right: object) -> None:
    assert isinstance(expr, InfixExpression), f"{type(expr).__name__}({expr})"
    check_literal(expr.left, left)
    assert expr.operator == operator
    check_literal(expr.right, right)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_requires_lexer(self) -> None:
        with pytest.raises(TypeError):
            Parser(None)  # type: ignore[arg-type]

    def test_primes_two_tokens(self) -> None:
        class CountingLexer(Lexer):
            calls = 0

            def next_token(self):
                CountingLexer.calls += 1
                return super().next_token()

        Parser(CountingLexer("let x = 5;"))
        assert CountingLexer.calls == 2

    def test_shared_diagnostics(self) -> None:
        diag = DiagnosticCollector()
        parser = Parser(Lexer("let = 1;"), diag)
        parser.parse_program()
        assert parser.diagnostics is diag
        assert diag.has_errors()

    def test_empty_program(self) -> None:
        ast = parse_ok("")
        assert ast.statements == ()
        assert ast.token_literal() == ""
        assert str(ast) == ""


# ---------------------------------------------------------------------------
# Let statements
# ---------------------------------------------------------------------------


class TestLetStatements:
    def test_three_bindings(self) -> None:
        ast = parse_ok("let x = 5;\nlet y = 10;\nlet foobar = 838383;\n")
        assert len(ast.statements) == 3
        for stmt, name in zip(ast.statements, ["x", "y", "foobar"]):
            assert stmt.token_literal() == "let"
            assert isinstance(stmt, LetStatement)
            assert stmt.name.value == name
            assert stmt.name.token_literal() == name

    @pytest.mark.parametrize(
        "source,name,value",
        [
            ("let x = 5;", "x", 5),
            ("let y = true;", "y", True),
            ("let foobar = y;", "foobar", "y"),
        ],
    )
    def test_initializer(self, source: str, name: str, value: object) -> None:
        stmt = parse_ok(source).statements[0]
        assert isinstance(stmt, LetStatement)
        assert stmt.name.value == name
        check_literal(stmt.value, value)

    def test_semicolon_optional(self) -> None:
        ast = parse_ok("let x = 1 + 2")
        stmt = ast.statements[0]
        assert isinstance(stmt, LetStatement)
        check_infix(stmt.value, 1, "+", 2)


# ---------------------------------------------------------------------------
# Return statements
# ---------------------------------------------------------------------------


class TestReturnStatements:
    def test_three_returns(self) -> None:
        ast = parse_ok("return 5;\nreturn 10;\nreturn add(15);\n")
        assert len(ast.statements) == 3
        for stmt in ast.statements:
            assert isinstance(stmt, ReturnStatement)
            assert stmt.token_literal() == "return"

    def test_return_value(self) -> None:
        stmt = parse_ok("return x;").statements[0]
        assert isinstance(stmt, ReturnStatement)
        check_literal(stmt.return_value, "x")

    def test_return_call(self) -> None:
        stmt = parse_ok("return add(15);").statements[0]
        assert isinstance(stmt.return_value, CallExpression)
        check_literal(stmt.return_value.function, "add")
        assert len(stmt.return_value.arguments) == 1
        check_literal(stmt.return_value.arguments[0], 15)

    @pytest.mark.parametrize("source", ["return;", "return"])
    def test_bare_return(self, source: str) -> None:
        ast = parse_ok(source)
        assert len(ast.statements) == 1
        stmt = ast.statements[0]
        assert isinstance(stmt, ReturnStatement)
        assert stmt.return_value is None
        assert str(stmt) == "return;"


# ---------------------------------------------------------------------------
# Expression statements -- literals and prefix
# ---------------------------------------------------------------------------


class TestExprLiterals:
    def test_identifier(self) -> None:
        check_literal(parse_expr("foobar;"), "foobar")

    def test_integer(self) -> None:
        check_literal(parse_expr("5;"), 5)

    def test_int64_max(self) -> None:
        check_literal(parse_expr("9223372036854775807"), 2**63 - 1)

    @pytest.mark.parametrize("source,value", [("true;", True), ("false;", False)])
    def test_boolean(self, source: str, value: bool) -> None:
        expr = parse_expr(source)
        check_literal(expr, value)

    def test_statement_token_is_first_expression_token(self) -> None:
        stmt = parse_ok("true").statements[0]
        assert stmt.token_literal() == "true"


class TestPrefixExpressions:
    @pytest.mark.parametrize(
        "source,operator,value",
        [
            ("!5", "!", 5),
            ("-15", "-", 15),
            ("!true;", "!", True),
            ("!false;", "!", False),
            ("-a", "-", "a"),
        ],
    )
    def test_prefix(self, source: str, operator: str, value: object) -> None:
        expr = parse_expr(source)
        assert isinstance(expr, PrefixExpression)
        assert expr.operator == operator
        check_literal(expr.right, value)


# ---------------------------------------------------------------------------
# Infix expressions
# ---------------------------------------------------------------------------


class TestInfixExpressions:
    @pytest.mark.parametrize(
        "source,left,operator,right",
        [
            ("5 + 5;", 5, "+", 5),
            ("5 - 5;", 5, "-", 5),
            ("5 * 5;", 5, "*", 5),
            ("5 / 5;", 5, "/", 5),
            ("5 > 5;", 5, ">", 5),
            ("5 < 5;", 5, "<", 5),
            ("5 == 5;", 5, "==", 5),
            ("5 != 5;", 5, "!=", 5),
            ("true == true", True, "==", True),
            ("true != false", True, "!=", False),
            ("false == false", False, "==", False),
            ("alice * bob", "alice", "*", "bob"),
        ],
    )
    def test_infix(self, source: str, left: object, operator: str, right: object) -> None:
        check_infix(parse_expr(source), left, operator, right)

    def test_left_associative(self) -> None:
        expr = parse_expr("a - b - c")
        assert isinstance(expr, InfixExpression)
        check_infix(expr.left, "a", "-", "b")
        check_literal(expr.right, "c")

    def test_product_binds_tighter(self) -> None:
        expr = parse_expr("a + b * c")
        assert isinstance(expr, InfixExpression)
        check_literal(expr.left, "a")
        check_infix(expr.right, "b", "*", "c")


class TestGroupingAndCalls:
    def test_grouping_overrides_precedence(self) -> None:
        expr = parse_expr("(a + b) * c")
        assert isinstance(expr, InfixExpression)
        check_infix(expr.left, "a", "+", "b")
        check_literal(expr.right, "c")

    def test_call_arguments(self) -> None:
        expr = parse_expr("add(1, 2 * 3, 4 + 5);")
        assert isinstance(expr, CallExpression)
        check_literal(expr.function, "add")
        assert len(expr.arguments) == 3
        check_literal(expr.arguments[0], 1)
        check_infix(expr.arguments[1], 2, "*", 3)
        check_infix(expr.arguments[2], 4, "+", 5)

    def test_call_without_arguments(self) -> None:
        expr = parse_expr("tick()")
        assert isinstance(expr, CallExpression)
        assert expr.arguments == ()
        assert str(expr) == "tick()"

    def test_call_token_is_lparen(self) -> None:
        expr = parse_expr("f(x)")
        assert expr.token_literal() == "("


# ---------------------------------------------------------------------------
# Error reporting and recovery
# ---------------------------------------------------------------------------


class TestErrors:
    def test_missing_assign(self) -> None:
        ast, errors = parse_errors("let x 5;")
        assert ast.statements == ()
        assert errors == ["expected next token to be ASSIGN, got INT instead"]

    def test_missing_identifier(self) -> None:
        _, errors = parse_errors("let = 10;")
        assert errors[0] == "expected next token to be IDENT, got ASSIGN instead"

    def test_no_prefix_parse_function(self) -> None:
        _, errors = parse_errors(")")
        assert errors == ["no prefix parse function for RPAREN found"]

    def test_illegal_character(self) -> None:
        _, errors = parse_errors("let x = @;")
        assert errors == ["no prefix parse function for ILLEGAL found"]

    def test_non_ascii_characters_are_illegal(self) -> None:
        ast, errors = parse_errors("let \u00e9 = \u0663;")
        assert ast.statements == ()
        assert errors == ["expected next token to be IDENT, got ILLEGAL instead"]

    def test_superscript_digit_is_not_an_integer(self) -> None:
        _, errors = parse_errors("\u00b2")
        assert errors == ["no prefix parse function for ILLEGAL found"]

    def test_integer_overflow(self) -> None:
        ast, errors = parse_errors("let x = 99999999999999999999;")
        assert ast.statements == ()
        assert errors == ["could not parse '99999999999999999999' as integer"]

    def test_missing_right_operand(self) -> None:
        ast, errors = parse_errors("1 + ;")
        assert ast.statements == ()
        assert errors == ["no prefix parse function for SEMICOLON found"]

    def test_unclosed_group(self) -> None:
        _, errors = parse_errors("(1 + 2")
        assert errors == ["expected next token to be RPAREN, got EOF instead"]

    def test_unclosed_call(self) -> None:
        _, errors = parse_errors("add(1, 2")
        assert errors == ["expected next token to be RPAREN, got EOF instead"]

    def test_all_errors_in_one_pass(self) -> None:
        _, errors = parse_errors("let = 10;\nlet x 5;\nlet 838383;")
        assert errors == [
            "expected next token to be IDENT, got ASSIGN instead",
            "expected next token to be ASSIGN, got INT instead",
            "expected next token to be IDENT, got INT instead",
        ]

    def test_recovery_keeps_later_statements(self) -> None:
        ast, errors = parse_errors("let = 5; let y = 1; y;")
        assert len(errors) == 1
        assert [str(s) for s in ast.statements] == ["let y = 1;", "y"]

    def test_recovery_stops_at_keyword(self) -> None:
        ast, errors = parse_errors("let x = let y = 2;")
        assert errors == ["no prefix parse function for LET found"]
        assert [str(s) for s in ast.statements] == ["let y = 2;"]

    def test_recovery_at_return(self) -> None:
        ast, errors = parse_errors("5 + ) 6 return 7;")
        assert errors == ["no prefix parse function for RPAREN found"]
        assert [str(s) for s in ast.statements] == ["return 7;"]

    def test_unterminated_let_at_eof(self) -> None:
        ast, errors = parse_errors("let x =")
        assert ast.statements == ()
        assert errors == ["no prefix parse function for EOF found"]

    def test_trailing_token_starts_new_statement(self) -> None:
        ast, errors = parse_errors("5 )")
        assert [str(s) for s in ast.statements] == ["5"]
        assert errors == ["no prefix parse function for RPAREN found"]

    def test_error_locations(self) -> None:
        _, diag = parse("let x\n  5;", "prog.mk")
        (d,) = diag.get_all()
        assert (d.location.file, d.location.line, d.location.column) == ("prog.mk", 2, 3)
        assert str(d) == "prog.mk:2:3: error: expected next token to be ASSIGN, got INT instead"


# ---------------------------------------------------------------------------
# Precedence table
# ---------------------------------------------------------------------------


def test_precedence_order() -> None:
    assert (
        Precedence.LOWEST
        < Precedence.EQUALS
        < Precedence.LESSGREATER
        < Precedence.SUM
        < Precedence.PRODUCT
        < Precedence.PREFIX
        < Precedence.CALL
    )


def test_parse_expression_public_entry() -> None:
    parser = Parser(Lexer("1 + 2 * 3"))
    expr = parser.parse_expression(Precedence.SUM)
    # Stops before '+': nothing binds looser than SUM here.
    check_literal(expr, 1)
