#!/usr/bin/env python3
"""
Monkey Operator Table Validator

Checks grammar/operators.yaml for well-formedness and cross-checks it
against the precedence, token and keyword tables compiled into monkeylib.

Usage:
    python grammar/validate.py
"""

import sys
from pathlib import Path

import yaml

from monkeylib.parser.lexer import Lexer
from monkeylib.parser.parser import PRECEDENCES, Precedence
from monkeylib.parser.tokens import KEYWORDS, TokenKind


def resolve_path(relative_path: str) -> Path:
    """Resolve path relative to script location."""
    script_dir = Path(__file__).parent
    return (script_dir / relative_path).resolve()


def load_yaml(path: Path) -> dict:
    """Load YAML file."""
    try:
        with open(path, "r") as f:
            return yaml.safe_load(f)
    except FileNotFoundError:
        print(f"ERROR: File not found: {path}")
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"ERROR: Invalid YAML in {path}: {e}")
        sys.exit(1)


def check_structure(table: dict) -> list:
    """Check required sections and per-entry fields. Returns list of errors."""
    errors = []
    for section in ("precedence_levels", "infix", "prefix", "keywords"):
        if section not in table:
            errors.append(f"Missing section: {section}")
    if errors:
        return errors

    levels = table["precedence_levels"]
    if len(set(levels)) != len(levels):
        errors.append("Duplicate entries in precedence_levels")

    seen = set()
    for entry in table["infix"]:
        for key in ("lexeme", "token", "precedence"):
            if key not in entry:
                errors.append(f"Infix entry {entry} missing '{key}'")
        if entry.get("precedence") not in levels:
            errors.append(f"Infix {entry.get('lexeme')!r}: unknown level {entry.get('precedence')}")
        if entry.get("lexeme") in seen:
            errors.append(f"Infix {entry.get('lexeme')!r} listed twice")
        seen.add(entry.get("lexeme"))

    for entry in table["prefix"]:
        for key in ("lexeme", "token"):
            if key not in entry:
                errors.append(f"Prefix entry {entry} missing '{key}'")
    return errors


def check_against_parser(table: dict) -> list:
    """Cross-check the table with monkeylib. Returns list of errors."""
    errors = []

    if [p.name for p in Precedence] != table["precedence_levels"]:
        errors.append(
            f"Precedence levels differ: table={table['precedence_levels']} "
            f"parser={[p.name for p in Precedence]}"
        )

    declared = {TokenKind[e["token"]]: Precedence[e["precedence"]] for e in table["infix"]}
    if declared != PRECEDENCES:
        errors.append("Infix precedences in table do not match the parser")

    for entry in table["infix"] + table["prefix"]:
        tokens = Lexer(entry["lexeme"]).tokenize()
        if tokens[0].kind != TokenKind[entry["token"]]:
            errors.append(f"{entry['lexeme']!r} lexes as {tokens[0].kind}, table says {entry['token']}")

    keywords = {word: TokenKind[kind] for word, kind in table["keywords"].items()}
    if keywords != KEYWORDS:
        errors.append("Keyword table does not match the lexer")
    return errors


def main() -> int:
    table_path = resolve_path("operators.yaml")
    print(f"Validating: {table_path}")
    table = load_yaml(table_path)

    errors = check_structure(table)
    if not errors:
        errors = check_against_parser(table)

    if errors:
        for err in errors:
            print(f"ERROR: {err}")
        print(f"\n{len(errors)} error(s) found.")
        return 1

    print(f"OK: {len(table['infix'])} infix, {len(table['prefix'])} prefix, "
          f"{len(table['keywords'])} keywords")
    return 0


if __name__ == "__main__":
    sys.exit(main())
