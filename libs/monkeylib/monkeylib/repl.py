"""Interactive parse-print loop.

Reads one line at a time, parses it, and prints either the canonical
rendering of the resulting program or the parser error messages, one per
line.  Nothing is evaluated.
"""

from __future__ import annotations

import getpass
import sys
from typing import TextIO

from monkeylib.parser.lexer import Lexer
from monkeylib.parser.parser import Parser

PROMPT = ">> "


def print_parser_errors(out: TextIO, errors: list[str]) -> None:
    """Write the error banner followed by one tab-indented line per message."""
    out.write("Woops! We ran into some monkey business here!\n")
    out.write(" parser errors:\n")
    for msg in errors:
        out.write(f"\t{msg}\n")


def start(in_stream: TextIO, out_stream: TextIO) -> None:
    """Run the loop until *in_stream* is exhausted."""
    lineno = 0
    while True:
        out_stream.write(PROMPT)
        out_stream.flush()
        line = in_stream.readline()
        if not line:
            return
        lineno += 1

        parser = Parser(Lexer(line, f"<stdin:{lineno}>"))
        program = parser.parse_program()
        if parser.errors:
            print_parser_errors(out_stream, parser.errors)
            continue

        out_stream.write(f"{program}\n")


def _username() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "there"


def main() -> int:
    print(f"Hello {_username()}! Welcome to the Monkey programming language!")
    print("Feel free to type in commands")
    start(sys.stdin, sys.stdout)
    return 0
