"""Parse error types for the Monkey parser."""

from __future__ import annotations

from monkeylib.diagnostics.location import SourceLocation


class ParseError(Exception):
    """Raised inside the parser to abandon the statement being parsed.

    The matching diagnostic has always been recorded before this is raised;
    ``Parser.parse_program`` catches it and resynchronizes, so it never
    reaches callers of the public API.
    """

    def __init__(self, message: str, location: SourceLocation | None = None) -> None:
        super().__init__(message)
        self.location = location
