"""Source location tracking for Monkey diagnostics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """A position in Monkey source text."""

    file: str
    line: int  # 1-indexed
    column: int  # 1-indexed
    offset: int = 0  # 0-indexed character offset into the source

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"
