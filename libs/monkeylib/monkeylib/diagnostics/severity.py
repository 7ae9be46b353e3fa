"""Diagnostic severity levels for Monkey."""

from __future__ import annotations

from enum import Enum


class DiagnosticSeverity(Enum):
    """Severity level of a diagnostic message.

    The front end only reports errors today; any recorded error means the
    resulting program must not be evaluated.
    """

    ERROR = "error"

    def __str__(self) -> str:
        return self.value
