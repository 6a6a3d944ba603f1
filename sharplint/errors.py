# Error types: source acquisition failures and C# parse failures.

from __future__ import annotations

from pathlib import Path
from typing import Optional


class SharplintError(Exception):
    """Base class for all errors raised by sharplint."""


class AcquisitionError(SharplintError):
    """The source text could not be obtained (empty path, missing/unreadable file, bad encoding)."""

    def __init__(self, path: Optional[Path], reason: str) -> None:
        self.path = path
        self.reason = reason
        if path is None or str(path) == "":
            super().__init__(reason)
        else:
            super().__init__(f"{path}: {reason}")


class ParseError(SharplintError):
    """
    The text is not valid C#.

    line/column point at the first offending position (1-based) when known.
    """

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        self.message = message
        self.line = line
        self.column = column
        if line is not None and column is not None:
            super().__init__(f"Syntax error at line {line}, column {column}: {message}")
        else:
            super().__init__(f"Syntax error: {message}")
