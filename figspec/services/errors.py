from __future__ import annotations

from typing import Sequence


class FigspecError(RuntimeError):
    """Base error for dataset decoding and chart specification building."""


class UnsupportedFormatError(FigspecError):
    """Raised when an uploaded file has an encoding we cannot decode."""


class ParseError(FigspecError):
    """Raised when file content is malformed or holds no data rows."""


class ColumnNotFoundError(FigspecError):
    """Raised when a name-based column reference is absent from the headers."""

    def __init__(self, name: str, headers: Sequence[str]) -> None:
        self.name = name
        self.headers = list(headers)
        available = ", ".join(repr(h) for h in self.headers) or "none"
        super().__init__(f"Column '{name}' not found (available: {available}).")


class SpecBuildError(FigspecError):
    """Raised when a chart specification cannot be assembled."""
