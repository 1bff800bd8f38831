"""Conversion of validation diagnostics into host editor markers."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

DEFAULT_DIAGNOSTIC_SOURCE = "GraphAutocompleteCore"


class MarkerSeverity(StrEnum):
    ERROR = "Error"
    WARNING = "Warning"
    INFO = "Info"


@dataclass(frozen=True)
class Diagnostic:
    message: str
    severity: str = "error"
    line_number: Optional[int] = None
    end_line_number: Optional[int] = None
    column: Optional[int] = None
    end_column: Optional[int] = None
    source: Optional[str] = None


@dataclass(frozen=True)
class Marker:
    severity: MarkerSeverity
    message: str
    source: str
    start_line_number: int
    start_column: int
    end_line_number: int
    end_column: int


def severity_for(value: Optional[str]) -> MarkerSeverity:
    match value:
        case "warning":
            return MarkerSeverity.WARNING
        case "info":
            return MarkerSeverity.INFO
        case _:
            return MarkerSeverity.ERROR


def marker_from_diagnostic(
    diagnostic: Diagnostic,
    lines: Optional[list[str]] = None,
    default_source: str = DEFAULT_DIAGNOSTIC_SOURCE,
) -> Marker:
    """Clamp a diagnostic range onto the document.

    Lines are clamped to the document, and the marker always spans at least one column
    even on an empty line. Without `lines` the line range is left unbounded.
    """
    max_line = len(lines) if lines else None

    start_line_number = max(1, diagnostic.line_number or 1)
    if max_line is not None:
        start_line_number = min(max_line, start_line_number)
    end_line_number = diagnostic.end_line_number or start_line_number
    if max_line is not None:
        end_line_number = min(max_line, end_line_number)
    end_line_number = max(start_line_number, end_line_number)

    line_text = lines[start_line_number - 1] if lines else ""
    start_column = max(1, diagnostic.column or 1)
    min_end_column = max(2, (diagnostic.column or 1) + 1)
    end_column = max(min_end_column, min(len(line_text) + 1, diagnostic.end_column or min_end_column))

    return Marker(
        severity=severity_for(diagnostic.severity),
        message=diagnostic.message,
        source=diagnostic.source or default_source,
        start_line_number=start_line_number,
        start_column=start_column,
        end_line_number=end_line_number,
        end_column=end_column,
    )
