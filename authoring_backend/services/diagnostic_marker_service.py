import logging

from authoring_backend.schemas.autocomplete_schema import DiagnosticSchema, MarkerSchema
from authoring_engine.graph_yaml.diagnostics import Diagnostic, marker_from_diagnostic
from authoring_engine.graph_yaml.lines import split_lines
from settings import settings

LOGGER = logging.getLogger(__name__)


def build_markers(diagnostics: list[DiagnosticSchema], text: str) -> list[MarkerSchema]:
    """Editor markers for validation diagnostics, clamped to the current document."""
    lines = split_lines(text)
    markers: list[MarkerSchema] = []
    for diagnostic in diagnostics:
        marker = marker_from_diagnostic(
            Diagnostic(**diagnostic.model_dump()),
            lines,
            default_source=settings.AUTOCOMPLETE_DIAGNOSTIC_SOURCE,
        )
        markers.append(
            MarkerSchema(
                severity=marker.severity,
                message=marker.message,
                source=marker.source,
                start_line_number=marker.start_line_number,
                start_column=marker.start_column,
                end_line_number=marker.end_line_number,
                end_column=marker.end_column,
            )
        )
    LOGGER.debug("Built %d markers from diagnostics", len(markers))
    return markers
