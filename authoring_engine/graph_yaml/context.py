# TODO: Cache infer_section per line; find_item_start rescans upward for every line.
import re

from authoring_engine.graph_yaml.lines import (
    INDENT_SIZE,
    clamp_column,
    clamp_line_number,
    is_root_boundary_empty_line,
    line_indent,
    pad_lines_to,
    split_lines,
)
from authoring_engine.graph_yaml.sections import infer_section, is_continuation_after_terminal_key
from authoring_engine.graph_yaml.types import ContextKind, EditingContext, Endpoint, Section

_TYPE_VALUE_PATTERN = re.compile(r"(?:-\s*)?type:\s*([a-zA-Z0-9_-]*)")
_ENDPOINT_VALUE_PATTERN = re.compile(r"(?:-\s*)?(from|to):\s*(\S*)")
_LIST_KEY_PATTERN = re.compile(r"-\s*([a-zA-Z_][a-zA-Z0-9_-]*)?")
_IDENTIFIER_PATTERN = re.compile(r"[a-zA-Z_][a-zA-Z0-9_-]*")


def resolve_context(text: str, line_number: int, column: int, indent_size: int = INDENT_SIZE) -> EditingContext:
    """Classify what the user is typing at a 1-indexed (line, column) cursor.

    Positions past the end of the document are clamped. Rules are tried in order and the
    first match wins, so an endpoint value always beats a bare identifier.
    """
    lines = pad_lines_to(split_lines(text), line_number)
    safe_line_number = clamp_line_number(line_number, len(lines))
    line = lines[safe_line_number - 1] or ""
    safe_column = clamp_column(column, line)
    trimmed_left = line[: safe_column - 1].strip()
    indent = line_indent(line)

    section_info = infer_section(lines, safe_line_number - 1, indent)
    section = section_info.section
    item_indent = section_info.section_indent + indent_size

    if section == Section.ROOT and is_root_boundary_empty_line(lines, safe_line_number - 1):
        return EditingContext(kind=ContextKind.ROOT_ITEM_KEY, section=Section.ROOT)

    if section != Section.ROOT and is_continuation_after_terminal_key(lines, safe_line_number, section, item_indent):
        return EditingContext(kind=ContextKind.ITEM_KEY, section=section)

    type_match = _TYPE_VALUE_PATTERN.fullmatch(trimmed_left)
    if type_match and section == Section.NODES:
        return EditingContext(kind=ContextKind.NODE_TYPE_VALUE, section=section, prefix=type_match.group(1) or "")
    if type_match and section == Section.LINKS:
        return EditingContext(kind=ContextKind.LINK_TYPE_VALUE, section=section, prefix=type_match.group(1) or "")

    endpoint_match = _ENDPOINT_VALUE_PATTERN.fullmatch(trimmed_left)
    if endpoint_match and section == Section.LINKS:
        return EditingContext(
            kind=ContextKind.ENDPOINT_VALUE,
            section=section,
            prefix=endpoint_match.group(2) or "",
            endpoint=Endpoint(endpoint_match.group(1)),
        )

    list_key_match = _LIST_KEY_PATTERN.fullmatch(trimmed_left)
    at_item_key_column = indent <= item_indent and (
        trimmed_left == "" or _IDENTIFIER_PATTERN.fullmatch(trimmed_left) is not None
    )
    if section != Section.ROOT and (list_key_match or at_item_key_column):
        prefix = (list_key_match.group(1) or "") if list_key_match else trimmed_left
        return EditingContext(kind=ContextKind.ITEM_KEY, section=section, prefix=prefix)

    if trimmed_left == "" or _IDENTIFIER_PATTERN.fullmatch(trimmed_left):
        return EditingContext(
            kind=ContextKind.ROOT_KEY if section == Section.ROOT else ContextKind.KEY,
            section=section,
            prefix=trimmed_left,
        )

    return EditingContext(kind=ContextKind.NONE, section=section)
