"""Section and list-item boundary analysis.

Everything here works by scanning lines backward/forward from the cursor and comparing
indentation. It is intentionally not a YAML parser: suggestions are defined by these
scans, so a half-typed document behaves the same way as a valid one.
"""

import re

from authoring_engine.graph_yaml.lines import (
    INDENT_SIZE,
    is_blank,
    is_dash_line,
    key_from_line,
    line_indent,
    previous_non_empty_line,
)
from authoring_engine.graph_yaml.types import COLLECTION_SECTIONS, ItemContext, Section, SectionInfo

SECTION_HEADER_PATTERN = re.compile(r"^(\s*)(nodes|links|edges)\s*:\s*$")
SECTION_ALIASES = {"edges": Section.LINKS.value}
TERMINAL_ITEM_KEY = "type"
_EMPTY_DASH_PATTERN = re.compile(r"^-\s*$")


def normalize_section_name(name: str) -> str:
    return SECTION_ALIASES.get(name, name)


def infer_section(lines: list[str], line_index: int, indent: int) -> SectionInfo:
    """Find the collection governing a line.

    The nearest `nodes:`/`links:`/`edges:` header above the line wins if it is less
    indented than `indent` (or sits on the line itself).
    """
    for index in range(min(line_index, len(lines) - 1), -1, -1):
        match = SECTION_HEADER_PATTERN.match(lines[index] or "")
        if not match:
            continue
        section_indent = len(match.group(1))
        if section_indent < indent or index == line_index:
            return SectionInfo(section=Section(normalize_section_name(match.group(2))), section_indent=section_indent)
    return SectionInfo(section=Section.ROOT, section_indent=0)


def is_continuation_after_terminal_key(
    lines: list[str],
    line_number: int,
    section: Section,
    item_indent: int,
) -> bool:
    """True on a blank line inside an item whose last key was the terminal `type` key."""
    line_index = max(0, line_number - 1)
    current_line = lines[line_index] if line_index < len(lines) else ""
    if not is_blank(current_line):
        return False
    if line_indent(current_line) <= item_indent:
        return False

    previous = previous_non_empty_line(lines, line_index - 1)
    if not previous:
        return False
    _, previous_line = previous
    if line_indent(previous_line) < item_indent:
        return False

    previous_key = key_from_line(previous_line)
    if not previous_key:
        return False
    return section in COLLECTION_SECTIONS and previous_key == TERMINAL_ITEM_KEY


def find_item_start(lines: list[str], line_index: int, section: Section) -> int:
    """Index of the nearest dash line above line_index that belongs to `section`, or -1."""
    if section not in COLLECTION_SECTIONS:
        return -1
    for index in range(min(line_index, len(lines) - 1), -1, -1):
        line = lines[index] or ""
        if is_blank(line):
            continue
        if infer_section(lines, index, line_indent(line)).section != section:
            continue
        if is_dash_line(line):
            return index
    return -1


def collect_item_keys(
    lines: list[str],
    line_index: int,
    section: Section,
    end_line_index: int | None = None,
    indent_size: int = INDENT_SIZE,
) -> list[str]:
    """Keys of the item enclosing line_index, read up to end_line_index.

    Only keys at the dash column or one level deeper count; nested collections are skipped.
    """
    if section not in COLLECTION_SECTIONS:
        return []
    if end_line_index is None:
        end_line_index = len(lines) - 1

    start = line_index
    object_indent = None
    for index in range(min(line_index, len(lines) - 1), -1, -1):
        line = lines[index] or ""
        if is_blank(line):
            continue
        if is_dash_line(line):
            start = index
            object_indent = line_indent(line)
            break

    if object_indent is None:
        return []

    keys: list[str] = []
    for index in range(start, min(end_line_index, len(lines) - 1) + 1):
        line = lines[index] or ""
        if is_blank(line):
            continue
        indent = line_indent(line)
        if index > start and indent <= object_indent and is_dash_line(line):
            break
        if index > start and indent < object_indent:
            break
        if indent > object_indent + indent_size:
            continue
        key = key_from_line(line)
        if key and key not in keys:
            keys.append(key)
    return keys


def collect_item_context(
    lines: list[str],
    line_index: int,
    section: Section,
    indent_size: int = INDENT_SIZE,
) -> ItemContext:
    """Keys already used by the current item.

    An empty `-` item inherits the keys of the previous sibling so the user can keep
    filling in the same shape of item.
    """
    current_item_start = find_item_start(lines, line_index, section)
    if current_item_start < 0:
        return ItemContext()

    current_item_keys = collect_item_keys(lines, current_item_start, section, line_index, indent_size)
    if current_item_keys:
        return ItemContext(object_keys=current_item_keys, can_continue=True)

    if not _EMPTY_DASH_PATTERN.match((lines[current_item_start] or "").strip()):
        return ItemContext()

    previous_item_start = find_item_start(lines, current_item_start - 1, section)
    if previous_item_start < 0:
        return ItemContext()

    return ItemContext(
        object_keys=collect_item_keys(lines, previous_item_start, section, current_item_start - 1, indent_size),
        can_continue=True,
    )
