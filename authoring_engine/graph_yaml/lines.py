import re

INDENT_SIZE = 2

_LEADING_WHITESPACE = re.compile(r"^(\s*)")
# Matches `key:` and `- key:` where key is an identifier.
_KEY_PATTERN = re.compile(r"^(?:-\s*)?([a-zA-Z_][a-zA-Z0-9_-]*)\s*:")


def split_lines(text: str) -> list[str]:
    return (text or "").split("\n")


def line_indent(line: str | None) -> int:
    match = _LEADING_WHITESPACE.match(line or "")
    return len(match.group(1)) if match else 0


def is_blank(line: str | None) -> bool:
    return not (line or "").strip()


def previous_non_empty_line(lines: list[str], start_index: int) -> tuple[int, str] | None:
    """Return (index, line) of the nearest non-blank line at or above start_index."""
    for index in range(min(start_index, len(lines) - 1), -1, -1):
        line = lines[index] or ""
        if is_blank(line):
            continue
        return index, line
    return None


def root_content_bounds(lines: list[str]) -> tuple[int, int]:
    first_non_empty = -1
    last_non_empty = -1
    for index, line in enumerate(lines):
        if is_blank(line):
            continue
        if first_non_empty < 0:
            first_non_empty = index
        last_non_empty = index
    return first_non_empty, last_non_empty


def is_root_boundary_empty_line(lines: list[str], line_index: int) -> bool:
    """True for blank padding before the first or after the last non-blank line."""
    if line_index < 0 or line_index >= len(lines):
        return False
    if not is_blank(lines[line_index]):
        return False
    first_non_empty, last_non_empty = root_content_bounds(lines)
    if first_non_empty < 0 or last_non_empty < 0:
        return False
    return line_index < first_non_empty or line_index > last_non_empty


def key_from_line(line: str | None) -> str | None:
    match = _KEY_PATTERN.match((line or "").strip())
    return match.group(1) if match else None


def is_dash_line(line: str | None) -> bool:
    return (line or "").strip().startswith("-")


def pad_lines_to(lines: list[str], line_number: int) -> list[str]:
    """Append virtual empty lines so that a cursor past the document end stays addressable."""
    padded = list(lines)
    while line_number > len(padded):
        padded.append("")
    return padded


def clamp_line_number(line_number: int, line_count: int) -> int:
    return max(1, min(line_number, line_count))


def clamp_column(column: int, line: str) -> int:
    return max(1, min(column, len(line) + 1))
