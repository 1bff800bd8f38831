"""Enter/Backspace interception.

Each planner returns a plan object; `should_handle=False` tells the host to apply its
default key behaviour. Plans never touch the document themselves.
"""

import re

from authoring_engine.graph_yaml.context import resolve_context
from authoring_engine.graph_yaml.lines import (
    INDENT_SIZE,
    clamp_column,
    clamp_line_number,
    is_root_boundary_empty_line,
    line_indent,
    pad_lines_to,
    split_lines,
)
from authoring_engine.graph_yaml.sections import infer_section
from authoring_engine.graph_yaml.types import (
    BackspaceKeyPlan,
    ContextKind,
    EditingContext,
    EnterKeyPlan,
    Endpoint,
    Section,
)

_DASH_ITEM_LINE = re.compile(r"^\s*-")
_LABEL_VALUE = re.compile(r"(?:-\s*)?label:\s*(.+)")


def _can_advance_endpoint(context: EditingContext) -> bool:
    """A non-empty endpoint value, with a port when a `:` was typed."""
    endpoint_value = (context.prefix or "").strip()
    if not endpoint_value:
        return False
    _, separator, port = endpoint_value.partition(":")
    return not separator or bool(port.strip())


def plan_enter_key_action(
    text: str,
    line_number: int,
    column: int,
    indent_size: int = INDENT_SIZE,
) -> EnterKeyPlan:
    lines = pad_lines_to(split_lines(text), line_number)
    safe_line_number = clamp_line_number(line_number, len(lines))
    current_line = lines[safe_line_number - 1] or ""
    context = resolve_context(text, safe_line_number, column, indent_size)

    if (
        context.kind == ContextKind.ENDPOINT_VALUE
        and context.section == Section.LINKS
        and context.endpoint in (Endpoint.FROM, Endpoint.TO)
        and _can_advance_endpoint(context)
    ):
        base_indent = line_indent(current_line)
        if context.endpoint == Endpoint.FROM:
            # `- from: a` opened the item, so `to:` lines up with the key after the dash.
            next_indent = base_indent + indent_size if _DASH_ITEM_LINE.match(current_line) else base_indent
            return EnterKeyPlan(
                should_handle=True,
                edit_id="link-from-next-to",
                insert_text=f"\n{' ' * next_indent}to: ",
                trigger_source="enter-next-to",
            )

        next_indent = max(0, base_indent - indent_size)
        return EnterKeyPlan(
            should_handle=True,
            edit_id="link-to-next-step",
            insert_text=f"\n{' ' * next_indent}",
            trigger_source="enter-next-to",
        )

    label_match = _LABEL_VALUE.fullmatch(current_line.strip())
    if context.section == Section.LINKS and label_match and label_match.group(1).strip():
        base_indent = line_indent(current_line)
        if _DASH_ITEM_LINE.match(current_line):
            next_indent = base_indent
        else:
            next_indent = max(indent_size, base_indent - indent_size)
        return EnterKeyPlan(
            should_handle=True,
            edit_id="link-label-next-step",
            insert_text=f"\n{' ' * next_indent}",
            trigger_source="enter-after-label",
        )

    return EnterKeyPlan(should_handle=False)


def compute_indent_backspace_delete_count(line_content: str, column: int, indent_size: int = INDENT_SIZE) -> int:
    """Columns to delete so that Backspace on a whitespace-only line snaps to an indent stop.

    Returns 0 when the line has content around the caret or the caret is at column 1.
    """
    safe_line_content = str(line_content or "")
    caret_index = max(0, min(column - 1, len(safe_line_content)))
    before = safe_line_content[:caret_index]
    after = safe_line_content[caret_index:]
    if not before or before.strip() or after.strip():
        return 0
    remainder = caret_index % indent_size
    return min(indent_size, caret_index) if remainder == 0 else remainder


def plan_backspace_key_action(
    text: str,
    line_number: int,
    column: int,
    indent_size: int = INDENT_SIZE,
) -> BackspaceKeyPlan:
    lines = pad_lines_to(split_lines(text), line_number)
    safe_line_number = clamp_line_number(line_number, len(lines))
    line_index = safe_line_number - 1
    current_line = lines[line_index] or ""
    safe_column = clamp_column(column, current_line)
    current_section = infer_section(lines, line_index, line_indent(current_line)).section

    if current_section == Section.ROOT and is_root_boundary_empty_line(lines, line_index):
        return BackspaceKeyPlan(
            should_handle=True,
            edit_id="root-boundary-backspace",
            delete_start_column=1,
            delete_end_column=safe_column,
            trigger_source="backspace-root-boundary",
        )

    delete_count = compute_indent_backspace_delete_count(current_line, safe_column, indent_size)
    if delete_count <= 0:
        return BackspaceKeyPlan(should_handle=False, delete_start_column=safe_column, delete_end_column=safe_column)

    return BackspaceKeyPlan(
        should_handle=True,
        edit_id="indent-backspace",
        delete_start_column=max(1, safe_column - delete_count),
        delete_end_column=safe_column,
    )
