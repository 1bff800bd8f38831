import re
from typing import Optional

from authoring_engine.graph_yaml.autocomplete_spec import (
    DEFAULT_AUTOCOMPLETE_SPEC,
    AutocompleteSpec,
    entry_start_key_for,
)
from authoring_engine.graph_yaml.lines import INDENT_SIZE, line_indent
from authoring_engine.graph_yaml.sections import infer_section
from authoring_engine.graph_yaml.types import CompletionCommand, ContextKind, EditingContext, InsertText

SNIPPET_FINAL_TABSTOP = "$0"
COLLECTION_KEYS = ("nodes", "links")
SUGGEST_TRIGGER_KEYS = ("type", "from", "to")

_ITEM_START_LABEL = re.compile(r"^-\s+")
_TRAILING_COLON = re.compile(r":\s*$")


def _split_suggestion(suggestion: str | None) -> tuple[str, str, bool, str, str]:
    """Return (raw, trimmed, is_item_start_label, key, key_without_colon) for a suggestion label."""
    raw = str(suggestion or "")
    trimmed = raw.strip()
    is_item_start_label = _ITEM_START_LABEL.match(trimmed) is not None
    key = _ITEM_START_LABEL.sub("", trimmed).strip()
    return raw, trimmed, is_item_start_label, key, _TRAILING_COLON.sub("", key)


def open_collection_text(collection: str, spec: AutocompleteSpec, indent_size: int, key_indent: int = 0) -> str:
    """`nodes:`/`links:` header followed by a first item pre-seeded with its entry start key."""
    next_key = entry_start_key_for(collection, spec)
    item_indent = key_indent + indent_size
    return f"{' ' * key_indent}{collection}:\n{' ' * item_indent}- {next_key}: "


def build_insert_text(
    context: EditingContext,
    suggestion: str,
    spec: Optional[AutocompleteSpec] = None,
    indent_size: int = INDENT_SIZE,
    lines: Optional[list[str]] = None,
    line_number: int = 1,
    current_line: str = "",
) -> InsertText:
    """Exact text to splice at the cursor when `suggestion` is accepted in `context`."""
    spec = spec or DEFAULT_AUTOCOMPLETE_SPEC
    raw_item, trimmed_item, is_item_start_label, suggestion_key, normalized_suggestion_key = _split_suggestion(
        suggestion
    )
    safe_lines = lines if lines else [str(current_line or "")]
    safe_line_index = max(0, min(int(line_number) - 1, len(safe_lines) - 1))
    resolved_current_line = str(current_line or safe_lines[safe_line_index] or "")
    current_indent = line_indent(resolved_current_line)

    if context.kind == ContextKind.ROOT_KEY:
        collection = "nodes" if raw_item == "nodes" else "links"
        return InsertText(
            insert_text=f"{raw_item}:\n{' ' * indent_size}- {entry_start_key_for(collection, spec)}: "
        )

    if context.kind == ContextKind.ROOT_ITEM_KEY:
        collection = "nodes" if normalized_suggestion_key == "nodes" else "links"
        return InsertText(
            insert_text=f"{normalized_suggestion_key}:\n{' ' * indent_size}- {entry_start_key_for(collection, spec)}: "
        )

    if context.kind == ContextKind.ITEM_KEY:
        section_info = infer_section(safe_lines, safe_line_index, current_indent)
        desired_indent = section_info.section_indent + indent_size
        if is_item_start_label:
            return InsertText(insert_text=f"{' ' * desired_indent}- {suggestion_key}: ")

        if suggestion_key in COLLECTION_KEYS:
            is_boundary_line_at_item_indent = not resolved_current_line.strip() and current_indent == desired_indent
            # A blank line at item depth closes the current item: open the collection beside
            # the parent collection instead of inside the item.
            if is_boundary_line_at_item_indent and section_info.section_indent > 0:
                collection_key_indent = section_info.section_indent
            else:
                collection_key_indent = desired_indent + indent_size
            return InsertText(
                insert_text=open_collection_text(suggestion_key, spec, indent_size, collection_key_indent)
            )

        return InsertText(insert_text=f"{' ' * (desired_indent + indent_size)}{suggestion_key}: ")

    if context.kind == ContextKind.KEY:
        if trimmed_item in COLLECTION_KEYS:
            return InsertText(insert_text=open_collection_text(trimmed_item, spec, indent_size))
        return InsertText(insert_text=f"{trimmed_item}: ")

    if context.kind == ContextKind.ENDPOINT_VALUE and raw_item == ":":
        return InsertText(insert_text=":")

    if context.kind in (ContextKind.NODE_TYPE_VALUE, ContextKind.LINK_TYPE_VALUE):
        return InsertText(insert_text=f"{raw_item}\n{SNIPPET_FINAL_TABSTOP}", insert_as_snippet=True)

    return InsertText(insert_text=raw_item)


def resolve_completion_command_behavior(context: EditingContext, suggestion: str) -> CompletionCommand:
    """Whether the host should reopen suggestions right after `suggestion` is accepted.

    Accepting a `type`/`from`/`to` key, a type value or an endpoint node name leads straight
    into another choice, so the suggestion widget is retriggered for those.
    """
    raw_item, _, _, _, normalized_suggestion_key = _split_suggestion(suggestion)
    is_key_like_context = context.kind in (ContextKind.KEY, ContextKind.ITEM_KEY)
    is_type_value_context = context.kind in (ContextKind.NODE_TYPE_VALUE, ContextKind.LINK_TYPE_VALUE)
    is_endpoint_value_context = context.kind == ContextKind.ENDPOINT_VALUE

    if context.kind in (ContextKind.ITEM_KEY, ContextKind.ROOT_ITEM_KEY):
        key_token = normalized_suggestion_key
    else:
        key_token = raw_item

    should_trigger_suggest = (
        (is_key_like_context and key_token in SUGGEST_TRIGGER_KEYS)
        or is_type_value_context
        or (is_endpoint_value_context and raw_item != ":")
    )

    if not should_trigger_suggest:
        title = ""
    elif is_type_value_context:
        title = "Trigger Next Step Suggestions"
    elif key_token == "type":
        title = "Trigger Type Suggestions"
    else:
        title = "Trigger Endpoint Suggestions"

    return CompletionCommand(key_token=key_token, should_trigger_suggest=should_trigger_suggest, title=title)
