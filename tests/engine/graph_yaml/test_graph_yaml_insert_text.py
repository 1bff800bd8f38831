import pytest

from authoring_engine.graph_yaml.autocomplete_spec import AutocompleteSpec, SectionSpec
from authoring_engine.graph_yaml.context import resolve_context
from authoring_engine.graph_yaml.insert_text import build_insert_text, resolve_completion_command_behavior
from authoring_engine.graph_yaml.lines import split_lines
from authoring_engine.graph_yaml.types import ContextKind, EditingContext, Endpoint, InsertText, Section

ROOT_KEY = EditingContext(kind=ContextKind.ROOT_KEY, section=Section.ROOT)
ROOT_ITEM_KEY = EditingContext(kind=ContextKind.ROOT_ITEM_KEY, section=Section.ROOT)
NODE_ITEM_KEY = EditingContext(kind=ContextKind.ITEM_KEY, section=Section.NODES)
NODE_KEY = EditingContext(kind=ContextKind.KEY, section=Section.NODES)
FROM_VALUE = EditingContext(kind=ContextKind.ENDPOINT_VALUE, section=Section.LINKS, endpoint=Endpoint.FROM)


def test_root_key_opens_collection_with_first_item():
    assert build_insert_text(ROOT_KEY, "nodes") == InsertText(insert_text="nodes:\n  - name: ")
    assert build_insert_text(ROOT_KEY, "links") == InsertText(insert_text="links:\n  - from: ")


def test_root_item_key_strips_dash_label():
    assert build_insert_text(ROOT_ITEM_KEY, "- links:").insert_text == "links:\n  - from: "


def test_custom_indent_and_entry_start_key():
    spec = AutocompleteSpec(node=SectionSpec(ordered_keys=["title"], required_keys=[], entry_start_key="title"))
    assert build_insert_text(ROOT_KEY, "nodes", spec=spec, indent_size=4).insert_text == "nodes:\n    - title: "


def test_item_key_dash_option_starts_new_item():
    lines = split_lines("nodes:\n  - name: A\n  ")
    insert = build_insert_text(NODE_ITEM_KEY, "- name", lines=lines, line_number=3)
    assert insert.insert_text == "  - name: "


def test_item_key_plain_option_continues_item():
    lines = split_lines("nodes:\n  - name: A\n  ")
    assert build_insert_text(NODE_ITEM_KEY, "  type", lines=lines, line_number=3).insert_text == "    type: "


def test_item_key_collection_nests_inside_item():
    lines = split_lines("nodes:\n  - name: A\n  ")
    insert = build_insert_text(NODE_ITEM_KEY, "  links", lines=lines, line_number=3)
    assert insert.insert_text == "    links:\n      - from: "


def test_item_key_collection_dedents_from_nested_boundary_line():
    lines = split_lines("nodes:\n  - name: sub\n    nodes:\n      - name: inner\n      ")
    insert = build_insert_text(NODE_ITEM_KEY, "  links", lines=lines, line_number=5)
    assert insert.insert_text == "    links:\n      - from: "


def test_opened_collection_resolves_to_item_key_in_new_section():
    lines = split_lines("nodes:\n  - name: A\n  ")
    insert = build_insert_text(NODE_ITEM_KEY, "  links", lines=lines, line_number=3)
    edited = "\n".join(lines[:2] + [insert.insert_text])

    new_item_line = split_lines(edited)[3]
    dash_column = new_item_line.index("-") + 1
    context = resolve_context(edited, 4, dash_column + 2)
    assert context.kind == ContextKind.ITEM_KEY
    assert context.section == Section.LINKS

    end_context = resolve_context(edited, 4, len(new_item_line) + 1)
    assert end_context.kind == ContextKind.ENDPOINT_VALUE
    assert end_context.section == Section.LINKS


def test_key_suggestions():
    assert build_insert_text(NODE_KEY, "type") == InsertText(insert_text="type: ")
    assert build_insert_text(NODE_KEY, "nodes").insert_text == "nodes:\n  - name: "


def test_endpoint_values():
    assert build_insert_text(FROM_VALUE, ":") == InsertText(insert_text=":")
    assert build_insert_text(FROM_VALUE, "Alpha") == InsertText(insert_text="Alpha")


@pytest.mark.parametrize("kind", [ContextKind.NODE_TYPE_VALUE, ContextKind.LINK_TYPE_VALUE])
def test_type_values_are_snippets(kind):
    context = EditingContext(kind=kind, section=Section.NODES)
    assert build_insert_text(context, "service") == InsertText(insert_text="service\n$0", insert_as_snippet=True)


@pytest.mark.parametrize(
    "context,suggestion,key_token,should_trigger,title",
    [
        (NODE_KEY, "type", "type", True, "Trigger Type Suggestions"),
        (NODE_KEY, "name", "name", False, ""),
        (NODE_ITEM_KEY, "  from", "from", True, "Trigger Endpoint Suggestions"),
        (ROOT_ITEM_KEY, "- nodes:", "nodes", False, ""),
        (
            EditingContext(kind=ContextKind.NODE_TYPE_VALUE, section=Section.NODES),
            "svc",
            "svc",
            True,
            "Trigger Next Step Suggestions",
        ),
        (FROM_VALUE, ":", ":", False, ""),
        (FROM_VALUE, "Alpha", "Alpha", True, "Trigger Endpoint Suggestions"),
    ],
)
def test_completion_command_behavior(context, suggestion, key_token, should_trigger, title):
    command = resolve_completion_command_behavior(context, suggestion)
    assert command.key_token == key_token
    assert command.should_trigger_suggest is should_trigger
    assert command.title == title
