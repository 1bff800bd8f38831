from authoring_engine.graph_yaml.catalog import create_profile_catalog
from authoring_engine.graph_yaml.metadata import build_autocomplete_metadata
from authoring_engine.graph_yaml.runtime import build_runtime_from_meta, resolve_autocomplete_at_position
from authoring_engine.graph_yaml.types import ContextKind, Section


def _suggest(text, line_number, column, **kwargs):
    meta = build_autocomplete_metadata(text)
    return resolve_autocomplete_at_position(text, line_number, column, meta, **kwargs)


def test_returns_root_suggestions_for_empty_document():
    runtime, suggestions = _suggest("", 1, 1)
    assert runtime.context.kind == ContextKind.ROOT_KEY
    assert suggestions == ["nodes", "links"]


def test_returns_endpoint_suggestions_from_parsed_node_names(linked_graph_text):
    _, from_suggestions = _suggest(linked_graph_text, 5, 12)
    _, to_suggestions = _suggest(linked_graph_text, 6, 12)
    assert from_suggestions == [":"]
    assert to_suggestions == [":"]


def test_returns_node_names_for_empty_endpoint():
    text = "nodes:\n  - name: A\n  - name: B\nlinks:\n  - from: "
    _, suggestions = _suggest(text, 5, 11)
    assert suggestions == ["A", "B"]


def test_returns_next_item_step_suggestions_after_node_name():
    text = "nodes:\n  - name: node-1\n  "
    runtime, suggestions = _suggest(text, 3, 3)
    assert runtime.item_context_keys == ["name"]
    assert runtime.can_continue_item_context is True
    assert suggestions == ["- name", "  type", "  ports", "  nodes", "  links"]


def test_only_new_item_after_node_type():
    text = "nodes:\n  - name: A\n    type: t\n    "
    runtime, suggestions = _suggest(text, 4, 5)
    assert runtime.context.kind == ContextKind.ITEM_KEY
    assert suggestions == ["- name"]


def test_key_inside_item_suggests_next_key():
    text = "nodes:\n  - name: A\n    "
    runtime, suggestions = _suggest(text, 3, 5)
    assert runtime.context.kind == ContextKind.KEY
    assert runtime.object_keys == ["name"]
    assert suggestions == ["type"]


def test_root_item_keys_skip_present_sections():
    _, suggestions = _suggest("nodes:\n  - name: A\n", 3, 1)
    assert suggestions == ["- links:"]


def test_root_sections_present_in_invalid_document_are_still_filtered():
    text = "links:\n  - from: [\n"
    _, suggestions = _suggest(text, 3, 1)
    assert suggestions == ["- nodes:"]


def test_type_values_from_catalog():
    text = "nodes:\n  - name: A\n    type: d"
    catalog = create_profile_catalog({"nodeTypes": ["Service", "Database"]})
    runtime, suggestions = _suggest(text, 3, 12, profile_catalog=catalog)
    assert runtime.context.kind == ContextKind.NODE_TYPE_VALUE
    assert suggestions == ["database"]


def test_nested_item_context():
    text = "nodes:\n  - name: sub\n    links:\n      - from: a\n        "
    runtime = build_runtime_from_meta(text, 5, 9, build_autocomplete_metadata(text))
    assert runtime.context.section == Section.LINKS
    assert runtime.context.kind == ContextKind.KEY
    assert runtime.object_keys == ["from"]
