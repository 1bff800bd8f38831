import pytest

from authoring_engine.graph_yaml.entities import (
    collect_graph_entities,
    collect_root_section_presence,
    load_graph_document,
)
from authoring_engine.graph_yaml.errors import GraphYamlParseError
from authoring_engine.graph_yaml.lines import split_lines

INVALID_GRAPH = "nodes:\n  - name: A\n    type: [unclosed\nlinks:\n"


def test_collects_names_and_ports_across_nesting_levels(nested_graph_text):
    entities = collect_graph_entities(load_graph_document(nested_graph_text))
    assert entities.node_names == ["A", "inner", "plain", "sub"]
    assert entities.ports_by_node == {"inner": {"out"}, "A": {"in", "x"}}


def test_orphan_ports_are_dropped(nested_graph_text):
    entities = collect_graph_entities(load_graph_document(nested_graph_text))
    assert "ghost" not in entities.ports_by_node


def test_edges_are_read_when_links_are_absent():
    entities = collect_graph_entities(load_graph_document("nodes: [a, b]\nedges:\n  - from: a:p\n    to: b\n"))
    assert entities.node_names == ["a", "b"]
    assert entities.ports_by_node == {"a": {"p"}}


def test_endpoint_is_split_on_first_colon():
    entities = collect_graph_entities({"nodes": ["a"], "links": [{"from": "a:b:c"}]})
    assert entities.ports_by_node == {"a": {"b:c"}}


def test_aliased_items_are_visited_once():
    text = "nodes:\n  - &shared\n    name: A\n  - *shared\n"
    assert collect_graph_entities(load_graph_document(text)).node_names == ["A"]


@pytest.mark.parametrize("parsed", [None, "just text", ["a", "b"], {"nodes": "not-a-list"}])
def test_non_graph_documents_have_no_entities(parsed):
    entities = collect_graph_entities(parsed)
    assert entities.node_names == []
    assert entities.ports_by_node == {}


def test_invalid_document_raises_parse_error():
    with pytest.raises(GraphYamlParseError):
        load_graph_document(INVALID_GRAPH)


def test_root_presence_from_parsed_mapping():
    text = "edges:\n  - from: a\n"
    assert collect_root_section_presence(split_lines(text), load_graph_document(text)) == frozenset({"links"})


def test_root_presence_falls_back_to_header_lines():
    assert collect_root_section_presence(split_lines(INVALID_GRAPH), None) == frozenset({"nodes", "links"})


def test_root_presence_ignores_indented_headers():
    assert collect_root_section_presence(["name: x", "  nodes:"], {"name": "x"}) == frozenset()
