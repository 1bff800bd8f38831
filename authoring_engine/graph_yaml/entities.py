import logging
from typing import Any

import yaml

from authoring_engine.graph_yaml.errors import GraphYamlParseError
from authoring_engine.graph_yaml.sections import SECTION_HEADER_PATTERN, normalize_section_name
from authoring_engine.graph_yaml.types import GraphEntities

LOGGER = logging.getLogger(__name__)

ROOT_COLLECTIONS = ("nodes", "links")


def load_graph_document(text: str) -> Any:
    """Structural loader boundary. Raises GraphYamlParseError on any loader failure.

    Besides syntax errors PyYAML raises ValueError while constructing some scalars
    (e.g. an out of range timestamp) and RecursionError on very deep nesting.
    """
    try:
        return yaml.safe_load(text)
    except (yaml.YAMLError, ValueError, RecursionError) as e:
        raise GraphYamlParseError(f"Invalid graph YAML: {e}") from e


def _split_endpoint(endpoint: Any) -> tuple[str, str] | None:
    if not isinstance(endpoint, str):
        return None
    node, _, port = endpoint.partition(":")
    if not node:
        return None
    return node, port


def collect_graph_entities(parsed: Any) -> GraphEntities:
    """Walk every nesting level of a parsed graph and collect node names and used ports.

    Ports are kept only for known node names; anything referencing an unknown node is
    dropped without complaint.
    """
    node_names: set[str] = set()
    pending_endpoints: list[tuple[str, str]] = []
    # YAML aliases may make the same mapping reachable twice (or recursively).
    visited: set[int] = set()

    def visit(graph: Any) -> None:
        if not isinstance(graph, dict) or id(graph) in visited:
            return
        visited.add(id(graph))

        nodes = graph.get("nodes") if isinstance(graph.get("nodes"), list) else []
        if isinstance(graph.get("links"), list):
            links = graph["links"]
        elif isinstance(graph.get("edges"), list):
            links = graph["edges"]
        else:
            links = []

        for node in nodes:
            if isinstance(node, str):
                node_names.add(node)
                continue
            if not isinstance(node, dict):
                continue
            if isinstance(node.get("name"), str):
                node_names.add(node["name"])
            visit(node)

        for link in links:
            if not isinstance(link, dict):
                continue
            for endpoint in (link.get("from"), link.get("to")):
                split = _split_endpoint(endpoint)
                if split:
                    pending_endpoints.append(split)

    visit(parsed)

    ports_by_node: dict[str, set[str]] = {}
    for node, port in pending_endpoints:
        if not port or node not in node_names:
            continue
        ports_by_node.setdefault(node, set()).add(port)

    return GraphEntities(node_names=sorted(node_names), ports_by_node=ports_by_node)


def collect_root_section_presence(lines: list[str], parsed: Any = None) -> frozenset[str]:
    """Root collections present in the document.

    Taken from the parsed mapping when there is one, otherwise from un-indented
    `nodes:`/`links:`/`edges:` header lines so it keeps working on invalid YAML.
    """
    present: set[str] = set()
    if isinstance(parsed, dict):
        for key in parsed.keys():
            normalized = normalize_section_name(str(key))
            if normalized in ROOT_COLLECTIONS:
                present.add(normalized)
    if present:
        return frozenset(present)

    for line in lines:
        match = SECTION_HEADER_PATTERN.match(line)
        if not match or match.group(1):
            continue
        normalized = normalize_section_name(match.group(2))
        if normalized in ROOT_COLLECTIONS:
            present.add(normalized)
    return frozenset(present)
