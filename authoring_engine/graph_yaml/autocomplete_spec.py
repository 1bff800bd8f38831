"""Grammar description driving key suggestions, and the key documentation table."""

from dataclasses import dataclass, field
from typing import Any, Optional

from authoring_engine.graph_yaml.types import Section

FORBIDDEN_AUTOCOMPLETE_KEYS = frozenset({"id"})


@dataclass(frozen=True)
class SectionSpec:
    ordered_keys: list[str]
    required_keys: list[str]
    entry_start_key: str


@dataclass(frozen=True)
class AutocompleteSpec:
    root_sections: list[str] = field(default_factory=lambda: ["nodes", "links"])
    node: SectionSpec = field(
        default_factory=lambda: SectionSpec(
            ordered_keys=["name", "type", "ports", "nodes", "links"],
            required_keys=["name"],
            entry_start_key="name",
        )
    )
    link: SectionSpec = field(
        default_factory=lambda: SectionSpec(
            ordered_keys=["from", "to", "label", "type"],
            required_keys=["from", "to"],
            entry_start_key="from",
        )
    )


DEFAULT_AUTOCOMPLETE_SPEC = AutocompleteSpec()

KEY_DOCUMENTATION = {
    "nodes": "Collection of graph nodes. Supports nested nodes and nested links.",
    "links": "Collection of graph links/edges. Use from/to as node[:port] references.",
    "name": "Display name for a node. Also used as a default endpoint identifier.",
    "type": "Domain node/link type. Type suggestions are profile-driven.",
    "from": "Link source endpoint in node or node:port format.",
    "to": "Link destination endpoint in node or node:port format.",
    "label": "Optional display label for links.",
    "ports": "Port definitions for node endpoints.",
}


def describe_key(label: str) -> str:
    return KEY_DOCUMENTATION.get(label, "")


def section_spec_for(section: Section | str, spec: Optional[AutocompleteSpec] = None) -> SectionSpec | None:
    spec = spec or DEFAULT_AUTOCOMPLETE_SPEC
    if section == Section.NODES:
        return spec.node or DEFAULT_AUTOCOMPLETE_SPEC.node
    if section == Section.LINKS:
        return spec.link or DEFAULT_AUTOCOMPLETE_SPEC.link
    return None


def entry_start_key_for(collection: str, spec: Optional[AutocompleteSpec] = None) -> str:
    """Key pre-seeded on the first item of a freshly opened `nodes`/`links` collection."""
    section_spec = section_spec_for(Section.NODES if collection == "nodes" else Section.LINKS, spec)
    return section_spec.entry_start_key


def collect_ordered_keys(section_spec: SectionSpec | None) -> list[str]:
    """Required keys first, then ordered keys; de-duplicated and never containing `id`."""
    if section_spec is None:
        return []
    keys: list[str] = []
    for key in [*(section_spec.required_keys or []), *(section_spec.ordered_keys or [])]:
        if not isinstance(key, str) or not key.strip():
            continue
        if key.strip() in FORBIDDEN_AUTOCOMPLETE_KEYS or key in keys:
            continue
        keys.append(key)
    return keys


def _section_spec_from_raw(raw: Any, default: SectionSpec) -> SectionSpec:
    if not isinstance(raw, dict):
        return default
    ordered_keys = raw.get("ordered_keys", raw.get("orderedKeys"))
    required_keys = raw.get("required_keys", raw.get("requiredKeys"))
    entry_start_key = raw.get("entry_start_key", raw.get("entryStartKey"))
    return SectionSpec(
        ordered_keys=list(ordered_keys) if isinstance(ordered_keys, list) else list(default.ordered_keys),
        required_keys=list(required_keys) if isinstance(required_keys, list) else list(default.required_keys),
        entry_start_key=str(entry_start_key) if entry_start_key else default.entry_start_key,
    )


def create_autocomplete_spec(raw: dict[str, Any] | None = None) -> AutocompleteSpec:
    """Build a spec from a plain mapping (snake_case or camelCase keys); gaps use the defaults."""
    if not raw:
        return DEFAULT_AUTOCOMPLETE_SPEC
    root_sections = raw.get("root_sections", raw.get("rootSections"))
    return AutocompleteSpec(
        root_sections=(
            [str(item) for item in root_sections if item]
            if isinstance(root_sections, list)
            else list(DEFAULT_AUTOCOMPLETE_SPEC.root_sections)
        ),
        node=_section_spec_from_raw(raw.get("node"), DEFAULT_AUTOCOMPLETE_SPEC.node),
        link=_section_spec_from_raw(raw.get("link"), DEFAULT_AUTOCOMPLETE_SPEC.link),
    )
