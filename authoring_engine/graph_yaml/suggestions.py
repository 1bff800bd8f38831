from dataclasses import dataclass, field
from typing import Optional

from authoring_engine.graph_yaml.autocomplete_spec import (
    DEFAULT_AUTOCOMPLETE_SPEC,
    AutocompleteSpec,
    SectionSpec,
    collect_ordered_keys,
    section_spec_for,
)
from authoring_engine.graph_yaml.catalog import (
    LINK_TYPE_SUGGESTIONS,
    NODE_TYPE_SUGGESTIONS,
    ProfileCatalog,
    normalize_catalog_values,
)
from authoring_engine.graph_yaml.sections import TERMINAL_ITEM_KEY
from authoring_engine.graph_yaml.types import (
    COLLECTION_SECTIONS,
    ContextKind,
    EditingContext,
    Endpoint,
    GraphEntities,
    Section,
)

ENDPOINT_PORT_SEPARATOR = ":"


@dataclass(frozen=True)
class SuggestionEnv:
    """Everything besides the context that suggestion rules may consult."""

    spec: AutocompleteSpec = DEFAULT_AUTOCOMPLETE_SPEC
    profile_catalog: Optional[ProfileCatalog] = None
    node_type_suggestions: list[str] = field(default_factory=list)
    link_type_suggestions: list[str] = field(default_factory=list)
    fallback_node_types: list[str] = field(default_factory=lambda: list(NODE_TYPE_SUGGESTIONS))
    fallback_link_types: list[str] = field(default_factory=lambda: list(LINK_TYPE_SUGGESTIONS))
    entities: GraphEntities = field(default_factory=GraphEntities)
    root_section_presence: frozenset[str] = frozenset()
    item_context_keys: list[str] = field(default_factory=list)
    can_continue_item_context: bool = False
    object_keys: list[str] = field(default_factory=list)


def normalize_section_prefix(prefix: str | None) -> str:
    """Strip a leading dash and trailing colon so `- na` and `name:` both filter on the key."""
    value = prefix or ""
    if value.startswith("-"):
        value = value[1:]
    if value.endswith(":"):
        value = value[:-1]
    return value.strip().lower()


def resolve_type_catalogs(env: SuggestionEnv) -> tuple[list[str], list[str]]:
    """Explicit overrides first, then the profile catalog, then the built-in defaults."""
    catalog = env.profile_catalog
    if env.node_type_suggestions:
        node_types = normalize_catalog_values(env.node_type_suggestions)
    elif catalog and catalog.node_types:
        node_types = list(catalog.node_types)
    else:
        node_types = normalize_catalog_values(env.fallback_node_types)

    if env.link_type_suggestions:
        link_types = normalize_catalog_values(env.link_type_suggestions)
    elif catalog and catalog.link_types:
        link_types = list(catalog.link_types)
    else:
        link_types = normalize_catalog_values(env.fallback_link_types)
    return node_types, link_types


def endpoint_suggestions(prefix: str, entities: GraphEntities, endpoint: Optional[Endpoint]) -> list[str]:
    normalized_prefix = (prefix or "").lower()
    if ENDPOINT_PORT_SEPARATOR in normalized_prefix:
        # Port names are free-form.
        return []

    has_exact_node_match = bool(normalized_prefix) and any(
        name.lower() == normalized_prefix for name in entities.node_names
    )
    if endpoint in (Endpoint.FROM, Endpoint.TO) and has_exact_node_match:
        return [ENDPOINT_PORT_SEPARATOR]

    return [name for name in entities.node_names if name.lower().startswith(normalized_prefix)]


def select_next_object_key(section_spec: SectionSpec | None, used_keys: list[str], prefix: str) -> list[str]:
    """At most one key: the first unused one matching the prefix."""
    available = [key for key in collect_ordered_keys(section_spec) if key not in set(used_keys or [])]
    normalized_prefix = normalize_section_prefix(prefix)
    if not normalized_prefix:
        return available[:1]
    return [key for key in available if key.lower().startswith(normalized_prefix)][:1]


def item_key_suggestions(context: EditingContext, env: SuggestionEnv) -> list[str]:
    section_spec = section_spec_for(context.section, env.spec)
    used_keys = env.item_context_keys or []
    if section_spec and section_spec.entry_start_key:
        start_key = section_spec.entry_start_key
    else:
        start_key = "name" if context.section == Section.NODES else "from"
    normalized_prefix = normalize_section_prefix(context.prefix)

    continuation_keys = [key for key in collect_ordered_keys(section_spec) if key != start_key]
    if context.section == Section.NODES and TERMINAL_ITEM_KEY in used_keys:
        continuation_keys = []
    continuation_keys = [key for key in continuation_keys if key not in used_keys]

    # (label, key): the start key opens a new dash item, the rest continue the current one.
    options = [(f"- {start_key}", start_key)]
    if env.can_continue_item_context:
        options.extend((f"  {key}", key) for key in continuation_keys)

    return [label for label, key in options if key.lower().startswith(normalized_prefix)]


def get_suggestions(context: EditingContext, env: Optional[SuggestionEnv] = None) -> list[str]:
    """Ordered candidate strings for a context. Pure function of its arguments."""
    env = env or SuggestionEnv()
    spec = env.spec or DEFAULT_AUTOCOMPLETE_SPEC

    match context.kind:
        case ContextKind.NODE_TYPE_VALUE | ContextKind.LINK_TYPE_VALUE:
            node_types, link_types = resolve_type_catalogs(env)
            values = node_types if context.kind == ContextKind.NODE_TYPE_VALUE else link_types
            prefix = (context.prefix or "").lower()
            return [value for value in values if value.startswith(prefix)]

        case ContextKind.ENDPOINT_VALUE:
            return endpoint_suggestions(context.prefix, env.entities, context.endpoint)

        case ContextKind.ROOT_KEY:
            prefix = normalize_section_prefix(context.prefix)
            root_sections = spec.root_sections or DEFAULT_AUTOCOMPLETE_SPEC.root_sections
            return [
                item
                for item in root_sections
                if item not in env.root_section_presence and item.lower().startswith(prefix)
            ]

        case ContextKind.ROOT_ITEM_KEY:
            root_sections = [str(item or "") for item in spec.root_sections or DEFAULT_AUTOCOMPLETE_SPEC.root_sections]
            return [f"- {item}:" for item in root_sections if item and item not in env.root_section_presence]

        case ContextKind.ITEM_KEY:
            return item_key_suggestions(context, env)

        case ContextKind.KEY if context.section in COLLECTION_SECTIONS:
            return select_next_object_key(section_spec_for(context.section, spec), env.object_keys, context.prefix)

        case _:
            return []
