from dataclasses import dataclass, field
from typing import Optional

from authoring_engine.graph_yaml.autocomplete_spec import DEFAULT_AUTOCOMPLETE_SPEC, AutocompleteSpec
from authoring_engine.graph_yaml.catalog import EMPTY_PROFILE_CATALOG, ProfileCatalog
from authoring_engine.graph_yaml.context import resolve_context
from authoring_engine.graph_yaml.lines import INDENT_SIZE
from authoring_engine.graph_yaml.metadata import CompletionMeta
from authoring_engine.graph_yaml.sections import collect_item_context, collect_item_keys
from authoring_engine.graph_yaml.suggestions import SuggestionEnv, get_suggestions
from authoring_engine.graph_yaml.types import (
    COLLECTION_SECTIONS,
    ContextKind,
    EditingContext,
    GraphEntities,
    ItemContext,
)


@dataclass(frozen=True)
class AutocompleteRuntime:
    """Context at the cursor plus the item/entity facts the suggestion rules need."""

    context: EditingContext
    object_keys: list[str] = field(default_factory=list)
    item_context_keys: list[str] = field(default_factory=list)
    can_continue_item_context: bool = False
    entities: GraphEntities = field(default_factory=GraphEntities)


def build_runtime_from_meta(
    text: str,
    line_number: int,
    column: int,
    meta: CompletionMeta,
    indent_size: int = INDENT_SIZE,
) -> AutocompleteRuntime:
    context = resolve_context(text, line_number, column, indent_size)
    line_index = max(0, min(line_number - 1, len(meta.lines) - 1))
    in_collection = context.section in COLLECTION_SECTIONS

    if context.kind == ContextKind.ITEM_KEY and in_collection:
        item_context = collect_item_context(meta.lines, line_index, context.section, indent_size)
    else:
        item_context = ItemContext()

    if context.kind == ContextKind.KEY and in_collection:
        object_keys = collect_item_keys(meta.lines, line_index, context.section, line_index, indent_size)
    else:
        object_keys = []

    return AutocompleteRuntime(
        context=context,
        object_keys=object_keys,
        item_context_keys=item_context.object_keys,
        can_continue_item_context=item_context.can_continue,
        entities=meta.entities,
    )


def resolve_autocomplete_at_position(
    text: str,
    line_number: int,
    column: int,
    meta: CompletionMeta,
    profile_catalog: Optional[ProfileCatalog] = None,
    node_type_suggestions: Optional[list[str]] = None,
    link_type_suggestions: Optional[list[str]] = None,
    spec: Optional[AutocompleteSpec] = None,
    indent_size: int = INDENT_SIZE,
    fallback_node_types: Optional[list[str]] = None,
    fallback_link_types: Optional[list[str]] = None,
) -> tuple[AutocompleteRuntime, list[str]]:
    runtime = build_runtime_from_meta(text, line_number, column, meta, indent_size)
    env = SuggestionEnv(
        spec=spec or DEFAULT_AUTOCOMPLETE_SPEC,
        profile_catalog=profile_catalog or EMPTY_PROFILE_CATALOG,
        node_type_suggestions=list(node_type_suggestions or []),
        link_type_suggestions=list(link_type_suggestions or []),
        fallback_node_types=list(fallback_node_types or []),
        fallback_link_types=list(fallback_link_types or []),
        entities=runtime.entities,
        root_section_presence=meta.root_section_presence,
        item_context_keys=runtime.item_context_keys,
        can_continue_item_context=runtime.can_continue_item_context,
        object_keys=runtime.object_keys,
    )
    return runtime, get_suggestions(runtime.context, env)
