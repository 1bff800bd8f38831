"""Per-document completion metadata and its single-slot cache.

The cache holds exactly one (version, text) snapshot. Any mismatch rebuilds the metadata
and replaces the cache entry as a whole; entries are never merged.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Hashable, Optional

from authoring_engine.graph_yaml.entities import (
    collect_graph_entities,
    collect_root_section_presence,
    load_graph_document,
)
from authoring_engine.graph_yaml.errors import GraphYamlParseError
from authoring_engine.graph_yaml.lines import split_lines
from authoring_engine.graph_yaml.types import GraphEntities

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionMeta:
    lines: list[str] = field(default_factory=lambda: [""])
    entities: GraphEntities = field(default_factory=GraphEntities)
    root_section_presence: frozenset[str] = frozenset()


@dataclass(frozen=True)
class CompletionMetaCache:
    version: Optional[Hashable] = None
    text: str = ""
    meta: CompletionMeta = field(default_factory=CompletionMeta)


@dataclass(frozen=True)
class LatestDocumentState:
    """A parse the caller already did for the same text (e.g. for validation)."""

    text: str
    entities: GraphEntities
    parsed_graph: Any = None


def create_empty_completion_meta_cache() -> CompletionMetaCache:
    return CompletionMetaCache()


def build_autocomplete_metadata(text: str) -> CompletionMeta:
    lines = split_lines(text)
    try:
        parsed = load_graph_document(text)
    except GraphYamlParseError as e:
        # Best effort only: structural key completion still works from line scans.
        LOGGER.debug("Falling back to line scan for completion metadata: %s", e)
        return CompletionMeta(
            lines=lines,
            entities=GraphEntities(),
            root_section_presence=collect_root_section_presence(lines, None),
        )

    return CompletionMeta(
        lines=lines,
        entities=collect_graph_entities(parsed),
        root_section_presence=collect_root_section_presence(lines, parsed),
    )


def resolve_metadata_cache(
    text: str,
    version: Optional[Hashable] = None,
    cache: Optional[CompletionMetaCache] = None,
    latest_document_state: Optional[LatestDocumentState] = None,
) -> tuple[CompletionMeta, CompletionMetaCache]:
    """Return metadata for (version, text) and the cache to keep for the next call."""
    cache = cache or create_empty_completion_meta_cache()
    if cache.version == version and cache.text == text:
        LOGGER.debug("Completion metadata cache hit for version %s", version)
        return cache.meta, cache

    if latest_document_state is not None and latest_document_state.text == text:
        lines = split_lines(text)
        meta = CompletionMeta(
            lines=lines,
            entities=latest_document_state.entities,
            root_section_presence=collect_root_section_presence(lines, latest_document_state.parsed_graph),
        )
    else:
        meta = build_autocomplete_metadata(text)

    LOGGER.debug("Completion metadata rebuilt for version %s", version)
    return meta, CompletionMetaCache(version=version, text=text, meta=meta)
