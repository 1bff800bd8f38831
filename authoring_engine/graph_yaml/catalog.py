"""Profile catalog normalization.

A profile catalog is the externally supplied vocabulary of node and link types plus
identity fields (ids, versions, checksums). The checksums are carried as opaque values so
callers can use them for cache invalidation; nothing here interprets them.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

NODE_TYPE_SUGGESTIONS: list[str] = []
LINK_TYPE_SUGGESTIONS: list[str] = []


@dataclass(frozen=True)
class IconSetSource:
    icon_set_id: str
    icon_set_version: float


@dataclass(frozen=True)
class ProfileCatalog:
    schema_version: str = "v1"
    graph_type_id: str = ""
    graph_type_version: float = 0
    graph_type_checksum: str = ""
    runtime_checksum: str = ""
    profile_id: str = ""
    profile_version: float = 0
    profile_checksum: str = ""
    icon_set_resolution_checksum: str = ""
    checksum: str = ""
    node_types: list[str] = field(default_factory=list)
    link_types: list[str] = field(default_factory=list)
    icon_set_sources: list[IconSetSource] = field(default_factory=list)


EMPTY_PROFILE_CATALOG = ProfileCatalog()


def normalize_catalog_values(values: Optional[Iterable[Any]] = None) -> list[str]:
    """Trim and lower-case values, dropping blanks and repeats (first seen wins)."""
    result: list[str] = []
    seen: set[str] = set()
    if isinstance(values, str):
        values = [values]
    elif not isinstance(values, (list, tuple, set, frozenset)):
        values = []
    for raw in values:
        normalized = str(raw or "").strip().lower()
        if not normalized or normalized in seen:
            continue
        seen.add(normalized)
        result.append(normalized)
    return result


def _is_finite_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _first_present(raw: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


def _normalize_icon_set_sources(raw_sources: Any) -> list[IconSetSource]:
    if not isinstance(raw_sources, list):
        return []
    sources: list[IconSetSource] = []
    for item in raw_sources:
        if not isinstance(item, dict):
            continue
        icon_set_id = str(_first_present(item, "iconSetId", "icon_set_id") or "").strip().lower()
        raw_version = item.get("iconSetVersion", item.get("icon_set_version"))
        icon_set_version = raw_version if _is_finite_number(raw_version) else 0
        if not icon_set_id or icon_set_version <= 0:
            continue
        sources.append(IconSetSource(icon_set_id=icon_set_id, icon_set_version=icon_set_version))
    return sources


def create_profile_catalog(raw: Optional[dict[str, Any] | ProfileCatalog] = None) -> ProfileCatalog:
    """Normalize a raw catalog mapping (camelCase or snake_case keys) into a ProfileCatalog.

    `profile*` fields are legacy aliases of the `graphType*` fields and are mirrored on
    output. Malformed icon-set entries are dropped without failing the whole catalog.
    """
    if isinstance(raw, ProfileCatalog):
        return raw
    raw = raw if isinstance(raw, dict) else {}

    graph_type_id = str(_first_present(raw, "graphTypeId", "graph_type_id", "profileId", "profile_id") or "")

    graph_type_version: float = 0
    for key in ("graphTypeVersion", "graph_type_version", "profileVersion", "profile_version"):
        if _is_finite_number(raw.get(key)):
            graph_type_version = raw[key]
            break

    graph_type_checksum = str(
        _first_present(
            raw, "graphTypeChecksum", "graph_type_checksum", "profileChecksum", "profile_checksum", "checksum"
        )
        or ""
    )
    checksum = str(raw.get("checksum") or graph_type_checksum or "")

    return ProfileCatalog(
        schema_version=str(_first_present(raw, "schemaVersion", "schema_version") or "v1"),
        graph_type_id=graph_type_id,
        graph_type_version=graph_type_version,
        graph_type_checksum=graph_type_checksum,
        runtime_checksum=str(_first_present(raw, "runtimeChecksum", "runtime_checksum") or ""),
        profile_id=graph_type_id,
        profile_version=graph_type_version,
        profile_checksum=graph_type_checksum,
        icon_set_resolution_checksum=str(
            _first_present(raw, "iconSetResolutionChecksum", "icon_set_resolution_checksum") or ""
        ),
        checksum=checksum,
        node_types=normalize_catalog_values(_first_present(raw, "nodeTypes", "node_types")),
        link_types=normalize_catalog_values(_first_present(raw, "linkTypes", "link_types")),
        icon_set_sources=_normalize_icon_set_sources(_first_present(raw, "iconSetSources", "icon_set_sources")),
    )
