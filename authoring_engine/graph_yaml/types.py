"""Value objects shared by the graph YAML completion core."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional


class ContextKind(StrEnum):
    """What the cursor is currently positioned to type."""

    ROOT_KEY = "rootKey"
    ROOT_ITEM_KEY = "rootItemKey"
    KEY = "key"
    ITEM_KEY = "itemKey"
    NODE_TYPE_VALUE = "nodeTypeValue"
    LINK_TYPE_VALUE = "linkTypeValue"
    ENDPOINT_VALUE = "endpointValue"
    NONE = "none"


class Section(StrEnum):
    ROOT = "root"
    NODES = "nodes"
    LINKS = "links"


class Endpoint(StrEnum):
    FROM = "from"
    TO = "to"


COLLECTION_SECTIONS = (Section.NODES, Section.LINKS)


@dataclass(frozen=True)
class EditingContext:
    """Classification of an edit point.

    `kind` and `section` select the suggestion rule, `prefix` only narrows its results.
    `endpoint` is set for `endpointValue` contexts only.
    """

    kind: ContextKind
    section: Section
    prefix: str = ""
    endpoint: Optional[Endpoint] = None


@dataclass(frozen=True)
class SectionInfo:
    section: Section
    section_indent: int


@dataclass(frozen=True)
class ItemContext:
    object_keys: list[str] = field(default_factory=list)
    can_continue: bool = False


@dataclass(frozen=True)
class GraphEntities:
    """Node names (sorted) and the ports referenced against each of them."""

    node_names: list[str] = field(default_factory=list)
    ports_by_node: dict[str, set[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class InsertText:
    insert_text: str
    insert_as_snippet: bool = False


@dataclass(frozen=True)
class CompletionCommand:
    key_token: str
    should_trigger_suggest: bool
    title: str = ""


@dataclass(frozen=True)
class EnterKeyPlan:
    should_handle: bool
    edit_id: str = ""
    insert_text: str = ""
    trigger_source: str = "enter"


@dataclass(frozen=True)
class BackspaceKeyPlan:
    should_handle: bool
    delete_start_column: int
    delete_end_column: int
    edit_id: str = ""
    trigger_source: str = "backspace"
