"""Graph YAML autocomplete schemas exchanged with the host editor."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from authoring_engine.graph_yaml.autocomplete_spec import AutocompleteSpec, create_autocomplete_spec
from authoring_engine.graph_yaml.diagnostics import MarkerSeverity
from authoring_engine.graph_yaml.types import ContextKind, Endpoint, Section


class SectionSpecSchema(BaseModel):
    ordered_keys: list[str]
    required_keys: list[str] = []
    entry_start_key: str


class AutocompleteSpecSchema(BaseModel):
    root_sections: list[str] = ["nodes", "links"]
    node: Optional[SectionSpecSchema] = None
    link: Optional[SectionSpecSchema] = None

    def to_autocomplete_spec(self) -> AutocompleteSpec:
        return create_autocomplete_spec(self.model_dump(exclude_none=True))


class CursorPosition(BaseModel):
    """1-indexed cursor. Values past the end of the document are clamped, not rejected."""

    text: str = ""
    line_number: int = Field(default=1, ge=1)
    column: int = Field(default=1, ge=1)


class AutocompleteRequest(CursorPosition):
    version: Optional[int | str] = None
    profile_catalog: Optional[dict[str, Any]] = None
    node_type_suggestions: list[str] = []
    link_type_suggestions: list[str] = []
    spec: Optional[AutocompleteSpecSchema] = None


class EditingContextSchema(BaseModel):
    kind: ContextKind
    section: Section
    prefix: str = ""
    endpoint: Optional[Endpoint] = None


class CompletionItem(BaseModel):
    label: str
    insert_text: str
    insert_as_snippet: bool = False
    documentation: str = ""
    trigger_suggest: bool = False
    command_title: str = ""


class AutocompleteResponse(BaseModel):
    context: EditingContextSchema
    suggestions: list[CompletionItem] = []


class KeyPressRequest(CursorPosition):
    key: Literal["enter", "backspace"]

    @field_validator("key", mode="before")
    @classmethod
    def normalize_key(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class EnterKeyPlanResponse(BaseModel):
    should_handle: bool
    edit_id: str = ""
    insert_text: str = ""
    trigger_source: str = "enter"


class BackspaceKeyPlanResponse(BaseModel):
    should_handle: bool
    edit_id: str = ""
    delete_start_column: int
    delete_end_column: int
    trigger_source: str = "backspace"


class DiagnosticSchema(BaseModel):
    message: str
    severity: str = "error"
    source: Optional[str] = None
    line_number: Optional[int] = None
    end_line_number: Optional[int] = None
    column: Optional[int] = None
    end_column: Optional[int] = None


class MarkerSchema(BaseModel):
    severity: MarkerSeverity
    message: str
    source: str
    start_line_number: int
    start_column: int
    end_line_number: int
    end_column: int
