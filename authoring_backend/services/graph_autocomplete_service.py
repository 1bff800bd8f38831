import logging
from typing import Optional

from authoring_backend.schemas.autocomplete_schema import (
    AutocompleteRequest,
    AutocompleteResponse,
    BackspaceKeyPlanResponse,
    CompletionItem,
    EditingContextSchema,
    EnterKeyPlanResponse,
    KeyPressRequest,
)
from authoring_engine.graph_yaml.autocomplete_spec import DEFAULT_AUTOCOMPLETE_SPEC, AutocompleteSpec, describe_key
from authoring_engine.graph_yaml.catalog import create_profile_catalog
from authoring_engine.graph_yaml.insert_text import build_insert_text, resolve_completion_command_behavior
from authoring_engine.graph_yaml.key_press import plan_backspace_key_action, plan_enter_key_action
from authoring_engine.graph_yaml.lines import clamp_line_number, pad_lines_to
from authoring_engine.graph_yaml.metadata import (
    CompletionMeta,
    CompletionMetaCache,
    LatestDocumentState,
    create_empty_completion_meta_cache,
    resolve_metadata_cache,
)
from authoring_engine.graph_yaml.runtime import resolve_autocomplete_at_position
from authoring_engine.graph_yaml.types import EditingContext
from settings import settings

LOGGER = logging.getLogger(__name__)


class GraphAutocompleteSession:
    """Completion state for one open document.

    Holds a single-slot metadata cache keyed by the caller's version token. Use one session
    per document; a request for another (version, text) pair replaces the cached entry.
    """

    def __init__(self, indent_size: Optional[int] = None):
        self.indent_size = indent_size or settings.AUTOCOMPLETE_INDENT_SIZE
        self._cache: CompletionMetaCache = create_empty_completion_meta_cache()
        self._latest_document_state: Optional[LatestDocumentState] = None

    @property
    def cache(self) -> CompletionMetaCache:
        return self._cache

    def invalidate(self) -> None:
        self._cache = create_empty_completion_meta_cache()
        self._latest_document_state = None

    def update_document_state(self, latest_document_state: Optional[LatestDocumentState]) -> None:
        """Share a parse done elsewhere (e.g. by validation) so the next cache miss can skip reparsing."""
        self._latest_document_state = latest_document_state

    def autocomplete(self, request: AutocompleteRequest) -> AutocompleteResponse:
        meta, self._cache = resolve_metadata_cache(
            request.text,
            request.version,
            self._cache,
            self._latest_document_state,
        )
        spec = request.spec.to_autocomplete_spec() if request.spec else DEFAULT_AUTOCOMPLETE_SPEC

        runtime, suggestions = resolve_autocomplete_at_position(
            request.text,
            request.line_number,
            request.column,
            meta,
            profile_catalog=create_profile_catalog(request.profile_catalog),
            node_type_suggestions=request.node_type_suggestions,
            link_type_suggestions=request.link_type_suggestions,
            spec=spec,
            indent_size=self.indent_size,
            fallback_node_types=settings.default_node_types,
            fallback_link_types=settings.default_link_types,
        )

        items = [
            self._build_completion_item(runtime.context, suggestion, spec, meta, request.line_number)
            for suggestion in suggestions
        ]
        LOGGER.debug(
            "Graph YAML autocomplete: kind=%s section=%s count=%d",
            runtime.context.kind.value,
            runtime.context.section.value,
            len(items),
        )
        return AutocompleteResponse(
            context=EditingContextSchema(
                kind=runtime.context.kind,
                section=runtime.context.section,
                prefix=runtime.context.prefix,
                endpoint=runtime.context.endpoint,
            ),
            suggestions=items,
        )

    def plan_key_press(self, request: KeyPressRequest) -> EnterKeyPlanResponse | BackspaceKeyPlanResponse:
        if request.key == "enter":
            plan = plan_enter_key_action(request.text, request.line_number, request.column, self.indent_size)
            LOGGER.debug("Enter key plan: handle=%s edit=%s", plan.should_handle, plan.edit_id)
            return EnterKeyPlanResponse(
                should_handle=plan.should_handle,
                edit_id=plan.edit_id,
                insert_text=plan.insert_text,
                trigger_source=plan.trigger_source,
            )

        plan = plan_backspace_key_action(request.text, request.line_number, request.column, self.indent_size)
        LOGGER.debug("Backspace key plan: handle=%s edit=%s", plan.should_handle, plan.edit_id)
        return BackspaceKeyPlanResponse(
            should_handle=plan.should_handle,
            edit_id=plan.edit_id,
            delete_start_column=plan.delete_start_column,
            delete_end_column=plan.delete_end_column,
            trigger_source=plan.trigger_source,
        )

    def _build_completion_item(
        self,
        context: EditingContext,
        suggestion: str,
        spec: AutocompleteSpec,
        meta: CompletionMeta,
        line_number: int,
    ) -> CompletionItem:
        lines = pad_lines_to(meta.lines, line_number)
        safe_line_number = clamp_line_number(line_number, len(lines))
        insert = build_insert_text(
            context,
            suggestion,
            spec=spec,
            indent_size=self.indent_size,
            lines=lines,
            line_number=safe_line_number,
            current_line=lines[safe_line_number - 1],
        )
        command = resolve_completion_command_behavior(context, suggestion)
        return CompletionItem(
            label=suggestion,
            insert_text=insert.insert_text,
            insert_as_snippet=insert.insert_as_snippet,
            documentation=describe_key(command.key_token),
            trigger_suggest=command.should_trigger_suggest,
            command_title=command.title,
        )
