"""
Route registry construction and serialization.

build_registry() joins every route found under the source directory with its
module descriptor, in file discovery order (stable, not sorted).
serialize_registry() renders the result as the object literal that is
spliced into the registration site:

    {
      links: [
        { loadChildren: '../pages/home/home.module#HomePageModule', name: 'HomePage', segment: null, priority: 'low', defaultHistory: [] },
        ...
      ]
    }

Whitespace is part of the contract; patched files are compared byte for byte.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from tree_sitter import Node

from linkprune.components.deep_linking.descriptor_resolver_comp import DescriptorResolver
from linkprune.components.infrastructure.file_store_comp import FileStore
from linkprune.components.parsing.route_extractor_comp import extract_routes, validate_routes
from linkprune.components.parsing.ts_syntax_comp import (
    ParsedSource,
    array_elements,
    literal_text,
    object_properties,
    parse_source,
)
from linkprune.helpers.dto.config_dto import BuildConfig
from linkprune.helpers.dto.route_dto import HydratedRouteEntry
from linkprune.helpers.exceptions import AnnotationParseError
from linkprune.helpers.paths_helper import is_within

logger = logging.getLogger(__name__)

EMPTY_REGISTRY = "{\n  links: [\n  ]\n}"


def discover_page_sources(file_store: FileStore, config: BuildConfig) -> list[str]:
    """TypeScript sources under src_dir that may declare routes, in store order."""
    sources = []
    for path in file_store.paths((".ts",)):
        if path.endswith(".d.ts") or path.endswith(config.descriptor_suffix):
            continue
        if config.compiled_factory_marker in path:
            continue
        if is_within(path, config.src_dir):
            sources.append(path)
    return sources


def build_registry(file_store: FileStore, config: BuildConfig) -> list[HydratedRouteEntry]:
    """
    Discover, hydrate and validate every route in the project.

    Raises:
        LinkPruneError: Any extraction, resolution or validation failure aborts the batch.
    """
    resolver = DescriptorResolver(config, file_store)
    entries: list[HydratedRouteEntry] = []
    for path in discover_page_sources(file_store, config):
        content = file_store.get_content(path)
        if config.route_annotation not in content:
            continue
        for route in extract_routes(content, path, config):
            entries.append(resolver.resolve(route))

    validate_routes(entries)
    logger.info(f"[deep-linking] Found {len(entries)} route(s) under {config.src_dir}")
    return entries


def _quote(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def serialize_entry(entry: HydratedRouteEntry) -> str:
    segment = _quote(entry.segment) if entry.segment is not None else "null"
    history = ", ".join(_quote(item) for item in entry.default_history)
    return (
        f"{{ loadChildren: {_quote(entry.load_children)}, name: {_quote(entry.name)}, "
        f"segment: {segment}, priority: {_quote(entry.priority)}, defaultHistory: [{history}] }}"
    )


def serialize_registry(entries: Sequence[HydratedRouteEntry]) -> str:
    """Render the registry object literal (no trailing newline)."""
    if not entries:
        return EMPTY_REGISTRY
    body = ",\n".join(f"    {serialize_entry(entry)}" for entry in entries)
    return f"{{\n  links: [\n{body}\n  ]\n}}"


def _string_value(parsed: ParsedSource, node: Node) -> str:
    """Decoded value of a string literal; other nodes fall back to literal_text."""
    if node.type != "string":
        return literal_text(parsed, node)
    parts = []
    for child in node.named_children:
        text = parsed.text_of(child)
        if child.type == "escape_sequence":
            text = text[1:]
        parts.append(text)
    return "".join(parts)


def parse_registry_text(text: str) -> list[dict[str, Any]]:
    """
    Read serialized registry text back into plain dicts.

    Each dict has loadChildren, name, segment (None for null), priority and
    defaultHistory (a list).

    Raises:
        AnnotationParseError: The text is not a `{ links: [...] }` object literal.
    """
    parsed = parse_source(f"const registry = {text};", "<registry>")
    registry = next(parsed.iter_nodes(("object",)), None)
    if registry is None:
        raise AnnotationParseError("Registry text is not an object literal")

    links = {key: value for key, value, _ in object_properties(parsed, registry)}.get("links")
    if links is None or links.type != "array":
        raise AnnotationParseError("Registry text has no 'links' array")

    result = []
    for element in array_elements(links):
        if element.type != "object":
            raise AnnotationParseError(f"Registry link is not an object literal: {parsed.text_of(element)}")
        fields = {key: value for key, value, _ in object_properties(parsed, element)}
        segment = fields.get("segment")
        history = fields.get("defaultHistory")
        result.append(
            {
                "loadChildren": _string_value(parsed, fields["loadChildren"]) if "loadChildren" in fields else None,
                "name": _string_value(parsed, fields["name"]) if "name" in fields else None,
                "segment": None if segment is None or segment.type == "null" else _string_value(parsed, segment),
                "priority": _string_value(parsed, fields["priority"]) if "priority" in fields else None,
                "defaultHistory": (
                    [_string_value(parsed, item) for item in array_elements(history)] if history is not None else []
                ),
            }
        )
    return result
