"""
Route metadata extraction from route annotations.

Reads `name`, `segment`, `priority` and `defaultHistory` out of the option
object of each route annotation (in any order) and applies defaults:

- name           -> the class name
- segment        -> None
- priority       -> "low"
- defaultHistory -> () ; an explicit [] is kept as given

String values lose every quote character and are trimmed. Non-literal values
(identifiers, member expressions) keep their source text.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from tree_sitter import Node

from linkprune.components.parsing.source_scanner_comp import ScannedClass, scan_annotated_classes
from linkprune.components.parsing.ts_syntax_comp import (
    ParsedSource,
    array_elements,
    is_string_like,
    literal_text,
    object_properties,
    parse_source,
)
from linkprune.helpers.dto.config_dto import BuildConfig
from linkprune.helpers.dto.route_dto import ROUTE_PRIORITIES, HydratedRouteEntry, RouteEntry
from linkprune.helpers.exceptions import AnnotationParseError, RouteValidationError

logger = logging.getLogger(__name__)

NON_SCALAR_TYPES = frozenset(
    {"object", "array", "arrow_function", "function_expression", "function", "class", "call_expression"}
)
NULL_TYPES = frozenset({"null", "undefined"})


def extract_routes(text: str, path: str, config: BuildConfig) -> list[RouteEntry]:
    """
    Extract every route declared in one source file.

    Raises:
        CardinalityError: A class carries two route annotations.
        AnnotationParseError: An annotation's options are malformed.
    """
    parsed = parse_source(text, path)
    scanned = scan_annotated_classes(parsed, config.route_annotation)
    routes = [route_from_class(parsed, item) for item in scanned]
    if routes:
        logger.debug(f"[deep-linking] {path}: {len(routes)} route(s) {[r.name for r in routes]}")
    return routes


def route_from_class(parsed: ParsedSource, scanned: ScannedClass) -> RouteEntry:
    options = _annotation_options(parsed, scanned)
    where = f"class {scanned.class_name} in {parsed.path}"

    name = scanned.class_name
    if "name" in options:
        name = _string_field(parsed, options["name"], "name", where)

    segment = None
    if "segment" in options and options["segment"].type not in NULL_TYPES:
        segment = _string_field(parsed, options["segment"], "segment", where)

    priority = "low"
    if "priority" in options:
        priority = _string_field(parsed, options["priority"], "priority", where)
        if priority not in ROUTE_PRIORITIES:
            raise AnnotationParseError(
                f"The 'priority' attribute of {where} must be one of {list(ROUTE_PRIORITIES)}, got '{priority}'"
            )

    default_history: tuple[str, ...] = ()
    if "defaultHistory" in options:
        default_history = _history_field(parsed, options["defaultHistory"], where)

    return RouteEntry(
        class_name=scanned.class_name,
        file_path=parsed.path,
        name=name,
        segment=segment,
        priority=priority,  # type: ignore[arg-type]
        default_history=default_history,
        raw_annotation_text=parsed.text_of(scanned.annotation.node),
    )


def _annotation_options(parsed: ParsedSource, scanned: ScannedClass) -> dict[str, Node]:
    """Option object of the annotation as key -> value node; empty when called bare."""
    arguments = scanned.arguments
    if not arguments:
        return {}
    if len(arguments) > 1 or arguments[0].type != "object":
        raise AnnotationParseError(
            f"The route annotation on class {scanned.class_name} in {parsed.path} "
            f"must take a single object literal argument"
        )
    options: dict[str, Node] = {}
    for key, value, _ in object_properties(parsed, arguments[0]):
        if key in options:
            raise AnnotationParseError(
                f"The '{key}' attribute is declared twice on class {scanned.class_name} in {parsed.path}"
            )
        options[key] = value
    return options


def _string_field(parsed: ParsedSource, value: Node, attribute: str, where: str) -> str:
    if value.type in NON_SCALAR_TYPES:
        raise AnnotationParseError(f"The '{attribute}' attribute of {where} must be a string, got {value.type}")
    return literal_text(parsed, value)


def _history_field(parsed: ParsedSource, value: Node, where: str) -> tuple[str, ...]:
    if value.type != "array":
        raise AnnotationParseError(
            f"The 'defaultHistory' attribute of {where} must be an array of strings, got {value.type}"
        )
    history = []
    for element in array_elements(value):
        if not is_string_like(element):
            raise AnnotationParseError(
                f"The 'defaultHistory' attribute of {where} must only contain string literals, "
                f"found {parsed.text_of(element)}"
            )
        history.append(literal_text(parsed, element))
    return tuple(history)


def validate_routes(entries: Iterable[HydratedRouteEntry]) -> None:
    """
    Reject the whole batch on the first entry that cannot be routed to.

    An entry needs a non-empty name and either a class target or both a module
    path and an exported class name.

    Raises:
        RouteValidationError: The first invalid entry, naming its file and class.
    """
    for entry in entries:
        if not entry.name:
            raise RouteValidationError(
                f"The route on class {entry.class_name} in {entry.file_path} has an empty 'name'"
            )
        has_module_target = bool(entry.module_path_relative) and bool(entry.exported_class_name)
        if not entry.class_name and not has_module_target:
            raise RouteValidationError(
                f"The route '{entry.name}' in {entry.file_path} has neither a class nor a module path and named export"
            )
