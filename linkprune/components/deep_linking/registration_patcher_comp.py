"""
Registration-site patching.

Splices serialized registry text into the one place the framework reads it:

- Source mode: the third argument of `IonicModule.forRoot(...)` inside the
  `imports` array of the root `@NgModule` class.
- Compiled mode: the right-hand side of `this._DeepLinkConfigToken_N = ...;`
  in the root module's generated factory.

Edits are made on the parsed byte offsets, so every byte outside the
replaced range is preserved.
"""

from __future__ import annotations

import logging
import re

from tree_sitter import Node

from linkprune.components.parsing.source_scanner_comp import find_classes_with_annotation
from linkprune.components.parsing.ts_syntax_comp import (
    ParsedSource,
    call_arguments,
    dotted_name,
    name_matches,
    object_properties,
    parse_source,
)
from linkprune.helpers.dto.config_dto import BuildConfig
from linkprune.helpers.exceptions import AnnotationParseError, CardinalityError

logger = logging.getLogger(__name__)


def find_root_method_call(parsed: ParsedSource, config: BuildConfig) -> Node:
    """
    The single `<FrameworkModule>.<rootMethod>(...)` call in the root module's imports.

    Raises:
        CardinalityError: Not exactly one registrar annotation, `imports` property or root-method call.
        AnnotationParseError: The registrar options or `imports` value have the wrong shape.
    """
    registrar = config.registrar_annotation
    classes = find_classes_with_annotation(parsed, registrar)
    annotation_count = sum(len(item.annotations) for item in classes)
    if annotation_count != 1:
        raise CardinalityError(
            what=f"@{registrar} annotation", expected=1, found=annotation_count, path=parsed.path
        )
    arguments = classes[0].arguments
    if not arguments or arguments[0].type != "object":
        raise AnnotationParseError(f"The @{registrar} annotation in {parsed.path} must take an object literal")

    imports = [value for key, value, _ in object_properties(parsed, arguments[0]) if key == "imports"]
    if len(imports) != 1:
        raise CardinalityError(
            what=f"'imports' property in the @{registrar} options", expected=1, found=len(imports), path=parsed.path
        )
    if imports[0].type != "array":
        raise AnnotationParseError(f"The 'imports' property of @{registrar} in {parsed.path} must be an array")

    wanted = f"{config.framework_module}.{config.framework_root_method}"
    calls = [
        node
        for node in _iter_calls(imports[0])
        if name_matches(dotted_name(parsed, node.child_by_field_name("function")), wanted)
    ]
    if len(calls) != 1:
        raise CardinalityError(what=f"{wanted}() call in 'imports'", expected=1, found=len(calls), path=parsed.path)
    return calls[0]


def _iter_calls(node: Node):
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "call_expression":
            yield current
        stack.extend(reversed(current.children))


def existing_registry_text(content: str, config: BuildConfig, path: str) -> str | None:
    """Source text of the current registry argument if it is an object literal, else None."""
    parsed = parse_source(content, path)
    arguments = call_arguments(find_root_method_call(parsed, config))
    if len(arguments) >= 3 and arguments[2].type == "object":
        return parsed.text_of(arguments[2])
    return None


def has_existing_registry(content: str, config: BuildConfig, path: str) -> bool:
    """True when the root-method call already has an object literal as its third argument."""
    return existing_registry_text(content, config, path) is not None


def patch_registration_site(content: str, registry_text: str, config: BuildConfig, path: str) -> str:
    """
    Put registry_text in the third argument slot of the root-method call.

    `forRoot(MyApp)` -> `forRoot(MyApp, {}, R)`;
    `forRoot(MyApp, cfg)` -> `forRoot(MyApp, cfg, R)`;
    `forRoot(MyApp, cfg, old)` -> `forRoot(MyApp, cfg, R)`.
    """
    parsed = parse_source(content, path)
    call = find_root_method_call(parsed, config)
    arguments = call_arguments(call)
    count = len(arguments)

    if count == 1:
        position = arguments[0].end_byte
        patched = parsed.splice(position, position, f", {{}}, {registry_text}")
    elif count == 2:
        position = arguments[1].end_byte
        patched = parsed.splice(position, position, f", {registry_text}")
    elif count == 3:
        patched = parsed.splice(arguments[2].start_byte, arguments[2].end_byte, registry_text)
    else:
        raise AnnotationParseError(
            f"{parsed.text_of(call.child_by_field_name('function'))}() in {path} takes 1 to 3 arguments, found {count}"
        )
    logger.debug(f"[deep-linking] Patched registration site in {path} ({count} argument(s) before)")
    return patched


def _field_pattern(config: BuildConfig) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(config.compiled_registry_field)}(?:_\d+)?$")


def patch_compiled_factory(content: str, registry_text: str, config: BuildConfig, path: str) -> str:
    """
    Replace the right-hand side of the registry field assignment in a generated factory.

    Raises:
        CardinalityError: Zero or several assignments to the registry field.
    """
    parsed = parse_source(content, path)
    pattern = _field_pattern(config)
    targets = []
    for node in parsed.iter_nodes(("assignment_expression",)):
        left = node.child_by_field_name("left")
        if left is None or left.type != "member_expression":
            continue
        obj = left.child_by_field_name("object")
        prop = left.child_by_field_name("property")
        if obj is not None and obj.type == "this" and prop is not None and pattern.match(parsed.text_of(prop)):
            targets.append(node)

    if len(targets) != 1:
        raise CardinalityError(
            what=f"assignment to this.{config.compiled_registry_field}",
            expected=1,
            found=len(targets),
            path=path,
        )
    right = targets[0].child_by_field_name("right")
    logger.debug(f"[deep-linking] Patched {parsed.text_of(targets[0].child_by_field_name('left'))} in {path}")
    return parsed.splice(right.start_byte, right.end_byte, registry_text)
