"""
Source scanner: finds class declarations carrying a given annotation.

Only the requested annotation kind is reported; other decorators stacked on
the same class are ignored. Classes without it are skipped silently.
"""

from __future__ import annotations

from dataclasses import dataclass

from tree_sitter import Node

from linkprune.components.parsing.ts_syntax_comp import (
    CLASS_DECLARATION_TYPES,
    DecoratorInfo,
    ParsedSource,
    class_name_of,
    decorator_info,
    decorators_of,
    name_matches,
    parse_source,
)
from linkprune.helpers.exceptions import CardinalityError


@dataclass(frozen=True)
class ScannedClass:
    """A class declaration and the matching annotations attached to it."""

    class_name: str
    file_path: str
    class_node: Node
    annotations: tuple[DecoratorInfo, ...]

    @property
    def annotation(self) -> DecoratorInfo:
        return self.annotations[0]

    @property
    def arguments(self) -> tuple[Node, ...]:
        return self.annotation.arguments


def find_classes_with_annotation(parsed: ParsedSource, annotation_name: str) -> list[ScannedClass]:
    """Every class carrying at least one `annotation_name` decorator, in source order."""
    found = []
    for class_node in parsed.iter_nodes(CLASS_DECLARATION_TYPES):
        matches = tuple(
            info
            for info in (decorator_info(parsed, d) for d in decorators_of(class_node))
            if name_matches(info.name, annotation_name)
        )
        if matches:
            found.append(
                ScannedClass(
                    class_name=class_name_of(parsed, class_node),
                    file_path=parsed.path,
                    class_node=class_node,
                    annotations=matches,
                )
            )
    return found


def scan_annotated_classes(parsed: ParsedSource, annotation_name: str) -> list[ScannedClass]:
    """
    Classes carrying exactly one `annotation_name` decorator.

    Raises:
        CardinalityError: A class carries the annotation more than once.
    """
    scanned = find_classes_with_annotation(parsed, annotation_name)
    for item in scanned:
        if len(item.annotations) > 1:
            raise CardinalityError(
                what=f"@{annotation_name} annotation on class {item.class_name}",
                expected=1,
                found=len(item.annotations),
                path=parsed.path,
            )
    return scanned


def scan_source(text: str, path: str, annotation_name: str) -> list[ScannedClass]:
    """Parse and scan in one step."""
    return scan_annotated_classes(parse_source(text, path), annotation_name)
