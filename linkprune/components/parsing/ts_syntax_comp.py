"""
TypeScript syntax tree access built on tree-sitter.

Parses source text into a concrete syntax tree and offers the handful of
structural queries the scanner, resolver and patcher need: class
declarations, their decorators, call arguments, object literal properties,
array elements and literal text. Byte offsets from the tree are used for
splicing, so ParsedSource keeps the exact UTF-8 buffer it parsed.

Parsers are cached per thread; tree-sitter parsers must not be shared across
threads, while scans of different files may run in parallel.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

logger = logging.getLogger(__name__)

TS_LANGUAGE = Language(tree_sitter_typescript.language_typescript())

CLASS_DECLARATION_TYPES = frozenset({"class_declaration", "abstract_class_declaration"})
QUOTE_CHARACTERS = ("'", '"', "`")

_local = threading.local()


def _parser() -> Parser:
    parser = getattr(_local, "parser", None)
    if parser is None:
        parser = Parser(TS_LANGUAGE)
        _local.parser = parser
    return parser


@dataclass(frozen=True)
class ParsedSource:
    """A parsed TypeScript file: its path, the exact bytes parsed, and the tree."""

    path: str
    source: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text_of(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8")

    def iter_nodes(self, types: Iterable[str] | None = None) -> Iterator[Node]:
        return iter_nodes(self.root, types)

    def splice(self, start_byte: int, end_byte: int, replacement: str) -> str:
        """Return the source with bytes [start_byte, end_byte) replaced."""
        return (self.source[:start_byte] + replacement.encode("utf-8") + self.source[end_byte:]).decode("utf-8")


@dataclass(frozen=True)
class DecoratorInfo:
    """A decorator reduced to its callee name and (possibly empty) argument list."""

    node: Node
    name: str
    call: Node | None
    arguments: tuple[Node, ...]


def parse_source(text: str, path: str) -> ParsedSource:
    """Parse TypeScript source text."""
    source = text.encode("utf-8")
    tree = _parser().parse(source)
    if tree.root_node.has_error:
        logger.debug(f"[parser] {path} contains syntax errors; continuing with recovered tree")
    return ParsedSource(path=path, source=source, tree=tree)


def iter_nodes(node: Node, types: Iterable[str] | None = None) -> Iterator[Node]:
    """Pre-order walk of node's subtree, optionally limited to the given node types."""
    wanted = frozenset(types) if types is not None else None
    stack = [node]
    while stack:
        current = stack.pop()
        if wanted is None or current.type in wanted:
            yield current
        stack.extend(reversed(current.children))


def significant_children(node: Node) -> list[Node]:
    """Named children without comments."""
    return [child for child in node.named_children if child.type != "comment"]


def dotted_name(parsed: ParsedSource, node: Node | None) -> str | None:
    """
    Dotted name of an identifier or member expression.

    `IonicModule.forRoot` -> "IonicModule.forRoot", `this.x` -> "this.x";
    anything else (calls, subscripts) -> None.
    """
    if node is None:
        return None
    if node.type in {"identifier", "property_identifier", "type_identifier", "this"}:
        return parsed.text_of(node)
    if node.type == "member_expression":
        obj = dotted_name(parsed, node.child_by_field_name("object"))
        prop = node.child_by_field_name("property")
        if obj is None or prop is None:
            return None
        return f"{obj}.{parsed.text_of(prop)}"
    return None


def name_matches(dotted: str | None, wanted: str) -> bool:
    """True for `wanted` itself or any qualified reference ending in `.wanted`."""
    return dotted is not None and (dotted == wanted or dotted.endswith(f".{wanted}"))


def class_name_of(parsed: ParsedSource, class_node: Node) -> str:
    name_node = class_node.child_by_field_name("name")
    return parsed.text_of(name_node) if name_node is not None else "<anonymous>"


def decorators_of(class_node: Node) -> list[Node]:
    """
    Decorator nodes attached to a class declaration.

    `@Dec export class X` attaches the decorator to the export statement,
    `export @Dec class X` and plain `@Dec class X` attach it to the class.
    """
    decorators: list[Node] = []
    parent = class_node.parent
    if parent is not None and parent.type == "export_statement":
        decorators.extend(child for child in parent.children if child.type == "decorator")
    decorators.extend(child for child in class_node.children if child.type == "decorator")
    return decorators


def decorator_info(parsed: ParsedSource, decorator: Node) -> DecoratorInfo:
    expressions = significant_children(decorator)
    expression = expressions[0] if expressions else None
    if expression is not None and expression.type == "call_expression":
        callee = expression.child_by_field_name("function")
        return DecoratorInfo(
            node=decorator,
            name=dotted_name(parsed, callee) or "",
            call=expression,
            arguments=tuple(call_arguments(expression)),
        )
    return DecoratorInfo(node=decorator, name=dotted_name(parsed, expression) or "", call=None, arguments=())


def call_arguments(call: Node) -> list[Node]:
    arguments = call.child_by_field_name("arguments")
    if arguments is None or arguments.type != "arguments":
        return []
    return significant_children(arguments)


def property_key(parsed: ParsedSource, key: Node) -> str:
    if key.type == "string":
        return literal_text(parsed, key)
    return parsed.text_of(key)


def object_properties(parsed: ParsedSource, obj: Node) -> list[tuple[str, Node, Node]]:
    """
    (key, value, property) triples of an object literal, in source order.

    Shorthand properties (`{ name }`) use the identifier as both key and value.
    Spreads and methods are skipped.
    """
    properties = []
    for member in significant_children(obj):
        if member.type == "pair":
            key = member.child_by_field_name("key")
            value = member.child_by_field_name("value")
            if key is not None and value is not None:
                properties.append((property_key(parsed, key), value, member))
        elif member.type == "shorthand_property_identifier":
            properties.append((parsed.text_of(member), member, member))
    return properties


def array_elements(array: Node) -> list[Node]:
    return significant_children(array)


def is_string_like(node: Node) -> bool:
    """Plain string literals and template strings without substitutions."""
    if node.type == "string":
        return True
    if node.type == "template_string":
        return not any(child.type == "template_substitution" for child in node.children)
    return False


def literal_text(parsed: ParsedSource, node: Node) -> str:
    """Source text of node with every quote character removed, trimmed."""
    text = parsed.text_of(node)
    for quote in QUOTE_CHARACTERS:
        text = text.replace(quote, "")
    return text.strip()
