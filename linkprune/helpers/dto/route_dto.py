"""
Route domain DTOs.

Data transfer objects for routes discovered on annotated page classes.

Rules:
- Import only stdlib and typing (no linkprune.* imports)
- Pure data structures only (no I/O, no parsing, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

RoutePriority = Literal["low", "high"]

ROUTE_PRIORITIES: tuple[RoutePriority, ...] = ("low", "high")


@dataclass(frozen=True)
class RouteEntry:
    """
    One route declared by a route annotation on a class.

    raw_annotation_text is the verbatim source slice of the annotation. It is
    kept for diagnostics and never parsed again.
    """

    class_name: str
    file_path: str
    name: str
    segment: str | None = None
    priority: RoutePriority = "low"
    default_history: tuple[str, ...] = ()
    raw_annotation_text: str = ""


@dataclass(frozen=True)
class HydratedRouteEntry:
    """
    A RouteEntry joined with its resolved module descriptor.

    The three resolution fields are computed together from one compiled-mode
    flag:
    - module_path_relative: import specifier from the root descriptor's directory
    - exported_class_name: registrar class name (NgFactory-suffixed when compiled)
    - absolute_module_path: descriptor path on disk (.ngfactory.ts when compiled)

    Built once per build pass and discarded afterwards.
    """

    class_name: str
    file_path: str
    name: str
    segment: str | None
    priority: RoutePriority
    default_history: tuple[str, ...]
    raw_annotation_text: str
    module_path_relative: str
    exported_class_name: str
    absolute_module_path: str

    @classmethod
    def from_route(
        cls,
        route: RouteEntry,
        module_path_relative: str,
        exported_class_name: str,
        absolute_module_path: str,
    ) -> HydratedRouteEntry:
        return cls(
            class_name=route.class_name,
            file_path=route.file_path,
            name=route.name,
            segment=route.segment,
            priority=route.priority,
            default_history=route.default_history,
            raw_annotation_text=route.raw_annotation_text,
            module_path_relative=module_path_relative,
            exported_class_name=exported_class_name,
            absolute_module_path=absolute_module_path,
        )

    @property
    def load_children(self) -> str:
        """The `path#ExportName` reference the router loads lazily."""
        return f"{self.module_path_relative}#{self.exported_class_name}"


@dataclass(frozen=True)
class DeepLinkResult:
    """Result of one deep linking pass."""

    entries: tuple[HydratedRouteEntry, ...]
    registry_text: str
    target_path: str
    replaced_existing: bool
