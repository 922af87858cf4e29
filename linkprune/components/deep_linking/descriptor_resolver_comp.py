"""
Module descriptor resolution for annotated page classes.

Every annotated page `pages/home/home.ts` is packaged by a sibling descriptor
`pages/home/home.module.ts` whose single registrar class (`@NgModule`) is what
the router loads. The resolver finds that class and computes the three
mode-dependent strings of a HydratedRouteEntry from one compiled-mode flag.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from linkprune.components.infrastructure.file_store_comp import FileStore
from linkprune.components.parsing.source_scanner_comp import find_classes_with_annotation
from linkprune.components.parsing.ts_syntax_comp import parse_source
from linkprune.helpers.dto.config_dto import BuildConfig
from linkprune.helpers.dto.route_dto import HydratedRouteEntry, RouteEntry
from linkprune.helpers.exceptions import CardinalityError, DescriptorNotFoundError
from linkprune.helpers.paths_helper import change_extension, import_path_between, strip_extension

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedDescriptor:
    """Mode-adjusted location and registrar name of a module descriptor."""

    descriptor_path: str
    registrar_class_name: str
    module_path_relative: str
    exported_class_name: str
    absolute_module_path: str


class DescriptorResolver:
    """Resolves route entries against their sibling module descriptors."""

    def __init__(self, config: BuildConfig, file_store: FileStore) -> None:
        self._config = config
        self._files = file_store

    def descriptor_path_for(self, class_file: str) -> str:
        """`pages/home/home.ts` -> `pages/home/home.module.ts` (with the configured suffix)."""
        return change_extension(class_file, self._config.descriptor_suffix)

    def registrar_class_name(self, descriptor_path: str, content: str) -> str:
        """
        Name of the single registrar class declared in a descriptor.

        Raises:
            CardinalityError: Zero or several registrar classes.
        """
        parsed = parse_source(content, descriptor_path)
        registrars = find_classes_with_annotation(parsed, self._config.registrar_annotation)
        if len(registrars) != 1:
            raise CardinalityError(
                what=f"class decorated with @{self._config.registrar_annotation}",
                expected=1,
                found=len(registrars),
                path=descriptor_path,
            )
        return registrars[0].class_name

    def resolve_descriptor(self, class_file: str) -> ResolvedDescriptor:
        """
        Locate and read the descriptor for an annotated class file.

        Raises:
            DescriptorNotFoundError: No descriptor in the file store.
            CardinalityError: The descriptor does not declare exactly one registrar.
        """
        descriptor_path = self.descriptor_path_for(class_file)
        content = self._files.get(descriptor_path)
        if content is None:
            raise DescriptorNotFoundError(class_file, descriptor_path)

        registrar = self.registrar_class_name(descriptor_path, content)
        config = self._config
        stem = strip_extension(descriptor_path)
        if config.compiled_mode:
            absolute_path = f"{stem}{config.compiled_suffix}.ts"
            import_target = f"{stem}{config.compiled_suffix}"
            exported = f"{registrar}{config.compiled_class_suffix}"
        else:
            absolute_path = descriptor_path
            import_target = stem
            exported = registrar

        return ResolvedDescriptor(
            descriptor_path=descriptor_path,
            registrar_class_name=registrar,
            module_path_relative=import_path_between(config.root_descriptor_path, import_target),
            exported_class_name=exported,
            absolute_module_path=absolute_path,
        )

    def resolve(self, route: RouteEntry) -> HydratedRouteEntry:
        resolved = self.resolve_descriptor(route.file_path)
        logger.debug(
            f"[deep-linking] {route.class_name} -> {resolved.module_path_relative}#{resolved.exported_class_name}"
        )
        return HydratedRouteEntry.from_route(
            route,
            module_path_relative=resolved.module_path_relative,
            exported_class_name=resolved.exported_class_name,
            absolute_module_path=resolved.absolute_module_path,
        )
