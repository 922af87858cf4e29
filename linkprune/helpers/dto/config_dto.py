"""
Config domain DTOs.

BuildConfig is the explicit configuration struct handed to every component.
Components never read environment variables; ConfigService does that once and
produces one of these.

Rules:
- Import only stdlib and typing (no linkprune.* imports)
- Pure data structures only (no I/O, no env lookups)
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field


def _with_extension(path: str, extension: str) -> str:
    return posixpath.splitext(path)[0] + extension


@dataclass(frozen=True)
class ProviderSpec:
    """One framework-provided on-demand service (overlay controller) and its UI component."""

    name: str  # e.g. "action-sheet"
    class_name: str  # e.g. "ActionSheetController"
    controller_path: str  # <framework>/components/action-sheet/action-sheet-controller.js
    component_path: str  # <framework>/components/action-sheet/action-sheet-component.js
    component_factory_path: str  # <framework>/components/action-sheet/action-sheet-component.ngfactory.js


@dataclass(frozen=True)
class BuildConfig:
    """
    Configuration for one build pass.

    Paths are POSIX strings. ConfigService resolves them against root_dir, so
    they are absolute whenever root_dir is.

    Fields:
        root_dir: Project root.
        src_dir: Application source directory scanned for route annotations.
        root_descriptor_path: The app's root module descriptor (app.module.ts).
        app_entry_point: Bootstrap file (main.ts).
        framework_dir: Installed framework package directory.
        framework_entry_point: Framework re-export barrel (index.js).
        compiled_mode: AOT build; factories replace runtime-loaded descriptors.
        descriptor_suffix: Replaces a page file's extension to find its descriptor.
        compiled_suffix: Stem suffix of compiled factory files.
        compiled_class_suffix: Suffix appended to registrar names in compiled mode.
        route_annotation: Decorator name declaring a route.
        registrar_annotation: Decorator name declaring a module registrar.
        framework_module: Class whose root method receives the registry.
        framework_root_method: Name of that method.
        compiled_registry_field: Factory field receiving the registry in compiled mode.
        compiled_factory_marker: Substring identifying compiled factory modules.
        providers: Catalogue of on-demand services for the provider pass.
    """

    root_dir: str
    src_dir: str
    root_descriptor_path: str
    app_entry_point: str
    framework_dir: str
    framework_entry_point: str
    compiled_mode: bool = False
    descriptor_suffix: str = ".module.ts"
    compiled_suffix: str = ".ngfactory"
    compiled_class_suffix: str = "NgFactory"
    route_annotation: str = "IonicPage"
    registrar_annotation: str = "NgModule"
    framework_module: str = "IonicModule"
    framework_root_method: str = "forRoot"
    compiled_registry_field: str = "_DeepLinkConfigToken"
    compiled_factory_marker: str = ".ngfactory."
    providers: tuple[ProviderSpec, ...] = field(default_factory=tuple)

    @property
    def framework_components_dir(self) -> str:
        return posixpath.join(self.framework_dir, "components")

    @property
    def root_factory_path(self) -> str:
        """Compiled factory source of the root descriptor (app.module.ngfactory.ts)."""
        return _with_extension(self.root_descriptor_path, f"{self.compiled_suffix}.ts")

    @property
    def root_factory_module(self) -> str:
        """Compiled root factory as it appears in the bundler's graph (.js)."""
        return _with_extension(self.root_descriptor_path, f"{self.compiled_suffix}.js")

    @property
    def registration_target_path(self) -> str:
        """The file the registry is spliced into for the current mode."""
        return self.root_factory_path if self.compiled_mode else self.root_descriptor_path

    @property
    def graph_required_modules(self) -> frozenset[str]:
        """Modules the pruner must always retain: bootstrap file, root descriptor, root factory."""
        return frozenset(
            {
                _with_extension(self.app_entry_point, ".js"),
                _with_extension(self.root_descriptor_path, ".js"),
                self.root_factory_module,
            }
        )
