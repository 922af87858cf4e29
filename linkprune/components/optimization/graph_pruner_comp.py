"""
Reachability-based pruning of the reversed import graph.

The bundler reports, for every module, the set of modules importing it.
Starting from the framework barrel (whose imports of every component are not
real usage), removing the barrel's edges and cascading through modules left
with no importers finds the framework components and app sources nothing
actually uses.

Only eligible modules take part: by default those inside the framework's
components directory or the app's source directory. The bootstrap file, the
root descriptor and its compiled factory are always retained.

The pruner works on its own copy of the eligible subgraph. The caller's graph
is never mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import AbstractSet

from linkprune.helpers.dto.config_dto import BuildConfig
from linkprune.helpers.dto.graph_dto import ImportGraph, PruneResult
from linkprune.helpers.paths_helper import is_within

logger = logging.getLogger(__name__)


def is_eligible_module(module_path: str, config: BuildConfig) -> bool:
    """Framework components and app sources are prunable; everything else is left alone."""
    return is_within(module_path, config.framework_components_dir) or is_within(module_path, config.src_dir)


class GraphPruner:
    """Single-pass pruner over one import graph."""

    def __init__(self, config: BuildConfig, is_eligible: Callable[[str], bool] | None = None) -> None:
        self._config = config
        self._is_eligible = is_eligible or (lambda path: is_eligible_module(path, config))

    def calculate_unused_components(self, graph: Mapping[str, AbstractSet[str]]) -> PruneResult:
        """Prune from the configured framework entry point, then run the provider pass."""
        return self.prune(graph, self._config.framework_entry_point, include_providers=True)

    def prune(
        self,
        graph: Mapping[str, AbstractSet[str]],
        entry_module: str,
        include_providers: bool = False,
    ) -> PruneResult:
        working = self.filter_graph(graph)
        self.cascade_from(working, entry_module)
        if include_providers:
            self.prune_unused_providers(working)
        result = self.partition(working)
        logger.info(
            f"[treeshake] {len(working)} eligible module(s): "
            f"{len(result.retained_graph)} retained, {len(result.purged_modules)} purged"
        )
        return result

    def filter_graph(self, graph: Mapping[str, AbstractSet[str]]) -> ImportGraph:
        """Eligible modules with copied importer sets; self-edges dropped."""
        return {
            module: {importer for importer in importers if importer != module}
            for module, importers in graph.items()
            if self._is_eligible(module)
        }

    def cascade_from(self, graph: ImportGraph, root: str) -> list[str]:
        """
        Remove root from every importer set, cascading through modules left with none.

        A module becomes a cascade root only when its importer set becomes
        empty. A module still imported by anything, compiled factories
        included, keeps its outgoing edges. Returns the cascade roots in the
        order they were released.
        """
        imports_of: dict[str, list[str]] = {}
        for module, importers in graph.items():
            for importer in importers:
                imports_of.setdefault(importer, []).append(module)

        released: list[str] = []
        pending = [root]
        while pending:
            current = pending.pop()
            for module in imports_of.get(current, ()):
                importers = graph[module]
                if current not in importers:
                    continue
                importers.discard(current)
                if not importers:
                    released.append(module)
                    pending.append(module)
                    logger.debug(f"[treeshake] {module} released by {current}")
        return released

    def release_edge(self, graph: ImportGraph, module: str, importer: str) -> bool:
        """Drop one importer edge and cascade if module is left unimported."""
        importers = graph.get(module)
        if importers is None or importer not in importers:
            return False
        importers.discard(importer)
        if not importers:
            self.cascade_from(graph, module)
        return True

    def prune_unused_providers(self, graph: ImportGraph) -> None:
        """
        Release on-demand service controllers kept alive only by the root factory.

        The compiled root factory instantiates every framework provider, so a
        controller whose only importer is that factory is unused by the app.
        Once a controller is gone its UI component factory is released from
        the root factory too.
        """
        root_factory = self._config.root_factory_module
        for provider in self._config.providers:
            importers = graph.get(provider.controller_path)
            if importers is not None and importers == {root_factory}:
                logger.debug(f"[treeshake] {provider.class_name} is only referenced by {root_factory}")
                self.release_edge(graph, provider.controller_path, root_factory)

        for provider in self._config.providers:
            importers = graph.get(provider.controller_path)
            if importers is not None and not importers:
                self.release_edge(graph, provider.component_factory_path, root_factory)

    def partition(self, graph: ImportGraph) -> PruneResult:
        required = self._config.graph_required_modules
        retained: ImportGraph = {}
        purged: ImportGraph = {}
        for module, importers in graph.items():
            if importers or module in required:
                retained[module] = importers
            else:
                purged[module] = importers
        return PruneResult(retained_graph=retained, purged_modules=purged)


def calculate_unused_components(graph: Mapping[str, AbstractSet[str]], config: BuildConfig) -> PruneResult:
    """Convenience wrapper around GraphPruner(config).calculate_unused_components()."""
    return GraphPruner(config).calculate_unused_components(graph)
