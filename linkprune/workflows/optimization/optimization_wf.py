"""
Workflow for tree shaking unused framework components out of a build.

ARCHITECTURE:
- This is a PURE WORKFLOW that takes all dependencies as parameters
- The import graph comes from the bundler; the pruner works on its own copy
- Reads and writes source text only through the FileStore

Steps:
1. Prune the reversed import graph from the framework barrel.
2. Drop purged modules' import/export statements from the barrel.
3. For every purged overlay controller, drop it and its component factory
   from the compiled root factory, and its class from the barrel's forRoot
   providers together with the component's barrel entry.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import AbstractSet

from linkprune.components.infrastructure.file_store_comp import FileStore
from linkprune.components.optimization.graph_pruner_comp import GraphPruner
from linkprune.components.optimization.import_rewriter_comp import (
    purge_component_factory_import_and_usage,
    purge_provider_class_name_from_root_method,
    purge_provider_controller_import_and_usage,
    purge_unused_imports_and_exports_from_index,
)
from linkprune.helpers.dto.config_dto import BuildConfig, ProviderSpec
from linkprune.helpers.dto.graph_dto import PruneResult

logger = logging.getLogger(__name__)


def do_optimizations(
    file_store: FileStore, graph: Mapping[str, AbstractSet[str]], config: BuildConfig
) -> PruneResult:
    """Prune the graph and rewrite the barrel and root factory accordingly."""
    result = GraphPruner(config).calculate_unused_components(graph)
    purge_unused_imports(file_store, result, config)
    return result


def purge_unused_imports(file_store: FileStore, result: PruneResult, config: BuildConfig) -> None:
    """
    Apply a PruneResult to the framework barrel and compiled root factory.

    Raises:
        FileNotInStoreError: The framework barrel is not in the store.
    """
    index_path = config.framework_entry_point
    index_content = file_store.get_content(index_path)
    purged = result.purged_paths()
    logger.info(f"[treeshake] Purging {len(purged)} module(s) from {index_path}")
    file_store.set(index_path, purge_unused_imports_and_exports_from_index(index_path, index_content, purged))

    for provider in config.providers:
        if result.is_purged(provider.controller_path):
            purge_unused_provider(file_store, provider, config)


def purge_unused_provider(file_store: FileStore, provider: ProviderSpec, config: BuildConfig) -> None:
    """Remove one unused overlay controller from the root factory and the barrel."""
    factory_path = config.root_factory_module
    factory_content = file_store.get(factory_path)
    if factory_content is None:
        logger.debug(f"[treeshake] {factory_path} not in file store; only the barrel drops {provider.class_name}")
    else:
        updated = purge_component_factory_import_and_usage(
            factory_path, factory_content, provider.component_factory_path
        )
        updated = purge_provider_controller_import_and_usage(factory_path, updated, provider.controller_path)
        file_store.set(factory_path, updated)

    index_path = config.framework_entry_point
    index_content = purge_provider_class_name_from_root_method(
        file_store.get_content(index_path), provider.class_name, config
    )
    index_content = purge_unused_imports_and_exports_from_index(index_path, index_content, [provider.component_path])
    file_store.set(index_path, index_content)
    logger.info(f"[treeshake] Removed unused provider {provider.class_name}")
