"""
Treeshake command: prune unused framework components from a dependency graph.

Architecture:
- Reads the bundler's dependency report (JSON) from disk
- Calls the optimization workflow for all rewriting
- Writes the barrel and root factory back only when --write is given
"""

from __future__ import annotations

import argparse
from pathlib import Path

from linkprune.components.infrastructure.file_store_comp import FileStore
from linkprune.components.infrastructure.graph_loader_comp import load_dependency_graph
from linkprune.components.optimization.graph_pruner_comp import GraphPruner
from linkprune.helpers.exceptions import LinkPruneError
from linkprune.interfaces.cli.cli_ui import TableDisplay, print_error, print_success
from linkprune.interfaces.cli.utils import load_build_config
from linkprune.workflows.optimization.optimization_wf import do_optimizations


def cmd_treeshake(args: argparse.Namespace) -> int:
    """
    Report which framework components and app modules are unreachable.
    With --write, drop them from the framework barrel and the compiled root factory.
    """
    try:
        config = load_build_config(args)
        graph = load_dependency_graph(args.graph)

        if args.write:
            store = FileStore()
            store.add_file(config.framework_entry_point)
            if Path(config.root_factory_module).is_file():
                store.add_file(config.root_factory_module)
            result = do_optimizations(store, graph, config)
            written = store.write_dirty()
        else:
            result = GraphPruner(config).calculate_unused_components(graph)
            written = []

        TableDisplay.show_prune_result(result)
        if args.write:
            print_success(f"Rewrote {len(written)} file(s)")
        return 0
    except (LinkPruneError, OSError) as e:
        print_error(str(e))
        return 1
