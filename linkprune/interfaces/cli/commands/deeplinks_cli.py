"""
Deeplinks command: build the deep link registry and optionally write it.

Architecture:
- Loads the source tree into a FileStore (the only disk reads)
- Calls deep linking workflows for all work
- Writes back only when --write is given
"""

from __future__ import annotations

import argparse

from linkprune.components.deep_linking.registry_builder_comp import serialize_registry
from linkprune.components.infrastructure.file_store_comp import FileStore
from linkprune.helpers.exceptions import LinkPruneError
from linkprune.interfaces.cli.cli_ui import InfoPanel, TableDisplay, print_error, print_success, print_warning
from linkprune.interfaces.cli.utils import load_build_config
from linkprune.workflows.deep_linking.deep_linking_wf import extract_deep_link_config, run_deep_linking


def cmd_deeplinks(args: argparse.Namespace) -> int:
    """
    Discover annotated pages under the source directory and print the registry.
    With --write, splice it into the root module (or its factory with --aot).
    """
    try:
        config = load_build_config(args, compiled_mode=True if args.aot else None)
        store = FileStore.load_tree(config.src_dir, suffixes=(".ts",))

        if args.write:
            result = run_deep_linking(store, config)
            entries, registry_text = list(result.entries), result.registry_text
        else:
            entries = extract_deep_link_config(store, config)
            registry_text = serialize_registry(entries)

        TableDisplay.show_routes(entries)
        InfoPanel.show_code("Registry", registry_text)

        if args.write:
            written = store.write_dirty()
            if result.replaced_existing:
                print_warning(f"Replaced an existing deep link config in {result.target_path}")
            print_success(f"Updated {', '.join(written) if written else 'nothing (already up to date)'}")
        return 0
    except LinkPruneError as e:
        print_error(str(e))
        return 1
