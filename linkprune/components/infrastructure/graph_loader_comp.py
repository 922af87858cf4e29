"""
Loading the bundler's dependency report into a reversed import graph.

Two JSON shapes are accepted:

- A plain mapping `{"module/path.js": ["importer.js", ...], ...}`.
- Webpack stats (`{"modules": [{"identifier": ..., "reasons": [{"moduleIdentifier": ...}]}]}`),
  where loader prefixes (`loader!loader!/path`) are stripped from identifiers.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from linkprune.helpers.dto.graph_dto import ImportGraph
from linkprune.helpers.exceptions import LinkPruneError
from linkprune.helpers.paths_helper import normalize_path

logger = logging.getLogger(__name__)


def strip_loader_prefix(identifier: str) -> str:
    """`/app/node_modules/loader.js!/app/src/x.ts` -> `/app/src/x.ts`"""
    return identifier.rsplit("!", 1)[-1]


def webpack_stats_to_graph(stats: dict[str, Any]) -> ImportGraph:
    graph: ImportGraph = {}
    for module in stats.get("modules") or []:
        identifier = module.get("identifier") or module.get("name")
        if not identifier:
            continue
        importers = set()
        for reason in module.get("reasons") or []:
            importer = reason.get("moduleIdentifier")
            if importer:
                importers.add(normalize_path(strip_loader_prefix(importer)))
        graph[normalize_path(strip_loader_prefix(identifier))] = importers
    return graph


def graph_from_json(data: Any) -> ImportGraph:
    """
    Build an ImportGraph from decoded JSON.

    Raises:
        LinkPruneError: The data is neither a mapping of lists nor webpack stats.
    """
    if isinstance(data, dict) and isinstance(data.get("modules"), list):
        return webpack_stats_to_graph(data)
    if not isinstance(data, dict):
        raise LinkPruneError("Dependency graph JSON must be an object")

    graph: ImportGraph = {}
    for module, importers in data.items():
        if not isinstance(importers, list):
            raise LinkPruneError(f"Importers of {module} must be a list, got {type(importers).__name__}")
        graph[normalize_path(module)] = {normalize_path(str(importer)) for importer in importers}
    return graph


def load_dependency_graph(path: str | Path) -> ImportGraph:
    """
    Read a dependency graph file (plain reversed map or webpack stats).

    Raises:
        LinkPruneError: The file cannot be read, is not JSON, or has the wrong shape.
    """
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise LinkPruneError(f"Invalid dependency graph JSON in {path}: {e}") from e
    except OSError as e:
        raise LinkPruneError(f"Cannot read dependency graph {path}: {e}") from e
    graph = graph_from_json(data)
    logger.info(f"[treeshake] Loaded dependency graph with {len(graph)} module(s) from {path}")
    return graph
