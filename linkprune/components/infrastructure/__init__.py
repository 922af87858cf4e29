"""
Infrastructure package.
"""

from .file_store_comp import FileStore
from .graph_loader_comp import graph_from_json, load_dependency_graph, strip_loader_prefix, webpack_stats_to_graph

__all__ = [
    "FileStore",
    "graph_from_json",
    "load_dependency_graph",
    "strip_loader_prefix",
    "webpack_stats_to_graph",
]
