"""
Optimization package.
"""

from .graph_pruner_comp import GraphPruner, calculate_unused_components, is_eligible_module
from .import_rewriter_comp import (
    purge_component_factory_import_and_usage,
    purge_provider_class_name_from_root_method,
    purge_provider_controller_import_and_usage,
    purge_unused_imports_and_exports_from_index,
)

__all__ = [
    "GraphPruner",
    "calculate_unused_components",
    "is_eligible_module",
    "purge_component_factory_import_and_usage",
    "purge_provider_class_name_from_root_method",
    "purge_provider_controller_import_and_usage",
    "purge_unused_imports_and_exports_from_index",
]
