"""
Workflows package.
"""

from .deep_linking.deep_linking_wf import extract_deep_link_config, run_deep_linking, update_registration_site
from .optimization.optimization_wf import do_optimizations, purge_unused_imports, purge_unused_provider

__all__ = [
    "do_optimizations",
    "extract_deep_link_config",
    "purge_unused_imports",
    "purge_unused_provider",
    "run_deep_linking",
    "update_registration_site",
]
