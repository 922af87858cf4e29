"""
Dependency graph DTOs.

Rules:
- Import only stdlib and typing (no linkprune.* imports)
- Pure data structures only
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Reversed import graph: module path -> paths of the modules that import it.
ImportGraph = dict[str, set[str]]


@dataclass(frozen=True)
class PruneResult:
    """
    Result of one pruning pass.

    retained_graph and purged_modules partition the filtered input graph's
    keys; no module appears in both.
    """

    retained_graph: ImportGraph = field(default_factory=dict)
    purged_modules: ImportGraph = field(default_factory=dict)

    def purged_paths(self) -> list[str]:
        """Purged module paths in graph order."""
        return list(self.purged_modules)

    def is_purged(self, module_path: str) -> bool:
        return module_path in self.purged_modules
