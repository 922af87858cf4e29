"""
DTO package.

Cross-layer data contracts. Pure dataclasses, stdlib imports only.
"""

from .config_dto import BuildConfig, ProviderSpec
from .graph_dto import ImportGraph, PruneResult
from .route_dto import ROUTE_PRIORITIES, DeepLinkResult, HydratedRouteEntry, RouteEntry, RoutePriority

__all__ = [
    "ROUTE_PRIORITIES",
    "BuildConfig",
    "DeepLinkResult",
    "HydratedRouteEntry",
    "ImportGraph",
    "ProviderSpec",
    "PruneResult",
    "RouteEntry",
    "RoutePriority",
]
