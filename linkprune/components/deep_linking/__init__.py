"""
Deep linking package.
"""

from .descriptor_resolver_comp import DescriptorResolver, ResolvedDescriptor
from .registration_patcher_comp import (
    existing_registry_text,
    has_existing_registry,
    patch_compiled_factory,
    patch_registration_site,
)
from .registry_builder_comp import (
    build_registry,
    discover_page_sources,
    parse_registry_text,
    serialize_entry,
    serialize_registry,
)

__all__ = [
    "DescriptorResolver",
    "ResolvedDescriptor",
    "build_registry",
    "discover_page_sources",
    "existing_registry_text",
    "has_existing_registry",
    "parse_registry_text",
    "patch_compiled_factory",
    "patch_registration_site",
    "serialize_entry",
    "serialize_registry",
]
