"""
Workflow for generating the deep link registry and writing it into the app.

ARCHITECTURE:
- This is a PURE WORKFLOW that takes all dependencies as parameters
- Does NOT load configuration; callers pass a BuildConfig
- Reads and writes source text only through the FileStore

USAGE:
    from linkprune.workflows.deep_linking.deep_linking_wf import run_deep_linking

    result = run_deep_linking(file_store=store, config=build_config)
    store.write_dirty()
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from linkprune.components.deep_linking.registration_patcher_comp import (
    existing_registry_text,
    patch_compiled_factory,
    patch_registration_site,
)
from linkprune.components.deep_linking.registry_builder_comp import (
    build_registry,
    parse_registry_text,
    serialize_registry,
)
from linkprune.components.infrastructure.file_store_comp import FileStore
from linkprune.helpers.dto.config_dto import BuildConfig
from linkprune.helpers.dto.route_dto import DeepLinkResult, HydratedRouteEntry
from linkprune.helpers.exceptions import AnnotationParseError

logger = logging.getLogger(__name__)


def extract_deep_link_config(file_store: FileStore, config: BuildConfig) -> list[HydratedRouteEntry]:
    """Discover, resolve and validate every route under the source directory."""
    return build_registry(file_store, config)


def _describe_existing(existing: str) -> str:
    try:
        return f"{len(parse_registry_text(existing))} link(s)"
    except AnnotationParseError:
        return "a hand-written config object"


def update_registration_site(
    file_store: FileStore, config: BuildConfig, entries: Sequence[HydratedRouteEntry]
) -> DeepLinkResult:
    """
    Splice the serialized registry into the registration site and store the result.

    Source mode patches the root descriptor's forRoot() call; compiled mode
    patches the registry field of the root factory.

    Raises:
        FileNotInStoreError: The target file is not in the store.
        CardinalityError / AnnotationParseError: The target has no unique registration site.
    """
    registry_text = serialize_registry(entries)
    target = config.registration_target_path
    content = file_store.get_content(target)

    replaced_existing = False
    if config.compiled_mode:
        patched = patch_compiled_factory(content, registry_text, config, target)
    else:
        existing = existing_registry_text(content, config, target)
        if existing is not None:
            replaced_existing = True
            logger.warning(
                f"[deep-linking] {target} already passes {_describe_existing(existing)} to "
                f"{config.framework_module}.{config.framework_root_method}(); it will be replaced"
            )
        patched = patch_registration_site(content, registry_text, config, target)

    file_store.set(target, patched)
    logger.info(f"[deep-linking] Wrote {len(entries)} link(s) into {target}")
    return DeepLinkResult(
        entries=tuple(entries),
        registry_text=registry_text,
        target_path=target,
        replaced_existing=replaced_existing,
    )


def run_deep_linking(file_store: FileStore, config: BuildConfig) -> DeepLinkResult:
    """Full deep linking pass: extract, serialize, patch."""
    entries = extract_deep_link_config(file_store, config)
    return update_registration_site(file_store, config, entries)
