"""
Rewrites that drop purged modules from the framework barrel and the compiled
root factory.

Every function takes file content and returns new content. A statement that
is not found is not an error: the module may have been removed by an earlier
pass or never been referenced. Running any of these twice is a no-op the
second time.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from linkprune.helpers.dto.config_dto import BuildConfig
from linkprune.helpers.paths_helper import import_path_between, strip_extension

logger = logging.getLogger(__name__)

_NOT_AFTER_IDENTIFIER = r"(?<![\w$.])"
_STATEMENT_END = r"[ \t]*;?[ \t]*(?:\r?\n)?"


def _named_statement_regex(keyword: str, specifier: str) -> re.Pattern[str]:
    """`import { A, B } from './x';` / `export { A } from "./x"` for an exact specifier."""
    return re.compile(
        rf"{_NOT_AFTER_IDENTIFIER}{keyword}\s*\{{[^{{}}]*\}}\s*from\s*(['\"]){re.escape(specifier)}\1{_STATEMENT_END}"
    )


def _wildcard_import_regex(specifier: str) -> re.Pattern[str]:
    """`import * as alias from './x';` capturing alias."""
    return re.compile(
        rf"{_NOT_AFTER_IDENTIFIER}import\s*\*\s*as\s+([\w$]+)\s+from\s*(['\"]){re.escape(specifier)}\2{_STATEMENT_END}"
    )


def purge_unused_imports_and_exports_from_index(
    index_path: str, index_content: str, module_paths: Iterable[str]
) -> str:
    """Delete the named import and re-export statements of each module from the barrel."""
    for module_path in module_paths:
        specifier = import_path_between(index_path, strip_extension(module_path))
        for keyword in ("import", "export"):
            index_content, removed = _named_statement_regex(keyword, specifier).subn("", index_content)
            if removed:
                logger.debug(f"[treeshake] Removed {keyword} of {specifier} from {index_path}")
    return index_content


def _remove_wildcard_import(file_path: str, content: str, module_path: str) -> tuple[str, str | None]:
    specifier = import_path_between(file_path, strip_extension(module_path))
    match = _wildcard_import_regex(specifier).search(content)
    if match is None:
        return content, None
    logger.debug(f"[treeshake] Removed import of {specifier} (as {match.group(1)}) from {file_path}")
    return content[: match.start()] + content[match.end() :], match.group(1)


def purge_component_factory_import_and_usage(
    factory_path: str, factory_content: str, component_factory_path: str
) -> str:
    """
    Drop a component factory's wildcard import and its `alias.Member` list entries.

    The root factory lists every overlay component factory in its entry
    component arrays; those references go together with the import.
    """
    content, alias = _remove_wildcard_import(factory_path, factory_content, component_factory_path)
    if alias is None:
        return factory_content

    member = rf"{_NOT_AFTER_IDENTIFIER}{re.escape(alias)}\.[\w$]+"
    content = re.sub(rf"{member}\s*,\s*", "", content)
    content = re.sub(rf"\s*,\s*{member}", "", content)
    content = re.sub(member, "", content)
    return content


def purge_provider_controller_import_and_usage(factory_path: str, factory_content: str, provider_path: str) -> str:
    """
    Drop a provider controller from the compiled root factory.

    Removes the wildcard import of the controller module, the field
    declarations typed with it, its construction (the lazy getter or an
    eager `this.field = new alias.Ctrl(...)` statement) and the
    `if ((token === alias.Ctrl)) { return this.field; }` lookups.
    """
    content, alias = _remove_wildcard_import(factory_path, factory_content, provider_path)
    if alias is None:
        return factory_content

    qualified = rf"{re.escape(alias)}\.[\w$]+"
    # Typed (`get _X_1():alias.Ctrl {`) or transpiled (`get _X_1() {`); the body must construct alias.Ctrl.
    getter = re.compile(
        rf"[ \t]*{_NOT_AFTER_IDENTIFIER}get\s+[\w$]+\s*\(\s*\)\s*(?::\s*[\w$.]+\s*)?\{{[^}}]*?new\s+{qualified}"
        rf"[\s\S]*?return\s+this\.[\w$]+\s*;\s*\}}[ \t]*(?:\r?\n)?"
    )
    eager = re.compile(rf"[ \t]*this\.[\w$]+\s*=\s*new\s+{qualified}\s*\([^;]*\)\s*;[ \t]*(?:\r?\n)?")
    lookup = re.compile(
        rf"[ \t]*if\s*\(\(\s*token\s*===\s*{qualified}\s*\)\)\s*\{{\s*return\s+this\.[\w$]+\s*;\s*\}}[ \t]*(?:\r?\n)?"
    )
    field = re.compile(rf"[ \t]*[\w$]+\s*:\s*{qualified}\s*;[ \t]*(?:\r?\n)?")

    for pattern in (getter, eager, lookup, field):
        content, removed = pattern.subn("", content)
        if removed:
            logger.debug(f"[treeshake] Removed {removed} usage(s) of {alias} from {factory_path}")
    return content


def purge_provider_class_name_from_root_method(index_content: str, class_name: str, config: BuildConfig) -> str:
    """Remove `ClassName,` from the provider list that follows the framework's root method."""
    anchor = index_content.find(config.framework_root_method)
    if anchor < 0:
        return index_content
    tail, removed = re.subn(
        rf"{_NOT_AFTER_IDENTIFIER}{re.escape(class_name)}\s*,\s*", "", index_content[anchor:], count=1
    )
    if removed:
        logger.debug(f"[treeshake] Removed {class_name} from the {config.framework_root_method} providers")
    return index_content[:anchor] + tail
