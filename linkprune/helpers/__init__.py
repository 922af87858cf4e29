"""
Helpers package.
"""

from .exceptions import (
    AnnotationParseError,
    CardinalityError,
    ConfigError,
    DescriptorNotFoundError,
    FileNotInStoreError,
    LinkPruneError,
    RouteValidationError,
)
from .paths_helper import change_extension, import_path_between, is_within, normalize_path, strip_extension

__all__ = [
    "AnnotationParseError",
    "CardinalityError",
    "ConfigError",
    "DescriptorNotFoundError",
    "FileNotInStoreError",
    "LinkPruneError",
    "RouteValidationError",
    "change_extension",
    "import_path_between",
    "is_within",
    "normalize_path",
    "strip_extension",
]
