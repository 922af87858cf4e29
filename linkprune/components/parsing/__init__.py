"""
Parsing package.
"""

from .route_extractor_comp import extract_routes, route_from_class, validate_routes
from .source_scanner_comp import ScannedClass, find_classes_with_annotation, scan_annotated_classes, scan_source
from .ts_syntax_comp import ParsedSource, parse_source

__all__ = [
    "ParsedSource",
    "ScannedClass",
    "extract_routes",
    "find_classes_with_annotation",
    "parse_source",
    "route_from_class",
    "scan_annotated_classes",
    "scan_source",
    "validate_routes",
]
