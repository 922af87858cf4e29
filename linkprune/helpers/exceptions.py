"""Custom exceptions used across multiple layers.

Rules:
- Only put exceptions here if they need to be raised in one layer and caught in another.
- Keep exceptions simple and focused.
- No I/O, no config loading, no complex logic.

Every fatal condition in a build pass derives from LinkPruneError so callers
(the CLI, a build script) can surface the message and halt with one except
clause. Nothing here is retried: the same input always fails the same way.
"""

from __future__ import annotations


class LinkPruneError(Exception):
    """Base class for all fatal linkprune errors."""


class AnnotationParseError(LinkPruneError):
    """Raised when an annotation is present but its arguments are malformed."""


class CardinalityError(LinkPruneError):
    """Raised when zero or several matches are found where exactly one is required."""

    def __init__(self, what: str, expected: int, found: int, path: str) -> None:
        self.what = what
        self.expected = expected
        self.found = found
        self.path = path
        super().__init__(f"Expected {expected} {what} in {path}, found {found}")


class DescriptorNotFoundError(LinkPruneError):
    """Raised when an annotated class has no sibling module descriptor."""

    def __init__(self, class_path: str, descriptor_path: str) -> None:
        self.class_path = class_path
        self.descriptor_path = descriptor_path
        super().__init__(
            f"The annotated class in {class_path} has no module descriptor; expected one at {descriptor_path}"
        )


class RouteValidationError(LinkPruneError):
    """Raised when a hydrated route entry cannot be routed to."""


class ConfigError(LinkPruneError):
    """Raised when the composed configuration cannot produce a BuildConfig."""


class FileNotInStoreError(LinkPruneError):
    """Raised when a required file is missing from the file store."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File not found in file store: {path}")
