"""
Path string helpers.

Module identities in the import graph and file store are plain POSIX path
strings, so everything here works on strings with posixpath rather than on
the filesystem.
"""

from __future__ import annotations

import posixpath


def normalize_path(path: str) -> str:
    """Normalize separators and dot segments of a path string."""
    return posixpath.normpath(path.replace("\\", "/"))


def change_extension(path: str, new_extension: str) -> str:
    """
    Replace the last extension of a path.

    Examples:
        >>> change_extension("src/app/app.module.ts", ".js")
        'src/app/app.module.js'
        >>> change_extension("src/pages/home/home.ts", "")
        'src/pages/home/home'
    """
    root, _ = posixpath.splitext(path)
    return root + new_extension


def strip_extension(path: str) -> str:
    return change_extension(path, "")


def import_path_between(from_file: str, to_path: str) -> str:
    """
    Relative import specifier from the directory of from_file to to_path.

    The result always starts with "./" or "../" so it can be pasted into an
    import statement.

    Examples:
        >>> import_path_between("src/app/app.module.ts", "src/pages/home/home.module")
        '../pages/home/home.module'
        >>> import_path_between("lib/index.js", "lib/components/alert/alert")
        './components/alert/alert'
    """
    base_dir = posixpath.dirname(normalize_path(from_file)) or "."
    relative = posixpath.relpath(normalize_path(to_path), base_dir)
    if not relative.startswith("."):
        relative = "./" + relative
    return relative


def is_within(path: str, directory: str) -> bool:
    """True when directory appears as a path-segment prefix anywhere in path."""
    directory = normalize_path(directory).rstrip("/")
    path = normalize_path(path)
    return path == directory or f"{directory}/" in path
