"""
Path helpers shared by scope checks, working directory resolution and
environment file loading.

Paths are made absolute without following symlinks, so two configured paths
compare equal only when their normalized absolute forms are identical.
"""

import os
from pathlib import Path

from cmdtree.exceptions import PathResolutionError


def expand_home(path: str, home: Path) -> str:
    """
    Expand the home-relative shorthand at the start of a path.

    Params:
        path: Configured path, possibly starting with ``~`` or ``~user``
        home: Home directory used for a bare ``~``

    Returns:
        The path with the shorthand replaced

    Raises:
        PathResolutionError: If ``~user`` names an unknown user
    """
    if path == "~":
        return str(home)
    if path.startswith("~/"):
        return str(home / path[2:])
    if path.startswith("~"):
        expanded = os.path.expanduser(path)
        if expanded == path:
            raise PathResolutionError(path, "unknown user in home shorthand")
        return expanded
    return path


def resolve_path(path: str, base_dir: Path, home: Path) -> Path:
    """
    Resolve a configured path to a normalized absolute path.

    Relative paths are taken relative to ``base_dir``, the directory of the
    document that defines them.

    Params:
        path: Configured path string
        base_dir: Directory relative paths are resolved against
        home: Home directory for shorthand expansion

    Returns:
        Absolute, normalized path

    Raises:
        PathResolutionError: If the path is empty or cannot be expanded
    """
    if not path or not path.strip():
        raise PathResolutionError(path, "path is empty")
    if "\x00" in path:
        raise PathResolutionError(path, "path contains a NUL byte")

    expanded = Path(expand_home(path, home))
    if not expanded.is_absolute():
        expanded = base_dir / expanded
    return Path(os.path.normpath(os.path.abspath(expanded)))


def collapse_to_tilde(path: Path, home: Path) -> str:
    """Render a path with the home directory collapsed to ``~``."""
    if path == home:
        return "~"
    if path.is_relative_to(home):
        return f"~/{path.relative_to(home).as_posix()}"
    return str(path)
