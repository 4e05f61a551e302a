"""
Access to ambient process state.

Resolution never reads the current directory, repository root, home
directory, process environment or terminal state directly; it asks an
environment provider. ``SystemProvider`` reads the real process, while
``StaticProvider`` carries fixed values for tests and embedding.
"""

import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from attrs import field, frozen


class EnvironmentProvider(Protocol):
    """Source of the ambient state cmdtree resolves against."""

    @property
    def current_dir(self) -> Path: ...

    @property
    def repo_root(self) -> Path | None: ...

    @property
    def home(self) -> Path: ...

    @property
    def environ(self) -> Mapping[str, str]: ...

    @property
    def is_terminal(self) -> bool: ...


def find_repo_root(start: Path) -> Path | None:
    """
    Find the nearest enclosing repository working tree.

    Params:
        start: Directory to start searching from

    Returns:
        The first directory (``start`` included) containing a ``.git`` entry,
        or None outside any repository
    """
    cur = Path(os.path.abspath(start))
    for candidate in [cur, *cur.parents]:
        if (candidate / ".git").exists():
            return candidate
    return None


class SystemProvider:
    """Reads ambient state from the running process."""

    @property
    def current_dir(self) -> Path:
        return Path(os.getcwd())

    @property
    def repo_root(self) -> Path | None:
        return find_repo_root(self.current_dir)

    @property
    def home(self) -> Path:
        return Path.home()

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ

    @property
    def is_terminal(self) -> bool:
        return sys.stdout.isatty()


@frozen
class StaticProvider:
    """Fixed ambient state, for tests and for callers that already know it."""

    current_dir: Path
    repo_root: Path | None = None
    home: Path = Path("/home/user")
    environ: Mapping[str, str] = field(factory=dict)
    is_terminal: bool = False
