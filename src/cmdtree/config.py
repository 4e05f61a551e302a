"""
Global settings and command document discovery.

Settings are read from ``$CMDTREE_CONFIG`` or ``~/.config/cmdtree/config.json``.
A missing settings file means defaults: Override conflicts, recursive lookup of
``cmdtree.json`` from the filesystem root down to the current directory.
"""

import glob
import logging
import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from cmdtree.core.paths import expand_home
from cmdtree.core.provider import EnvironmentProvider
from cmdtree.exceptions import ConfigurationError
from cmdtree.resolution.conflicts import OnConflict, Priority

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CMDTREE_CONFIG"
DEFAULT_FILE_NAME = "cmdtree.json"


class Resolution(Enum):
    """Which directories are searched for project documents."""

    CURRENT_FOLDER = "CurrentFolder"
    RECURSIVE = "Recursive"  # Every directory from the filesystem root down
    GIT_ROOT = "GitRoot"  # Every directory from the repository root down


class GlobalConfig(BaseModel):
    """
    Global cmdtree settings.

    Params:
        on_conflict: Policy when several documents match the same invocation
        resolution: How project documents are searched for
        priority: Order of the discovered paths
        file_name: File name of project documents
        files: Extra document paths or globs, loaded before project documents
        strict_defaults: Raise on a group default naming a missing command
    """

    model_config = ConfigDict(frozen=True)

    on_conflict: OnConflict = OnConflict.OVERRIDE
    resolution: Resolution = Resolution.RECURSIVE
    priority: Priority = Priority.LOWEST_FIRST
    file_name: str = DEFAULT_FILE_NAME
    files: tuple[str, ...] = ()
    strict_defaults: bool = False

    @staticmethod
    def settings_path(provider: EnvironmentProvider) -> Path:
        override = provider.environ.get(CONFIG_ENV_VAR)
        if override:
            return Path(expand_home(override, provider.home))
        return provider.home / ".config" / "cmdtree" / "config.json"

    @classmethod
    def load(cls, provider: EnvironmentProvider) -> "GlobalConfig":
        """
        Load settings, falling back to defaults when the file does not exist.

        Raises:
            ConfigurationError: If the file cannot be read or is invalid
        """
        path = cls.settings_path(provider)
        if not path.is_file():
            logger.debug("No settings file at %s, using defaults", path)
            return cls()

        try:
            return cls.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(path, str(e)) from e
        except ValidationError as e:
            raise ConfigurationError(path, str(e)) from e

    def _search_dirs(self, provider: EnvironmentProvider) -> list[Path]:
        current = provider.current_dir

        if self.resolution is Resolution.CURRENT_FOLDER:
            return [current]

        if self.resolution is Resolution.GIT_ROOT:
            repo_root = provider.repo_root
            if repo_root is None or not current.is_relative_to(repo_root):
                return [current]
            depth = len(current.relative_to(repo_root).parts)
            return [*reversed(current.parents[:depth]), current]

        return [*reversed(current.parents), current]

    def document_paths(self, provider: EnvironmentProvider) -> list[Path]:
        """
        Discover existing command documents.

        Extra ``files`` (globs allowed, ``~`` expanded, relative to the home
        directory) come first, then project documents from the outermost to
        the innermost directory. Paths are de-duplicated and listed lowest
        priority first, or reversed for HighestFirst.

        Returns:
            Absolute paths of existing documents
        """
        candidates: list[Path] = []

        for pattern in self.files:
            expanded = expand_home(pattern, provider.home)
            if not os.path.isabs(expanded):
                expanded = str(provider.home / expanded)
            candidates.extend(Path(p) for p in sorted(glob.glob(expanded)))

        candidates.extend(d / self.file_name for d in self._search_dirs(provider))

        paths: list[Path] = []
        for candidate in candidates:
            candidate = Path(os.path.abspath(candidate))
            if candidate.is_file() and candidate not in paths:
                paths.append(candidate)

        if self.priority is Priority.HIGHEST_FIRST:
            paths.reverse()

        logger.debug("Discovered command documents: %s", [str(p) for p in paths])
        return paths
