"""
Core cmdtree components.

This package provides the command document schema, path helpers and the
ambient state provider used throughout resolution.
"""

from cmdtree.core.models import (
    Command,
    CommandConfig,
    CommandSettings,
    DotenvEnv,
    EnvConfig,
    EnvDef,
    Group,
    GroupMode,
    InlineCommand,
    RootConfig,
    RootScope,
    command_string,
)
from cmdtree.core.paths import collapse_to_tilde, expand_home, resolve_path
from cmdtree.core.provider import (
    EnvironmentProvider,
    StaticProvider,
    SystemProvider,
    find_repo_root,
)

__all__ = [
    "Command",
    "CommandConfig",
    "CommandSettings",
    "DotenvEnv",
    "EnvConfig",
    "EnvDef",
    "Group",
    "GroupMode",
    "InlineCommand",
    "RootConfig",
    "RootScope",
    "command_string",
    "collapse_to_tilde",
    "expand_home",
    "resolve_path",
    "EnvironmentProvider",
    "StaticProvider",
    "SystemProvider",
    "find_repo_root",
]
