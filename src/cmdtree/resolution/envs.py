"""
Environment selection for a resolved command.

Environments are merged from the command's ancestors and the command itself,
one of them is picked from the first remaining argument or the default, and
the picked definition is materialized into variables and a command prefix.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import dotenv_values

from cmdtree.core.models import CommandSettings, DotenvEnv, EnvDef, Group
from cmdtree.core.paths import resolve_path
from cmdtree.exceptions import (
    DefaultEnvironmentMissingError,
    EnvironmentFileError,
    NoEnvironmentSpecifiedError,
    UnknownEnvironmentError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnvSelection:
    """An environment picked for a command, and the arguments left over."""

    name: str
    env: EnvDef
    remaining: tuple[str, ...]


@dataclass(frozen=True)
class ResolvedEnv:
    """Materialized environment: variables to set and an optional command prefix."""

    vars: dict[str, str] = field(default_factory=dict)
    command_prefix: str | None = None


def resolve_envs(
    node: CommandSettings, ancestors: Sequence[Group]
) -> tuple[dict[str, EnvDef], str | None]:
    """
    Merge the environments visible to a command.

    Ancestors are visited nearest first and a name is only inserted when it is
    not present yet, so closer groups win. The node's own environments are
    merged last under the same first-wins rule. The default environment comes
    from the node if it defines one, otherwise from the nearest ancestor that
    does.

    Params:
        node: The resolved command
        ancestors: Groups above the command, root first

    Returns:
        Merged name to definition mapping and the default environment name
    """
    merged: dict[str, EnvDef] = {}

    for group in reversed(ancestors):
        for name, env in (group.envs or {}).items():
            merged.setdefault(name, env)

    for name, env in (node.envs or {}).items():
        merged.setdefault(name, env)

    default_env = node.default_env
    if default_env is None:
        default_env = next(
            (group.default_env for group in reversed(ancestors) if group.default_env),
            None,
        )

    return merged, default_env


def match_env(
    envs: Mapping[str, EnvDef], default_env: str | None, args: Sequence[str]
) -> EnvSelection | None:
    """
    Pick an environment from the remaining arguments or the default.

    Params:
        envs: Merged environments
        default_env: Name of the default environment, if any
        args: Arguments left after command matching

    Returns:
        The selection, or None when no environments are defined

    Raises:
        NoEnvironmentSpecifiedError: No arguments and no default
        DefaultEnvironmentMissingError: The default is not a defined environment
        UnknownEnvironmentError: The first argument is not an environment and there is no default
    """
    if not envs:
        return None

    available = list(envs)

    if not args and default_env is None:
        raise NoEnvironmentSpecifiedError(available)

    if args and args[0] in envs:
        return EnvSelection(name=args[0], env=envs[args[0]], remaining=tuple(args[1:]))

    if default_env is not None:
        if default_env not in envs:
            raise DefaultEnvironmentMissingError(default_env, available)
        return EnvSelection(name=default_env, env=envs[default_env], remaining=tuple(args))

    raise UnknownEnvironmentError(args[0], available)


def _read_dotenv(path: str, base_dir: Path, home: Path) -> dict[str, str]:
    file_path = resolve_path(path, base_dir, home)
    if not file_path.is_file():
        raise EnvironmentFileError(file_path, "file not found")

    try:
        # Values are taken literally, ${VAR} references are not expanded
        values = dotenv_values(file_path, interpolate=False)
    except (OSError, UnicodeDecodeError) as e:
        raise EnvironmentFileError(file_path, str(e)) from e

    logger.debug("Loaded %d variables from %s", len(values), file_path)
    # Keys declared without a value have nothing to export
    return {key: value for key, value in values.items() if value is not None}


def load_env(env: EnvDef, base_dir: Path, home: Path) -> ResolvedEnv:
    """
    Materialize an environment definition.

    Variables are read from the dotenv file (relative to the defining
    document's directory) and then overlaid with explicit ``vars``.

    Params:
        env: Environment definition
        base_dir: Directory of the document defining the environment
        home: Home directory for shorthand expansion

    Returns:
        Resolved variables and command prefix

    Raises:
        EnvironmentFileError: If the dotenv file cannot be read
    """
    if isinstance(env, DotenvEnv):
        return ResolvedEnv(vars=_read_dotenv(env.path, base_dir, home))

    values = _read_dotenv(env.path, base_dir, home) if env.path else {}
    values.update(env.vars or {})
    return ResolvedEnv(vars=values, command_prefix=env.command_prefix)
