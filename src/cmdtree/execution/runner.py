"""
Runner descriptors and process spawning.

A resolved command becomes a ``CommandRunner`` holding the shell invocation,
the working directory and the environment overlay; a group without a default
becomes a ``HelpRunner``. These are the only two outcomes of resolution.
"""

import logging
import shlex
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from cmdtree.core.models import CommandSettings, Group, RootConfig, command_string
from cmdtree.core.paths import resolve_path
from cmdtree.exceptions import InvariantViolationError, SpawnError
from cmdtree.resolution.envs import ResolvedEnv

logger = logging.getLogger(__name__)

# Forces colored output in children whose stdout is no longer a terminal
COLOR_PASSTHROUGH = {
    "CLICOLOR": "1",
    "CLICOLOR_FORCE": "1",
    "FORCE_COLOR": "1",
}


@dataclass(frozen=True)
class CommandRunner:
    """A shell invocation ready to spawn."""

    invocation: str
    cwd: Path | None = None
    env: dict[str, str] = field(default_factory=dict)

    def spawn(self, environ: Mapping[str, str]) -> int:
        """
        Run the invocation through ``sh -c`` and wait for it.

        The child inherits the standard streams. Its environment is ``environ``
        with the runner's overlay applied on top.

        Params:
            environ: Base environment of the child process

        Returns:
            The child's exit code (1 when it was terminated by a signal)

        Raises:
            SpawnError: If the process cannot be started, e.g. the working
                directory does not exist
        """
        logger.debug("Spawning %r in %s", self.invocation, self.cwd or "current directory")
        try:
            completed = subprocess.run(
                ["sh", "-c", self.invocation],
                cwd=self.cwd,
                env={**environ, **self.env},
                check=False,
            )
        except OSError as e:
            raise SpawnError(self.invocation, self.cwd, e.strerror or str(e)) from e
        return completed.returncode if completed.returncode >= 0 else 1


@dataclass(frozen=True)
class HelpRunner:
    """A group to show help for, with the groups above it."""

    group: Group
    ancestors: tuple[Group, ...]
    keys: tuple[str, ...]
    source: Path | None = None


Runner = CommandRunner | HelpRunner


def command_root(command: CommandSettings, ancestors: Sequence[Group]) -> RootConfig | None:
    """Return the command's own root, else the nearest ancestor's."""
    if command.root is not None:
        return command.root
    return next((group.root for group in reversed(ancestors) if group.root), None)


def build_invocation(
    command: str, args: Sequence[str], command_prefix: str | None = None
) -> str:
    """
    Assemble the shell string for a command.

    Each extra argument is quoted on its own, so whitespace and shell
    metacharacters inside an argument stay part of that argument.
    """
    parts = [command, *(shlex.quote(arg) for arg in args)]
    if command_prefix:
        parts.insert(0, command_prefix)
    return " ".join(parts)


def build_runner(
    command: CommandSettings,
    ancestors: tuple[Group, ...],
    args: Sequence[str],
    *,
    keys: tuple[str, ...],
    source: Path,
    home: Path,
    env: ResolvedEnv | None = None,
    is_terminal: bool = False,
) -> Runner:
    """
    Build the runner for a resolved command.

    Params:
        command: Resolved command (a group yields a help runner)
        ancestors: Groups above the command, root first
        args: Extra arguments to pass to the command
        keys: Literal key path the command was resolved from
        source: Document defining the command
        home: Home directory for shorthand expansion
        env: Selected and materialized environment, if any
        is_terminal: Whether standard output is an interactive terminal

    Returns:
        CommandRunner or HelpRunner

    Raises:
        PathResolutionError: If the working directory cannot be resolved
    """
    if isinstance(command, Group):
        return HelpRunner(group=command, ancestors=ancestors, keys=keys, source=source)

    shell = command_string(command)
    if shell is None:
        raise InvariantViolationError(f"command '{' '.join(keys)}' has no shell string")

    root = command_root(command, ancestors)
    cwd = resolve_path(root.path, source.parent, home) if root else None

    overlay: dict[str, str] = {}
    if is_terminal:
        overlay.update(COLOR_PASSTHROUGH)
    if env is not None:
        overlay.update(env.vars)

    return CommandRunner(
        invocation=build_invocation(shell, args, env.command_prefix if env else None),
        cwd=cwd,
        env=overlay,
    )
