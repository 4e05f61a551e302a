"""
Resolution of a group to its default command.
"""

import logging

from cmdtree.core.models import CommandSettings, Group
from cmdtree.exceptions import DanglingDefaultError

logger = logging.getLogger(__name__)


def resolve_default(
    command: CommandSettings,
    ancestors: tuple[Group, ...] = (),
    *,
    strict: bool = False,
) -> tuple[CommandSettings, tuple[Group, ...]]:
    """
    Follow a group's default pointer down to a concrete command.

    Each group passed through is appended to the returned ancestors. Resolution
    stops at the first leaf command, or at a group without a usable default.

    A default naming a command that does not exist is treated as no default and
    only logged. Pass ``strict=True`` to raise instead.

    Params:
        command: Command or group to resolve
        ancestors: Groups above ``command``, root first
        strict: Raise on a dangling default instead of degrading to help

    Returns:
        The resolved command (a group when no default applies) and its ancestors

    Raises:
        DanglingDefaultError: In strict mode, if a default names a missing command
    """
    while isinstance(command, Group) and command.default is not None:
        target = command.commands.get(command.default)

        if target is None:
            if strict:
                raise DanglingDefaultError(command.default, list(command.commands))
            logger.warning(
                "Default command '%s' of group '%s' does not exist; showing help instead",
                command.default,
                command.name or "",
            )
            break

        ancestors = (*ancestors, command)
        command = target

    return command, ancestors
