"""
Depth-first traversal of a command tree.

The walker calls a visitor for every command in pre-order and lets the visitor
steer the traversal: descend into a group, skip its subtree, or stop the whole
walk. The key path and ancestor stack are passed by value, so an aborted walk
never leaves shared state behind.
"""

from collections.abc import Callable
from enum import Enum

from cmdtree.core.models import CommandSettings, Group


class Walk(Enum):
    """Flow control returned by a walk visitor."""

    CONTINUE = "continue"  # Descend into the node if it is a group
    SKIP = "skip"  # Do not descend, continue with siblings
    STOP = "stop"  # Abort the entire walk


Visitor = Callable[[tuple[str, ...], CommandSettings, tuple[Group, ...]], Walk]


def walk_tree(
    group: Group,
    visitor: Visitor,
    path: tuple[str, ...] = (),
    ancestors: tuple[Group, ...] = (),
) -> Walk:
    """
    Walk the commands of a group and its subgroups.

    The visitor receives the literal key path of the command, the command
    itself and the groups leading to it (root first, direct parent last).

    Params:
        group: Group whose commands are visited
        visitor: Callback deciding how the walk continues
        path: Key path of ``group`` itself, when walking a subtree
        ancestors: Groups above ``group``, when walking a subtree

    Returns:
        Walk.STOP if the visitor stopped the walk, Walk.CONTINUE otherwise
    """
    ancestors = (*ancestors, group)

    for key, command in group.commands.items():
        keys = (*path, key)
        signal = visitor(keys, command, ancestors)

        if signal is Walk.STOP:
            return Walk.STOP
        if signal is Walk.SKIP:
            continue

        if isinstance(command, Group):
            if walk_tree(command, visitor, keys, ancestors) is Walk.STOP:
                return Walk.STOP

    return Walk.CONTINUE
