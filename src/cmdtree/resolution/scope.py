"""
Visibility of commands based on the current directory and repository root.

Only a node's own root is consulted here. Roots inherited from ancestors
decide where a command runs, not whether it is visible; an out-of-scope group
hides its whole subtree because the walk skips it.
"""

from dataclasses import dataclass
from pathlib import Path

from cmdtree.core.models import CommandSettings, Group, RootScope
from cmdtree.core.paths import resolve_path
from cmdtree.core.provider import EnvironmentProvider
from cmdtree.exceptions import PathResolutionError, ScopeResolutionError
from cmdtree.resolution.walker import Visitor, Walk, walk_tree


@dataclass(frozen=True)
class ScopeContext:
    """Ambient state scope checks are evaluated against."""

    current_dir: Path
    repo_root: Path | None
    home: Path

    @classmethod
    def from_provider(cls, provider: EnvironmentProvider) -> "ScopeContext":
        return cls(
            current_dir=provider.current_dir,
            repo_root=provider.repo_root,
            home=provider.home,
        )


def is_in_scope(node: CommandSettings, context: ScopeContext, base_dir: Path) -> bool:
    """
    Check whether a command or group is visible.

    Params:
        node: Command or group to check
        context: Current directory, repository root and home directory
        base_dir: Directory of the document defining the node

    Returns:
        True when the node has no root, a Global root, or its scope condition holds

    Raises:
        PathResolutionError: If the node's root path cannot be resolved
    """
    root = node.root
    if root is None or root.scope in (None, RootScope.GLOBAL):
        return True

    target = resolve_path(root.path, base_dir, context.home)

    if root.scope is RootScope.EXACT:
        return context.current_dir == target

    # GitRoot anchors the node to one specific repository
    repo_root = context.repo_root
    if repo_root is None:
        return False
    return context.current_dir.is_relative_to(repo_root) and repo_root == target


def walk_in_scope(
    group: Group,
    visitor: Visitor,
    context: ScopeContext,
    base_dir: Path,
    path: tuple[str, ...] = (),
    ancestors: tuple[Group, ...] = (),
) -> None:
    """
    Walk a command tree, visiting only commands that are in scope.

    Out-of-scope nodes are skipped together with their subtrees. A scope that
    cannot be determined stops the walk and is raised.

    Raises:
        ScopeResolutionError: If a node's root path cannot be resolved
    """
    failure: ScopeResolutionError | None = None

    def scoped(keys: tuple[str, ...], node: CommandSettings, parents: tuple[Group, ...]) -> Walk:
        nonlocal failure
        try:
            visible = is_in_scope(node, context, base_dir)
        except PathResolutionError as e:
            failure = ScopeResolutionError(keys, e.reason)
            failure.__cause__ = e
            return Walk.STOP

        if not visible:
            return Walk.SKIP
        return visitor(keys, node, parents)

    walk_tree(group, scoped, path, ancestors)

    if failure is not None:
        raise failure
