"""
Alias-aware scoring of command paths against target tokens.

Every command has a sequence of levels, one per namespaced path segment, each
holding the names accepted at that position (the key and its aliases). Levels
of flattened groups are left out, so their names never need to be typed. The
score of a command is the number of leading target tokens accepted by its
levels.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from cmdtree.core.models import CommandSettings, Group, GroupMode
from cmdtree.exceptions import InvariantViolationError


class NestingMode(Enum):
    """How a target shorter than a command's path is treated."""

    EXACT = "exact"  # Direct dispatch: the target must cover every level
    NESTED = "nested"  # Browsing: a shallower target matches deeper commands


@dataclass(frozen=True)
class Match:
    """
    A command matched against target tokens.

    Params:
        keys: Literal key path from the document root to the matched command
        score: Number of target tokens consumed by the match
        alias_keys: Accepted names for each level of the command path
        source: Document the command was found in
    """

    keys: tuple[str, ...]
    score: int
    alias_keys: tuple[tuple[str, ...], ...]
    source: Path | None = None


def alias_levels(
    keys: Sequence[str], command: CommandSettings, ancestors: Sequence[Group]
) -> tuple[tuple[str, ...], ...]:
    """
    Collect the accepted names for each level of a command's path.

    ``ancestors`` runs from the document root to the command's parent, so
    ``ancestors[i]`` is the group reached by ``keys[i - 1]``. The root itself
    contributes no level.

    Params:
        keys: Literal key path of the command
        command: The command (or group) at the end of the path
        ancestors: Groups leading to the command, root first

    Returns:
        One tuple of accepted names per level, the command's own level last

    Raises:
        InvariantViolationError: If the key path is empty or does not line up
            with the ancestors
    """
    if not keys:
        raise InvariantViolationError("cannot match a command with an empty key path")
    if len(ancestors) != len(keys):
        raise InvariantViolationError(
            f"key path {list(keys)} has {len(keys)} levels but {len(ancestors)} ancestors"
        )

    levels = []
    for i, group in enumerate(ancestors):
        if i == 0:
            continue
        if group.mode is GroupMode.FLATTENED:
            continue
        levels.append((keys[i - 1], *group.aliases))

    levels.append((keys[-1], *command.aliases))
    return tuple(levels)


def score_levels(levels: Sequence[Sequence[str]], target: Sequence[str]) -> int:
    """Count leading target tokens accepted by the corresponding level."""
    score = 0
    for level, token in zip(levels, target):
        if token not in level:
            break
        score += 1
    return score


def match_command(
    keys: Sequence[str],
    levels: Sequence[Sequence[str]],
    target: Sequence[str],
    mode: NestingMode,
    source: Path | None = None,
) -> Match | None:
    """
    Score one command against the target tokens.

    A score of zero never matches. In exact mode the command must not be deeper
    than the number of tokens consumed, which keeps a short invocation from
    resolving into a nested command; extra tokens are left for the command.

    Returns:
        The match, or None when the command does not qualify
    """
    if not keys or not levels:
        raise InvariantViolationError("cannot match a command with an empty key path")

    score = score_levels(levels, target)
    if score == 0:
        return None
    if mode is NestingMode.EXACT and score < len(levels):
        return None

    return Match(
        keys=tuple(keys),
        score=score,
        alias_keys=tuple(tuple(level) for level in levels),
        source=source,
    )


def deepest(matches: Iterable[Match]) -> list[Match]:
    """Keep only the matches with the highest score, in discovery order."""
    matches = list(matches)
    if not matches:
        return []
    best = max(m.score for m in matches)
    return [m for m in matches if m.score == best]
