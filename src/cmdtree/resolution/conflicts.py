"""
Folding of per-document matches under a conflict policy.
"""

import logging
from collections.abc import Iterable, Sequence
from enum import Enum

from cmdtree.exceptions import ConflictError
from cmdtree.resolution.matcher import Match

logger = logging.getLogger(__name__)


class OnConflict(Enum):
    """What happens when several documents define a matching command."""

    OVERRIDE = "Override"
    ERROR = "Error"


class Priority(Enum):
    """Order in which document paths are listed."""

    LOWEST_FIRST = "LowestFirst"  # Later documents override earlier ones
    HIGHEST_FIRST = "HighestFirst"


def resolve_conflicts(
    sources: Iterable[Sequence[Match]], on_conflict: OnConflict
) -> list[Match]:
    """
    Fold the matches of several documents into one ordered candidate list.

    ``sources`` yields one match list per document, highest priority first. It
    is consumed lazily: under Override, documents after the first one with a
    match are never examined. Within a document, later-discovered matches come
    first, so the first element of the result is the chosen command.

    Params:
        sources: Match lists in priority order, highest first
        on_conflict: Conflict policy

    Returns:
        Collected matches, the chosen one first (empty when nothing matched)

    Raises:
        ConflictError: Under Error, as soon as more than one match was collected
    """
    collected: list[Match] = []

    for matches in sources:
        collected.extend(reversed(matches))

        if on_conflict is OnConflict.OVERRIDE and collected:
            logger.debug("Override: stopping at first document with matches")
            break

        if on_conflict is OnConflict.ERROR and len(collected) > 1:
            raise ConflictError(
                collected[0].keys,
                [m.source for m in collected if m.source is not None],
            )

    return collected
