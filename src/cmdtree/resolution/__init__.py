"""
Command resolution pipeline.

This package walks command trees, filters them by scope, scores commands
against target tokens, folds matches from several documents, follows group
defaults and selects environments.
"""

from cmdtree.resolution.conflicts import OnConflict, Priority, resolve_conflicts
from cmdtree.resolution.defaults import resolve_default
from cmdtree.resolution.envs import (
    EnvSelection,
    ResolvedEnv,
    load_env,
    match_env,
    resolve_envs,
)
from cmdtree.resolution.matcher import (
    Match,
    NestingMode,
    alias_levels,
    deepest,
    match_command,
    score_levels,
)
from cmdtree.resolution.scope import ScopeContext, is_in_scope, walk_in_scope
from cmdtree.resolution.walker import Visitor, Walk, walk_tree

__all__ = [
    "OnConflict",
    "Priority",
    "resolve_conflicts",
    "resolve_default",
    "EnvSelection",
    "ResolvedEnv",
    "load_env",
    "match_env",
    "resolve_envs",
    "Match",
    "NestingMode",
    "alias_levels",
    "deepest",
    "match_command",
    "score_levels",
    "ScopeContext",
    "is_in_scope",
    "walk_in_scope",
    "Visitor",
    "Walk",
    "walk_tree",
]
