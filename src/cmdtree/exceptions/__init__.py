"""
cmdtree exception classes.

This package provides all exception types used while loading, resolving and
running commands, so callers can handle every failure through CmdTreeError.
"""

from cmdtree.exceptions.core import (
    CmdTreeError,
    CommandLookupError,
    ConfigurationError,
    ConflictError,
    DanglingDefaultError,
    DefaultEnvironmentMissingError,
    DocumentParseError,
    EnvironmentFileError,
    EnvironmentSelectionError,
    InvariantViolationError,
    NoEnvironmentSpecifiedError,
    NoMatchError,
    PathResolutionError,
    ScopeResolutionError,
    SpawnError,
    UnknownEnvironmentError,
)

__all__ = [
    "CmdTreeError",
    "ConfigurationError",
    "DocumentParseError",
    "PathResolutionError",
    "ScopeResolutionError",
    "NoMatchError",
    "ConflictError",
    "CommandLookupError",
    "DanglingDefaultError",
    "EnvironmentSelectionError",
    "NoEnvironmentSpecifiedError",
    "UnknownEnvironmentError",
    "DefaultEnvironmentMissingError",
    "EnvironmentFileError",
    "SpawnError",
    "InvariantViolationError",
]
