"""
Exception classes for cmdtree command resolution.

This module defines specific exception types for the error conditions that
can occur while loading command documents, walking the command tree,
matching tokens, selecting environments and building runners.
"""

from collections.abc import Sequence
from pathlib import Path


class CmdTreeError(Exception):
    """Base exception for all cmdtree errors."""

    pass


class ConfigurationError(CmdTreeError):
    """Raised when the global settings file cannot be read or validated."""

    def __init__(self, path: Path, reason: str):
        """
        Initialize the exception.

        Params:
            path: Location of the settings file
            reason: The underlying reason for the failure
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration in '{path}': {reason}")


class DocumentParseError(CmdTreeError):
    """Raised when a command document is missing or does not match the schema."""

    def __init__(self, path: Path, reason: str):
        """
        Initialize the exception.

        Params:
            path: Location of the command document
            reason: Why the document could not be loaded
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load command document '{path}': {reason}")


class PathResolutionError(CmdTreeError):
    """Raised when a configured path cannot be expanded to an absolute path."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot resolve path '{path}': {reason}")


class ScopeResolutionError(CmdTreeError):
    """Raised when the scope of a command cannot be determined during a walk."""

    def __init__(self, keys: Sequence[str], reason: str):
        """
        Initialize the exception.

        Params:
            keys: Literal key path of the command whose root failed to resolve
            reason: The underlying path resolution failure
        """
        self.keys = tuple(keys)
        self.reason = reason
        super().__init__(
            f"Error determining scope for command '{' '.join(self.keys)}': {reason}"
        )


class NoMatchError(CmdTreeError):
    """Raised when the target tokens do not resolve to any command."""

    def __init__(self, tokens: Sequence[str]):
        self.tokens = tuple(tokens)
        super().__init__(f"No matching command found for: {' '.join(self.tokens)}")


class ConflictError(CmdTreeError):
    """Raised when more than one command matches under the Error conflict policy."""

    def __init__(self, keys: Sequence[str], sources: Sequence[Path]):
        """
        Initialize the exception.

        Params:
            keys: Literal key path of the ambiguous command
            sources: Documents that produced the conflicting matches
        """
        self.keys = tuple(keys)
        self.sources = tuple(sources)
        locations = ", ".join(str(source) for source in self.sources)
        super().__init__(
            f"Conflict detected for command '{' '.join(self.keys)}' (defined in {locations}). "
            "If you want to override, change the on_conflict setting to Override."
        )


class CommandLookupError(CmdTreeError):
    """Raised when a literal key path does not exist in a command document."""

    def __init__(self, keys: Sequence[str], path: Path | None = None):
        self.keys = tuple(keys)
        self.path = path
        location = f" in '{path}'" if path else ""
        super().__init__(f"No command found for keys: {' '.join(self.keys)}{location}")


class DanglingDefaultError(CmdTreeError):
    """Raised in strict mode when a group's default names a missing command."""

    def __init__(self, default: str, available: Sequence[str]):
        self.default = default
        self.available = tuple(available)
        super().__init__(
            f"Default command '{default}' is not defined. Available commands: "
            f"{', '.join(self.available) or 'none'}"
        )


class EnvironmentSelectionError(CmdTreeError):
    """Base class for environment selection failures."""

    pass


class NoEnvironmentSpecifiedError(EnvironmentSelectionError):
    """Raised when environments exist but neither an argument nor a default selects one."""

    def __init__(self, available: Sequence[str]):
        self.available = tuple(available)
        super().__init__(
            "No environment specified, and no default environment is set. "
            f"Available environments: {', '.join(self.available)}"
        )


class UnknownEnvironmentError(EnvironmentSelectionError):
    """Raised when the first argument is not a known environment and there is no default."""

    def __init__(self, name: str, available: Sequence[str]):
        self.name = name
        self.available = tuple(available)
        super().__init__(
            f"Environment '{name}' not found, and no default environment is set. "
            f"Available environments: {', '.join(self.available)}"
        )


class DefaultEnvironmentMissingError(EnvironmentSelectionError):
    """Raised when the configured default environment is not among the merged environments."""

    def __init__(self, name: str, available: Sequence[str]):
        self.name = name
        self.available = tuple(available)
        super().__init__(
            f"Environment not found, and default environment '{name}' is not found. "
            f"Available environments: {', '.join(self.available)}"
        )


class EnvironmentFileError(EnvironmentSelectionError):
    """Raised when an environment's dotenv file cannot be read."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load environment file '{path}': {reason}")


class SpawnError(CmdTreeError):
    """Raised when a command process cannot be started."""

    def __init__(self, invocation: str, cwd: Path | None, reason: str):
        """
        Initialize the exception.

        Params:
            invocation: Shell string that was to be run
            cwd: Working directory of the process, if any
            reason: Why the process could not be started
        """
        self.invocation = invocation
        self.cwd = cwd
        self.reason = reason
        location = f" in '{cwd}'" if cwd else ""
        super().__init__(f"Cannot run '{invocation}'{location}: {reason}")


class InvariantViolationError(CmdTreeError):
    """Raised when internal resolution state breaks an expected invariant."""

    def __init__(self, message: str):
        super().__init__(f"Internal invariant violated: {message}")
