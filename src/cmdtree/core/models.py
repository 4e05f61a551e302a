"""
Command document schema for cmdtree.

This module defines the pydantic models a command document is parsed into:
groups of commands, leaf command definitions, root (working directory and
scope) settings and environment definitions.

Two fields accept more than one shape without an explicit tag. They are parsed
with an ordered-attempt discriminator:

- A command entry is a plain string (inline command), an object with a
  ``command`` field (configured command) or an object with a ``commands`` field
  (nested group), checked in that order.
- An environment entry is a plain string (dotenv file path) or an object
  (path, vars and command prefix).
"""

from enum import Enum
from typing import Annotated, Any, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    model_validator,
)


class RootScope(Enum):
    """Controls when a command or group is visible."""

    GLOBAL = "Global"  # Always in scope
    GIT_ROOT = "GitRoot"  # Current directory must be inside this exact repository
    EXACT = "Exact"  # Current directory must equal the root path


class GroupMode(Enum):
    """Whether a group adds a level to the command path."""

    NAMESPACED = "Namespaced"
    FLATTENED = "Flattened"


class RootConfig(BaseModel):
    """Where a command or group runs from, and when it is visible."""

    model_config = ConfigDict(frozen=True)

    path: str
    scope: RootScope | None = None


class DotenvEnv(BaseModel):
    """Environment loaded from a dotenv file, given as a bare path string."""

    model_config = ConfigDict(frozen=True)

    path: str

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"path": data}
        return data


class EnvConfig(BaseModel):
    """
    Environment with optional dotenv file, explicit variables and command prefix.

    Explicit ``vars`` override values loaded from ``path`` on key collision.
    ``command_prefix`` (also accepted as ``command``) is prepended to the final
    invocation string.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    path: str | None = None
    vars: dict[str, str] | None = None
    command_prefix: str | None = Field(
        default=None, validation_alias=AliasChoices("command_prefix", "command")
    )


def _env_kind(value: Any) -> str | None:
    if isinstance(value, (str, DotenvEnv)):
        return "dotenv"
    if isinstance(value, (dict, EnvConfig)):
        return "config"
    return None


EnvDef = Annotated[
    Union[
        Annotated[DotenvEnv, Tag("dotenv")],
        Annotated[EnvConfig, Tag("config")],
    ],
    Discriminator(
        _env_kind,
        custom_error_type="invalid_env",
        custom_error_message="Environment must be a dotenv path or an object",
    ),
]


class CommandSettings(BaseModel):
    """Settings shared by groups and leaf commands."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    description: str | None = None
    envs: dict[str, EnvDef] | None = None
    default_env: str | None = None
    root: RootConfig | None = None
    aliases: tuple[str, ...] = ()


class InlineCommand(CommandSettings):
    """A command given as a plain shell string."""

    command: str

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"command": data}
        return data


class CommandConfig(CommandSettings):
    """A command with additional configuration."""

    command: str


class Group(CommandSettings):
    """
    A group of commands that share common configuration.

    This is the top-level structure of a command document, and can be nested.
    ``default`` names an entry of ``commands`` to run when no further key is
    given; without it, resolving to the group shows help.
    """

    default: str | None = None
    commands: dict[str, "Command"] = Field(default_factory=dict)
    mode: GroupMode = GroupMode.NAMESPACED


def _command_kind(value: Any) -> str | None:
    if isinstance(value, (str, InlineCommand)):
        return "inline"
    if isinstance(value, CommandConfig):
        return "config"
    if isinstance(value, Group):
        return "group"
    if isinstance(value, dict):
        if "command" in value:
            return "config"
        if "commands" in value:
            return "group"
    return None


Command = Annotated[
    Union[
        Annotated[InlineCommand, Tag("inline")],
        Annotated[CommandConfig, Tag("config")],
        Annotated[Group, Tag("group")],
    ],
    Discriminator(
        _command_kind,
        custom_error_type="invalid_command",
        custom_error_message=(
            "Command must be a string, an object with 'command' or an object with 'commands'"
        ),
    ),
]

Group.model_rebuild()


def command_string(node: CommandSettings) -> str | None:
    """Return the shell string of a leaf command, or None for a group."""
    if isinstance(node, (InlineCommand, CommandConfig)):
        return node.command
    return None
