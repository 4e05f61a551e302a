"""
A loaded command document and the queries answered from a single document.

Matching, step-wise key lookup and help row generation all run against one
document here. Combining several documents is the dispatcher's job.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from cmdtree.core.models import CommandSettings, Group, GroupMode, command_string
from cmdtree.core.paths import collapse_to_tilde
from cmdtree.exceptions import CommandLookupError, DocumentParseError, InvariantViolationError
from cmdtree.help import HelpRow
from cmdtree.resolution.defaults import resolve_default
from cmdtree.resolution.envs import resolve_envs
from cmdtree.resolution.matcher import (
    Match,
    NestingMode,
    alias_levels,
    deepest,
    match_command,
    score_levels,
)
from cmdtree.resolution.scope import ScopeContext, walk_in_scope
from cmdtree.resolution.walker import Walk

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandDocument:
    """
    A parsed command document.

    The root group's name defaults to the file name and its description to the
    document path with the home directory collapsed.
    """

    group: Group
    path: Path
    file_name: str

    @property
    def base_dir(self) -> Path:
        """Directory relative paths in the document are resolved against."""
        return self.path.parent

    @property
    def name(self) -> str:
        return self.group.name or self.file_name

    @property
    def description(self) -> str | None:
        return self.group.description

    @classmethod
    def from_json(cls, text: str, path: Path, home: Path) -> "CommandDocument":
        """
        Parse a document from JSON text.

        Params:
            text: Document contents
            path: Location of the document
            home: Home directory, used for the default description

        Returns:
            The parsed document

        Raises:
            DocumentParseError: If the text is not valid JSON or does not match the schema
        """
        try:
            group = Group.model_validate_json(text)
        except ValidationError as e:
            raise DocumentParseError(path, str(e)) from e

        defaults = {}
        if group.name is None:
            defaults["name"] = path.name
        if group.description is None:
            defaults["description"] = collapse_to_tilde(path, home)
        if defaults:
            group = group.model_copy(update=defaults)

        return cls(group=group, path=path, file_name=path.name)

    @classmethod
    def from_file(cls, path: Path, home: Path) -> "CommandDocument":
        """Load and parse a document from disk."""
        if not path.is_file():
            raise DocumentParseError(path, "file not found")

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentParseError(path, str(e)) from e

        logger.debug("Loaded command document %s", path)
        return cls.from_json(text, path, home)

    def node_at(self, keys: Sequence[str]) -> tuple[CommandSettings, tuple[Group, ...]]:
        """
        Look up a command by its literal key path, one segment at a time.

        Returns:
            The command and the groups above it, root first

        Raises:
            CommandLookupError: If a segment does not exist
        """
        if not keys:
            raise InvariantViolationError("cannot look up an empty key path")

        node: CommandSettings = self.group
        ancestors: list[Group] = []

        for key in keys:
            if not isinstance(node, Group) or key not in node.commands:
                raise CommandLookupError(keys, self.path)
            ancestors.append(node)
            node = node.commands[key]

        return node, tuple(ancestors)

    def command_from_keys(
        self, keys: Sequence[str], *, strict_defaults: bool = False
    ) -> tuple[CommandSettings, tuple[Group, ...]]:
        """Look up a command by key path and follow group defaults."""
        node, ancestors = self.node_at(keys)
        return resolve_default(node, ancestors, strict=strict_defaults)

    def matches(
        self,
        target: Sequence[str],
        context: ScopeContext,
        mode: NestingMode = NestingMode.EXACT,
    ) -> list[Match]:
        """
        Find the deepest in-scope commands matching the target tokens.

        Params:
            target: Tokens to match
            context: Scope context
            mode: Whether shallower targets may match deeper commands

        Returns:
            Matches sharing the maximum score, in discovery order

        Raises:
            ScopeResolutionError: If a command's scope cannot be determined
        """
        found: list[Match] = []

        def visit(keys: tuple[str, ...], node: CommandSettings, ancestors: tuple[Group, ...]) -> Walk:
            levels = alias_levels(keys, node, ancestors)
            match = match_command(keys, levels, target, mode, self.path)
            if match is not None:
                found.append(match)

            # Nothing below a partially matched namespaced group can match exactly
            if (
                mode is NestingMode.EXACT
                and isinstance(node, Group)
                and node.mode is GroupMode.NAMESPACED
                and score_levels(levels, target) < len(levels)
            ):
                return Walk.SKIP
            return Walk.CONTINUE

        walk_in_scope(self.group, visit, context, self.base_dir)

        result = deepest(found)
        logger.debug("Found %d matches for %s in %s", len(result), list(target), self.path)
        return result

    def help_rows(
        self,
        context: ScopeContext,
        group: Group | None = None,
        keys: tuple[str, ...] = (),
        ancestors: tuple[Group, ...] = (),
        *,
        strict_defaults: bool = False,
    ) -> list[HelpRow]:
        """
        Collect help rows for the whole document, or for one group in it.

        Groups with a default are listed with the default's command. Commands
        with environments get one row per environment.

        Params:
            context: Scope context
            group: Group to list (the document root when omitted)
            keys: Key path of ``group``
            ancestors: Groups above ``group``, root first
            strict_defaults: Raise on a group default naming a missing command

        Raises:
            ScopeResolutionError: If a command's scope cannot be determined
            DanglingDefaultError: In strict mode, if a group default is dangling
        """
        rows: list[HelpRow] = []

        def visit(path: tuple[str, ...], node: CommandSettings, parents: tuple[Group, ...]) -> Walk:
            resolved, resolved_parents = resolve_default(node, parents, strict=strict_defaults)
            shell = command_string(resolved)
            if shell is None:
                return Walk.CONTINUE

            levels = alias_levels(path, node, parents)
            envs, default_env = resolve_envs(resolved, resolved_parents)

            if not envs:
                rows.append(HelpRow(self.file_name, path, levels, shell))
            for env in envs:
                rows.append(
                    HelpRow(self.file_name, path, levels, shell, env, env == default_env)
                )
            return Walk.CONTINUE

        walk_in_scope(group or self.group, visit, context, self.base_dir, keys, ancestors)
        return rows
