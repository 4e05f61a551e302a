"""
Resolution of an argument vector against several command documents.

The dispatcher loads documents on demand (once per invocation), consults them
in priority order under the configured conflict policy, and turns the chosen
match into a runner.
"""

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

from cmdtree.config import GlobalConfig
from cmdtree.core.models import Group
from cmdtree.core.provider import EnvironmentProvider, SystemProvider
from cmdtree.document import CommandDocument
from cmdtree.exceptions import InvariantViolationError, NoMatchError
from cmdtree.execution.runner import HelpRunner, Runner, build_runner
from cmdtree.help import HelpRow
from cmdtree.resolution.conflicts import OnConflict, Priority, resolve_conflicts
from cmdtree.resolution.envs import load_env, match_env, resolve_envs
from cmdtree.resolution.matcher import Match, NestingMode
from cmdtree.resolution.scope import ScopeContext

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Resolves token vectors against an ordered set of command documents.

    Params:
        paths: Existing document paths, ordered as described by ``priority``
        provider: Source of the current directory, repository root and home
        on_conflict: Conflict policy across documents
        priority: Whether ``paths`` lists the lowest or highest priority first
        strict_defaults: Raise on dangling group defaults instead of showing help
    """

    def __init__(
        self,
        paths: Sequence[Path],
        provider: EnvironmentProvider | None = None,
        *,
        on_conflict: OnConflict = OnConflict.OVERRIDE,
        priority: Priority = Priority.LOWEST_FIRST,
        strict_defaults: bool = False,
    ):
        self.paths = list(paths)
        self.provider = provider or SystemProvider()
        self.on_conflict = on_conflict
        self.priority = priority
        self.strict_defaults = strict_defaults
        self.context = ScopeContext.from_provider(self.provider)
        self._documents: dict[Path, CommandDocument] = {}

    @classmethod
    def from_config(cls, config: GlobalConfig, provider: EnvironmentProvider) -> "Dispatcher":
        return cls(
            config.document_paths(provider),
            provider,
            on_conflict=config.on_conflict,
            priority=config.priority,
            strict_defaults=config.strict_defaults,
        )

    def document(self, path: Path) -> CommandDocument:
        """Load a document, reusing it if it was already loaded."""
        if path not in self._documents:
            self._documents[path] = CommandDocument.from_file(path, self.provider.home)
        return self._documents[path]

    def consultation_order(self) -> list[Path]:
        """Document paths, highest priority first."""
        if self.priority is Priority.LOWEST_FIRST:
            return list(reversed(self.paths))
        return list(self.paths)

    def _source_matches(self, target: Sequence[str], mode: NestingMode) -> Iterator[list[Match]]:
        for path in self.consultation_order():
            matches = self.document(path).matches(target, self.context, mode)
            logger.debug("%d matches in %s", len(matches), path)
            yield matches

    def match_command(self, target: Sequence[str]) -> Match:
        """
        Find the command the target tokens dispatch to.

        Raises:
            NoMatchError: If no document has a matching command
            ConflictError: Under the Error policy, if more than one command matches
        """
        candidates = resolve_conflicts(
            self._source_matches(target, NestingMode.EXACT), self.on_conflict
        )
        if not candidates:
            raise NoMatchError(target)
        return candidates[0]

    def resolve(self, tokens: Sequence[str]) -> Runner:
        """
        Resolve tokens to a runner.

        Tokens left after the command's path select an environment (when the
        command has any) and are then passed to the command as arguments.

        Params:
            tokens: Flat argument vector

        Returns:
            CommandRunner for a runnable command, HelpRunner for a group without default
        """
        if not tokens:
            raise NoMatchError(tokens)

        chosen = self.match_command(tokens)
        if chosen.source is None:
            raise InvariantViolationError("match has no source document")

        document = self.document(chosen.source)
        command, ancestors = document.command_from_keys(
            chosen.keys, strict_defaults=self.strict_defaults
        )
        # Groups entered by following defaults extend the key path
        keys = chosen.keys + tuple(group.default for group in ancestors[len(chosen.keys):])
        remaining = tuple(tokens[chosen.score:])

        env = None
        if not isinstance(command, Group):
            envs, default_env = resolve_envs(command, ancestors)
            selection = match_env(envs, default_env, remaining)
            if selection is not None:
                logger.debug("Selected environment '%s'", selection.name)
                env = load_env(selection.env, document.base_dir, self.provider.home)
                remaining = selection.remaining

        return build_runner(
            command,
            ancestors,
            remaining,
            keys=keys,
            source=document.path,
            home=self.provider.home,
            env=env,
            is_terminal=self.provider.is_terminal,
        )

    def help_rows(self, runner: HelpRunner) -> tuple[CommandDocument, list[HelpRow]]:
        """Help rows for the group of a help runner."""
        if runner.source is None:
            raise InvariantViolationError("help runner has no source document")
        document = self.document(runner.source)
        rows = document.help_rows(
            self.context,
            runner.group,
            runner.keys,
            runner.ancestors,
            strict_defaults=self.strict_defaults,
        )
        return document, rows

    def browse(self, tokens: Sequence[str] = ()) -> list[tuple[CommandDocument, list[HelpRow]]]:
        """
        Help rows of every document, lowest priority first.

        With tokens, only commands under the matching path are listed; a
        shallow path matches every command below it.
        """
        listing = []
        for path in reversed(self.consultation_order()):
            document = self.document(path)
            rows = document.help_rows(self.context, strict_defaults=self.strict_defaults)
            if tokens:
                matched = {m.keys for m in document.matches(tokens, self.context, NestingMode.NESTED)}
                rows = [row for row in rows if row.keys in matched]
            listing.append((document, rows))
        return listing
