"""
Help rows and their terminal rendering.

A help row describes one runnable entry of a document: a leaf command (or a
group with a default) combined with one of its environments. Rows render as
aligned ``cmdtree <groups> <key> <env>  <command>`` lines with rich.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from cmdtree.document import CommandDocument

PROG = "cmdtree"


@dataclass(frozen=True)
class HelpRow:
    """
    One runnable entry in help output.

    Params:
        file_name: Name of the document the command comes from
        keys: Literal key path of the command
        alias_keys: Accepted names per level (flattened levels omitted)
        command: Shell string the entry runs
        env: Environment name, if the command has environments
        default_env: Whether ``env`` is the default environment
    """

    file_name: str
    keys: tuple[str, ...]
    alias_keys: tuple[tuple[str, ...], ...]
    command: str
    env: str | None = None
    default_env: bool = False

    @property
    def group_keys(self) -> str:
        return " ".join(level[0] for level in self.alias_keys[:-1])

    @property
    def key(self) -> str:
        return self.alias_keys[-1][0] if self.alias_keys else ""

    @property
    def env_label(self) -> str | None:
        if self.env is None:
            return None
        return f"({self.env})" if self.default_env else self.env

    @property
    def tokens(self) -> list[str]:
        """Tokens that dispatch this row again through normal matching."""
        tokens = [level[0] for level in self.alias_keys]
        if self.env is not None:
            tokens.append(self.env)
        return tokens

    def aliases(self) -> str | None:
        """Render the alias levels, e.g. ``(app|a) build``, when any level has aliases."""
        if not any(len(level) > 1 for level in self.alias_keys):
            return None
        return " ".join(
            level[0] if len(level) == 1 else f"({'|'.join(level)})"
            for level in self.alias_keys
        )

    def invocation(self) -> Text:
        text = Text(f"{PROG} ", style="grey50")
        if self.group_keys:
            text.append(f"{self.group_keys} ", style="bold blue")
        text.append(self.key, style="bold white")
        if self.env_label:
            text.append(f" {self.env_label}", style="bold magenta")
        return text

    def label(self) -> str:
        """Plain single-line label, used by the interactive picker."""
        return f"{self.invocation().plain}  {self.command}"


def render_rows(console: Console, rows: Sequence[HelpRow]) -> None:
    """Print rows as an aligned table, or bare invocations when not on a terminal."""
    if not console.is_terminal:
        for row in rows:
            console.print(row.invocation().plain, highlight=False, markup=False)
        return

    table = Table.grid(padding=(0, 2))
    table.add_column(no_wrap=True)
    table.add_column(style="yellow")

    for row in rows:
        table.add_row(row.invocation(), Text(row.command))
        aliases = row.aliases()
        if aliases:
            table.add_row(Text(f" - {aliases}", style="dim"), "")

    console.print(table)


def render_document(console: Console, document: "CommandDocument", rows: Sequence[HelpRow]) -> None:
    """Print a document's title, description and rows; nothing when there are no rows."""
    if not rows:
        return

    console.print()
    console.print(Text(document.name, style="bold green"))
    if document.description:
        console.print(Text(document.description, style="dim yellow"))
    render_rows(console, rows)
