"""
Command line entry point.

``cmdtree <tokens...>`` resolves the tokens against the discovered command
documents and runs the result. Without tokens, or with ``--list``, the
available commands are listed; ``--pick`` chooses one interactively.
"""

import argparse
import logging
from collections.abc import Mapping, Sequence

from rich.console import Console
from rich.text import Text

from cmdtree import __version__
from cmdtree.config import GlobalConfig
from cmdtree.core.provider import EnvironmentProvider, SystemProvider
from cmdtree.dispatcher import Dispatcher
from cmdtree.exceptions import CmdTreeError
from cmdtree.execution.runner import HelpRunner
from cmdtree.help import PROG, render_document
from cmdtree.picker import pick

EXIT_FAILURE = 1
LOG_ENV_VAR = "CMDTREE_LOG"
PICK_ENV_VAR = "CMDTREE_PICK"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Run commands defined in cmdtree.json documents.",
    )
    parser.add_argument("--list", action="store_true", help="List matching commands instead of running one.")
    parser.add_argument("--pick", action="store_true", help="Choose a command interactively.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("tokens", nargs=argparse.REMAINDER, help="Command path, environment and arguments.")
    return parser


def configure_logging(environ: Mapping[str, str]) -> None:
    level = getattr(logging, environ.get(LOG_ENV_VAR, "WARNING").upper(), logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _run(args: argparse.Namespace, provider: EnvironmentProvider, console: Console, err: Console) -> int:
    config = GlobalConfig.load(provider)
    dispatcher = Dispatcher.from_config(config, provider)
    tokens: list[str] = list(args.tokens)
    want_pick = args.pick or (provider.environ.get(PICK_ENV_VAR) == "1" and provider.is_terminal)

    if args.pick or (want_pick and not tokens):
        row = pick(dispatcher.browse(tokens))
        if row is None:
            return 0
        tokens = row.tokens
    elif args.list or not tokens:
        for document, rows in dispatcher.browse(tokens):
            render_document(console, document, rows)
        return 0

    runner = dispatcher.resolve(tokens)

    if isinstance(runner, HelpRunner):
        document, rows = dispatcher.help_rows(runner)
        if not want_pick:
            render_document(console, document, rows)
            return 0

        row = pick([(document, rows)])
        if row is None:
            return 0
        runner = dispatcher.resolve(row.tokens)
        if isinstance(runner, HelpRunner):
            return 0

    err.print(Text(runner.invocation, style="dim"))
    return runner.spawn(provider.environ)


def main(argv: Sequence[str] | None = None, provider: EnvironmentProvider | None = None) -> int:
    """
    Run the command line interface.

    Returns:
        Exit code of the spawned command, 0 after listing help, 1 on any
        resolution error
    """
    provider = provider or SystemProvider()
    configure_logging(provider.environ)
    args = build_parser().parse_args(argv)

    console = Console()
    err = Console(stderr=True)

    try:
        return _run(args, provider, console, err)
    except CmdTreeError as e:
        err.print(Text(f"Error: {e}", style="bold red"))
        return EXIT_FAILURE