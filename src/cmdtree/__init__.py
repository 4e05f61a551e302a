"""
cmdtree - run commands defined in declarative, nested command documents.

cmdtree loads JSON documents describing groups of shell commands, resolves an
argument vector against them (aliases, flattened groups, directory scopes,
group defaults and environments) and runs the selected command.
"""

from importlib.metadata import version

from cmdtree.config import GlobalConfig
from cmdtree.core.models import Group
from cmdtree.core.provider import StaticProvider, SystemProvider
from cmdtree.dispatcher import Dispatcher
from cmdtree.document import CommandDocument
from cmdtree.execution.runner import CommandRunner, HelpRunner

__version__ = version("cmdtree")

__all__ = [
    "__version__",
    "CommandDocument",
    "CommandRunner",
    "Dispatcher",
    "GlobalConfig",
    "Group",
    "HelpRunner",
    "StaticProvider",
    "SystemProvider",
]
