"""
Runner construction and execution.
"""

from cmdtree.execution.runner import (
    COLOR_PASSTHROUGH,
    CommandRunner,
    HelpRunner,
    Runner,
    build_invocation,
    build_runner,
    command_root,
)

__all__ = [
    "COLOR_PASSTHROUGH",
    "CommandRunner",
    "HelpRunner",
    "Runner",
    "build_invocation",
    "build_runner",
    "command_root",
]
