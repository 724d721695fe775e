"""Dispatcher module.

Exports the ``App`` dispatcher, its resolution result, the help
formatter and the dispatch error hierarchy.
"""
from __future__ import annotations

from cmdtree.dispatch.dispatcher import App, Resolution, exit_with
from cmdtree.dispatch.errors import (
    DispatchError,
    ExitCode,
    FlagError,
    MissingArgumentError,
    NoActionDefinedError,
    PreRunIneligibleError,
    UnknownCommandError,
)
from cmdtree.dispatch.help import HelpFormatter

__all__ = [
    "App",
    "Resolution",
    "exit_with",
    "HelpFormatter",
    # Errors
    "DispatchError",
    "ExitCode",
    "UnknownCommandError",
    "MissingArgumentError",
    "FlagError",
    "PreRunIneligibleError",
    "NoActionDefinedError",
]
