"""cmdtree — command-tree dispatcher for command-line applications.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import click
    import cmdtree

    flags = cmdtree.OptionSet("greet", [click.Option(["--loud"], is_flag=True)])

    def greet(config, args):
        text = f"hello {args['name']}"
        print(text.upper() if flags["loud"] else text)

    app = cmdtree.App(
        {"greet": cmdtree.Cmd(action=greet, args=("name",), options=flags)},
        cmdtree.AppConfig(name="demo", version="1.0"),
    )

    app.run(app.cfg, None, ["greet", "world", "--loud"])   # prints HELLO WORLD
    app.run(app.cfg, None, ["help"])                       # lists commands

    cmdtree.__version__
    '0.1.0'
"""
from __future__ import annotations

__version__: str = "0.1.0"

from cmdtree.config import AppConfig
from cmdtree.dispatch import (
    App,
    DispatchError,
    ExitCode,
    FlagError,
    MissingArgumentError,
    NoActionDefinedError,
    PreRunIneligibleError,
    Resolution,
    UnknownCommandError,
    exit_with,
)
from cmdtree.options import OptionSet
from cmdtree.registry import HELP_COMMAND, Action, Cmd, RegistryError


def new(cmds: dict[str, Cmd], cfg: AppConfig | None = None) -> App:
    """Build an ``App`` from a command mapping and configuration.

    Parameters
    ----------
    cmds:
        Top-level commands keyed by name.
    cfg:
        Configuration; a non-empty ``version`` adds the ``help`` command.

    Returns
    -------
    App
        A dispatcher with ``len(cmds)`` or ``len(cmds) + 1`` commands.
    """
    return App(cmds, cfg)


__all__ = [
    "__version__",
    "new",
    "App",
    "AppConfig",
    "Action",
    "Cmd",
    "HELP_COMMAND",
    "OptionSet",
    "Resolution",
    "exit_with",
    # Errors
    "RegistryError",
    "DispatchError",
    "ExitCode",
    "UnknownCommandError",
    "MissingArgumentError",
    "FlagError",
    "PreRunIneligibleError",
    "NoActionDefinedError",
]
