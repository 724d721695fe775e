"""CLI entry point for cmdtree.

Invoked as::

    cmdtree [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m cmdtree.cli.main

Commands
--------
inspect     Render a command registry as a tree, JSON or YAML
run         Dispatch tokens against a command registry
version     Show version information

TARGET arguments use ``module:attribute`` notation and must point at
either an ``App`` or a mapping of command names to ``Cmd`` objects.
"""
from __future__ import annotations

import importlib
import logging
import sys
from collections.abc import Mapping

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from cmdtree.dispatch import App
from cmdtree.registry import Cmd, RegistryError, RegistrySerializer

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load_app(target: str) -> App:
    """Import ``module:attribute`` and return it as an ``App``, exiting on error."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        err_console.print(f"[red]Error:[/red] Expected MODULE:ATTRIBUTE, got {target!r}")
        sys.exit(2)
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        err_console.print(f"[red]Error:[/red] Cannot import {module_name!r}: {exc}")
        sys.exit(1)
    try:
        obj = getattr(module, attr)
    except AttributeError:
        err_console.print(f"[red]Error:[/red] {module_name!r} has no attribute {attr!r}")
        sys.exit(1)

    if isinstance(obj, App):
        return obj
    if isinstance(obj, Mapping):
        try:
            return App(obj)
        except RegistryError as exc:
            err_console.print(f"[red]Invalid registry[/red] in {target}: {exc}")
            sys.exit(1)
    err_console.print(
        f"[red]Error:[/red] {target} is a {type(obj).__name__}, "
        "expected an App or a mapping of commands"
    )
    sys.exit(1)


def _add_branches(tree: Tree, cmds: Mapping[str, Cmd]) -> None:
    for name in sorted(cmds):
        cmd = cmds[name]
        label = f"[bold cyan]{name}[/bold cyan]"
        if cmd.args:
            label += " " + " ".join(f"<{arg}>" for arg in cmd.args)
        if cmd.options is not None:
            label += " [dim]" + " ".join(f"--{opt}" for opt in cmd.options.names()) + "[/dim]"
        if cmd.pre_run:
            label += " [green](pre-run)[/green]"
        if cmd.action is None:
            label += " [yellow](no action)[/yellow]"
        if cmd.summary:
            label += f": {cmd.summary}"
        _add_branches(tree.add(label), cmd.children)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="cmdtree")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Command-tree dispatcher: inspect and run command registries."""
    _configure_logging(verbose)


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from cmdtree import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]cmdtree[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# inspect command
# ---------------------------------------------------------------------------


@cli.command(name="inspect")
@click.argument("target")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["tree", "json", "yaml"], case_sensitive=False),
    default="tree",
    help="Output format",
)
def inspect_command(target: str, output_format: str) -> None:
    """Render the command registry at TARGET.

    TARGET is MODULE:ATTRIBUTE naming an App or a mapping of commands.
    """
    app = _load_app(target)
    output_format = output_format.lower()

    if output_format == "tree":
        tree = Tree(f"[bold]{target}[/bold] ({len(app)} commands)")
        _add_branches(tree, app.commands)
        console.print(tree)
        return

    serializer = RegistrySerializer()
    if output_format == "json":
        console.print(Syntax(serializer.to_json(app.commands), "json"))
    else:
        console.print(Syntax(serializer.to_yaml(app.commands), "yaml"))


# ---------------------------------------------------------------------------
# run command
# ---------------------------------------------------------------------------


@cli.command(
    name="run",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
@click.option("--pre-run", is_flag=True, default=False, help="Only allow pre-run commands")
@click.argument("target")
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
def run_command(pre_run: bool, target: str, tokens: tuple[str, ...]) -> None:
    """Dispatch TOKENS against the registry at TARGET.

    The process exits with the dispatcher's exit code.

    Examples:

    \b
        cmdtree run myapp.commands:COMMANDS deploy prod --force
        cmdtree run --pre-run myapp.commands:app check
    """
    app = _load_app(target)
    if pre_run:
        code = app.pre_run(list(tokens))
    else:
        code = app.run(app.cfg, None, list(tokens))
    sys.exit(int(code))


if __name__ == "__main__":
    cli()
