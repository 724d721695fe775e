"""Help listing with Rich formatting."""
from __future__ import annotations

from collections.abc import Mapping

from rich.console import Console
from rich.table import Table
from rich.text import Text

from cmdtree.registry.nodes import Cmd


class HelpFormatter:
    """Renders the command listing for an ``App``."""

    def __init__(self, name: str, version: str = "", description: str = "",
                 console: Console | None = None) -> None:
        self.name = name
        self.version = version
        self.description = description
        self.console = console or Console()

    def show(self, cmds: Mapping[str, Cmd], path: tuple[str, ...] = ()) -> None:
        """Print the commands in ``cmds``.

        ``path`` is the command prefix the listing belongs to; it is empty
        for the top-level listing.
        """
        header = Text(self.name, style="bold blue")
        if self.version:
            header.append(f" v{self.version}", style="dim")
        self.console.print(header)
        if self.description:
            self.console.print(self.description)

        prefix = " ".join((self.name, *path))
        self.console.print(f"\n[bold orange1]Usage:[/bold orange1] {prefix} <command> [args]...\n")

        if not cmds:
            self.console.print("No commands available.")
            return

        table = Table(title="Commands", show_header=False, box=None, padding=(0, 2))
        table.add_column("Command", style="cyan", no_wrap=True)
        table.add_column("Description")
        for name in sorted(cmds):
            table.add_row(name, self._describe(name, cmds[name]))
        self.console.print(table)

    def _describe(self, name: str, cmd: Cmd) -> str:
        text = cmd.summary or f"Run command {name}"
        if cmd.args:
            text += " " + " ".join(f"<{arg}>" for arg in cmd.args)
        if not cmd.is_leaf:
            text += f" [dim]({len(cmd.children)} subcommands)[/dim]"
        return text
