"""Command node definitions for the cmdtree registry.

A registry is a plain mapping from command name to ``Cmd``.  Every
``Cmd`` is a frozen dataclass whose ``children`` mapping is wrapped in a
read-only proxy, so once a registry is handed to an ``App`` nothing can
change it during resolution.

A node's name is not stored on the node; it is the key under which the
node sits in its parent mapping.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cmdtree.options import OptionSet

#: Name reserved for the help listing; never allowed in a user registry.
HELP_COMMAND = "help"


@runtime_checkable
class Action(Protocol):
    """Callable invoked when a command resolves.

    Receives the configuration value and a mapping of bound argument
    names to token values.  The return value is ignored.
    """

    def __call__(self, config: Any, args: Mapping[str, str]) -> None: ...


@dataclass(frozen=True, eq=False)
class Cmd:
    """One command or subcommand in the registry.

    Parameters
    ----------
    action:
        Callable run when this node is the resolved command.  ``None``
        is only meaningful for routing nodes that hold children.
    pre_run:
        When ``True`` the command may run during a pre-run pass.
    args:
        Names of the required positional arguments, in order.
    options:
        Flag definitions parsed from the tokens after the command path.
        ``None`` means the command takes no flags.
    children:
        Subcommands keyed by name.
    summary:
        One-line description shown in help listings.
    """

    action: Action | None = None
    pre_run: bool = False
    args: tuple[str, ...] = ()
    options: OptionSet | None = None
    children: Mapping[str, Cmd] = field(default_factory=dict)
    summary: str = ""

    def __post_init__(self) -> None:
        # Accept lists and dicts from callers, store immutable forms.
        if isinstance(self.args, str):
            raise TypeError("Cmd.args must be a sequence of names, not a string")
        object.__setattr__(self, "args", tuple(self.args))
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))

    @property
    def is_leaf(self) -> bool:
        """Return True if this node has no subcommands."""
        return not self.children

    @property
    def is_routing(self) -> bool:
        """Return True if this node only exists to hold subcommands."""
        return self.action is None and bool(self.children)

    @property
    def is_dead(self) -> bool:
        """Return True if there is nothing to invoke and nowhere to descend."""
        return self.action is None and not self.children

    def child(self, name: str) -> Cmd | None:
        """Return the subcommand called ``name``, or ``None``."""
        return self.children.get(name)

    def subcommands(self) -> list[str]:
        """Return the names of all subcommands in alphabetical order."""
        return sorted(self.children)


def walk(
    cmds: Mapping[str, Cmd], prefix: tuple[str, ...] = ()
) -> Iterable[tuple[tuple[str, ...], Cmd]]:
    """Yield ``(path, node)`` for every node in ``cmds``, depth first.

    Siblings are visited in alphabetical order.
    """
    for name in sorted(cmds):
        node = cmds[name]
        path = (*prefix, name)
        yield path, node
        yield from walk(node.children, path)
