"""Construction-time checks for command registries.

``validate_registry`` is called by ``App`` before it accepts a registry.
Problems found here are programming errors in the caller's command
table, so they raise instead of producing an exit code.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping

from cmdtree.registry.nodes import HELP_COMMAND, Cmd, walk

logger = logging.getLogger(__name__)


class RegistryError(ValueError):
    """Raised when a command registry is malformed."""

    def __init__(self, path: tuple[str, ...], reason: str) -> None:
        self.path = path
        self.reason = reason
        where = " ".join(path) if path else "<root>"
        super().__init__(f"Invalid command {where!r}: {reason}")


def _check_name(name: object, path: tuple[str, ...]) -> None:
    if not isinstance(name, str) or not name:
        raise RegistryError(path, "command names must be non-empty strings")
    if name.startswith("-"):
        raise RegistryError(path, "command names must not start with '-'")
    if any(ch.isspace() for ch in name):
        raise RegistryError(path, "command names must not contain whitespace")


def _check_node(node: object, path: tuple[str, ...]) -> None:
    if not isinstance(node, Cmd):
        raise RegistryError(path, f"expected a Cmd, got {type(node).__name__}")

    seen: set[str] = set()
    for arg in node.args:
        if arg in seen:
            raise RegistryError(path, f"duplicate argument name {arg!r}")
        seen.add(arg)

    if node.action is not None and not callable(node.action):
        raise RegistryError(path, "action must be callable")

    logger.debug(
        "Registered command %r (args=%s, pre_run=%s, children=%d)",
        " ".join(path),
        list(node.args),
        node.pre_run,
        len(node.children),
    )


def validate_registry(cmds: Mapping[str, Cmd]) -> None:
    """Check a user-supplied registry.

    ``Cmd`` is frozen and copies its children, so a tree built from
    ``Cmd`` objects cannot contain a cycle.

    Parameters
    ----------
    cmds:
        Top-level command mapping.

    Raises
    ------
    RegistryError
        If a name is invalid, ``help`` is used at the top level, a node
        is not a ``Cmd``, or a node repeats an argument name.
    """
    for name in cmds:
        if name == HELP_COMMAND:
            raise RegistryError((name,), f"{HELP_COMMAND!r} is reserved")
    for path, node in walk(cmds):
        _check_name(path[-1], path)
        _check_node(node, path)
