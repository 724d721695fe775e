"""Named flag collections attached to commands.

An ``OptionSet`` wraps a list of ``click.Option`` definitions and owns
the storage their parsed values land in.  The dispatcher hands it the
tokens left after command resolution; the set consumes the flags,
stores their values and gives back the positional tokens.

The set is owned by the caller, not by the command registry.  Actions
read it directly while they run::

    verbose = OptionSet("deploy", [click.Option(["--verbose"], is_flag=True)])

    def deploy(config, args):
        if verbose["verbose"]:
            ...

    cmds = {"deploy": Cmd(action=deploy, options=verbose)}

Values persist until the next ``parse`` or ``reset`` call.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Any

import click
from click.core import ParameterSource

from cmdtree.dispatch.errors import FlagError

logger = logging.getLogger(__name__)


class OptionSet:
    """A named collection of flag definitions and their current values.

    Parameters
    ----------
    name:
        Name used in error messages, usually the command's name.
    options:
        ``click.Option`` instances.  Positional ``click.Argument``
        parameters are rejected; positionals are bound by the command's
        ``args`` instead.
    """

    def __init__(self, name: str, options: Sequence[click.Option]) -> None:
        params = list(options)
        for param in params:
            if not isinstance(param, click.Option):
                raise TypeError(
                    f"OptionSet {name!r} only accepts click.Option, got {type(param).__name__}"
                )
        self.name = name
        self._command = click.Command(
            name,
            params=params,
            add_help_option=False,
            context_settings={
                "allow_extra_args": True,
                "allow_interspersed_args": True,
                "ignore_unknown_options": False,
            },
        )
        self._values: dict[str, Any] = {}
        self._explicit: frozenset[str] = frozenset()
        self.reset()

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(self, tokens: Sequence[str]) -> list[str]:
        """Parse flags out of ``tokens`` and return the positional leftovers.

        Omitted flags take their declared defaults.  ``--`` ends flag
        parsing; everything after it is positional.

        Raises
        ------
        FlagError
            If a flag is unknown, lacks a value, or fails type conversion.
        """
        try:
            ctx = self._command.make_context(self.name, list(tokens))
        except click.UsageError as exc:
            raise FlagError(exc.format_message()) from exc
        self._store(ctx)
        logger.debug("Parsed options %r: %r", self.name, self._values)
        return list(ctx.args)

    def reset(self) -> None:
        """Restore every flag to its default value."""
        ctx = self._command.make_context(self.name, [], resilient_parsing=True)
        self._store(ctx)
        self._explicit = frozenset()

    def _store(self, ctx: click.Context) -> None:
        self._values = dict(ctx.params)
        self._explicit = frozenset(
            name
            for name in self._values
            if ctx.get_parameter_source(name) == ParameterSource.COMMANDLINE
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def values(self) -> Mapping[str, Any]:
        """Read-only view of the current flag values."""
        return MappingProxyType(self._values)

    def names(self) -> list[str]:
        """Return the declared flag names in declaration order."""
        return [param.name for param in self._command.params if param.name]

    def get(self, name: str, default: Any = None) -> Any:
        """Return the value of ``name``, or ``default`` if it is not declared."""
        return self._values.get(name, default)

    def is_set(self, name: str) -> bool:
        """Return True if ``name`` was given on the command line in the last parse."""
        return name in self._explicit

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._command.params)

    def __repr__(self) -> str:
        return f"OptionSet(name={self.name!r}, options={self.names()})"
