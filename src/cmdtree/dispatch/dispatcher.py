"""Command dispatcher.

``App`` owns a validated command registry and a configuration value.
Its two entry points, ``run`` and ``pre_run``, walk the registry against
a token list, bind required positional arguments, parse the resolved
command's flags and invoke its action.  Both return an exit code and
never raise for bad input; process termination is left to the caller
(see ``exit_with``).

Resolution
----------
1. No tokens, or a first token of ``help``: print the help listing and
   succeed.
2. The first token must name a top-level command.
3. Descend while the next token names a subcommand of the current node.
4. The remaining tokens are split into flags (parsed by the command's
   ``OptionSet``) and positionals.
5. Positionals are bound, in order, to the command's ``args``.
"""
from __future__ import annotations

import logging
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, NoReturn

from rich.console import Console
from rich.markup import escape

from cmdtree.config import AppConfig
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
from cmdtree.registry.nodes import HELP_COMMAND, Cmd
from cmdtree.registry.validation import validate_registry

logger = logging.getLogger(__name__)

FLAG_TERMINATOR = "--"


@dataclass(frozen=True)
class Resolution:
    """The outcome of resolving a token list against the registry.

    Parameters
    ----------
    path:
        Names of the matched commands, outermost first.
    command:
        The resolved command node.
    bindings:
        Required argument names mapped to their token values.
    positionals:
        Every positional token left after the command path, including
        any beyond the required arguments.
    """

    path: tuple[str, ...]
    command: Cmd
    bindings: Mapping[str, str]
    positionals: tuple[str, ...]


class App:
    """Resolves tokens against a command registry and runs the result.

    Parameters
    ----------
    cmds:
        Top-level commands keyed by name.  The mapping is copied; the
        caller's object is never modified.
    cfg:
        Configuration value.  If it has a non-empty ``version``, a
        synthetic ``help`` command is added to the top level.
    console:
        Console the help listing is printed to.
    err_console:
        Console failure messages are printed to.

    Raises
    ------
    RegistryError
        If ``cmds`` is malformed.
    """

    def __init__(
        self,
        cmds: Mapping[str, Cmd],
        cfg: Any = None,
        console: Console | None = None,
        err_console: Console | None = None,
    ) -> None:
        validate_registry(cmds)
        self.cfg = cfg if cfg is not None else AppConfig()
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)
        self.help = HelpFormatter(
            name=getattr(self.cfg, "name", "") or "app",
            version=getattr(self.cfg, "version", "") or "",
            description=getattr(self.cfg, "description", "") or "",
            console=self.console,
        )

        commands = dict(cmds)
        if self.help.version:
            commands[HELP_COMMAND] = Cmd(
                action=self._help_action, summary="Show the list of commands"
            )
            logger.debug("Added %r command for version %s", HELP_COMMAND, self.help.version)
        self._cmds: Mapping[str, Cmd] = MappingProxyType(commands)

    @property
    def commands(self) -> Mapping[str, Cmd]:
        """Read-only view of the top-level commands."""
        return self._cmds

    def __len__(self) -> int:
        return len(self._cmds)

    def __repr__(self) -> str:
        return f"App(commands={sorted(self._cmds)})"

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def run(self, cfg: Any, extra: Mapping[str, str] | None, tokens: Sequence[str]) -> int:
        """Resolve ``tokens`` and invoke the command's action with ``cfg``.

        ``extra`` seeds the mapping passed to the action; bound
        required arguments replace keys of the same name.

        Returns
        -------
        int
            ``0`` if help was shown or the action ran, otherwise the
            ``exit_code`` of the ``DispatchError`` that stopped resolution.
        """
        return self._dispatch(cfg, extra, tokens, pre_run=False)

    def pre_run(self, tokens: Sequence[str], extra: Mapping[str, str] | None = None) -> int:
        """Like ``run`` but only commands marked ``pre_run`` may execute.

        The action receives this app's own ``cfg``.
        """
        return self._dispatch(self.cfg, extra, tokens, pre_run=True)

    def main(self, argv: Sequence[str] | None = None) -> int:
        """Run with ``argv`` (default ``sys.argv[1:]``) and this app's config."""
        tokens = sys.argv[1:] if argv is None else argv
        return self.run(self.cfg, None, tokens)

    def _dispatch(
        self,
        cfg: Any,
        extra: Mapping[str, str] | None,
        tokens: Sequence[str] | None,
        pre_run: bool,
    ) -> int:
        tokens = list(tokens or ())
        if not tokens or tokens[0] == HELP_COMMAND:
            self.show_help(tokens[1:])
            return ExitCode.SUCCESS

        try:
            path, command, rest = self.locate(tokens)
            if pre_run and not command.pre_run:
                raise PreRunIneligibleError(path)
            resolution = self._bind(path, command, rest)
        except DispatchError as exc:
            logger.debug("Dispatch of %r failed: %s", tokens, exc.message)
            self.err_console.print(f"[red]Error:[/red] {escape(exc.message)}")
            return exc.exit_code

        args = dict(extra or {})
        args.update(resolution.bindings)
        logger.debug("Invoking %r with %r", " ".join(resolution.path), args)
        # Checked by _bind.
        assert resolution.command.action is not None
        resolution.command.action(cfg, args)
        return ExitCode.SUCCESS

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, tokens: Sequence[str]) -> Resolution:
        """Resolve ``tokens`` to a command without invoking it.

        Flags are parsed into the command's option set as a side effect.

        Raises
        ------
        UnknownCommandError
            If the first token is not a top-level command, or a routing
            command is followed by a token that is not one of its
            subcommands.
        NoActionDefinedError
            If the resolved command has no action.
        FlagError
            If the flag tokens cannot be parsed.
        MissingArgumentError
            If too few positional tokens remain.
        """
        path, command, rest = self.locate(tokens)
        return self._bind(path, command, rest)

    def locate(self, tokens: Sequence[str]) -> tuple[tuple[str, ...], Cmd, list[str]]:
        """Walk the registry and return ``(path, command, remaining_tokens)``.

        Descent stops at the first token that is not a subcommand of the
        current node.
        """
        if not tokens:
            raise UnknownCommandError("")
        first = tokens[0]
        command = self._cmds.get(first)
        if command is None:
            raise UnknownCommandError(first)

        path = (first,)
        index = 1
        while index < len(tokens):
            child = command.child(tokens[index])
            if child is None:
                break
            command = child
            path = (*path, tokens[index])
            index += 1
        logger.debug("Resolved %r to command %r", tokens, " ".join(path))
        return path, command, list(tokens[index:])

    def _bind(self, path: tuple[str, ...], command: Cmd, rest: list[str]) -> Resolution:
        if command.is_routing and rest:
            raise UnknownCommandError(rest[0], path)
        if command.is_routing or command.is_dead:
            raise NoActionDefinedError(path, command.subcommands())

        if command.options is not None:
            try:
                positionals = command.options.parse(rest)
            except FlagError as exc:
                raise FlagError(exc.message, path) from exc
        else:
            positionals = self._positionals_without_flags(path, rest)

        if len(positionals) < len(command.args):
            raise MissingArgumentError(path, command.args[len(positionals):])

        bindings = dict(zip(command.args, positionals))
        return Resolution(
            path=path,
            command=command,
            bindings=MappingProxyType(bindings),
            positionals=tuple(positionals),
        )

    @staticmethod
    def _positionals_without_flags(path: tuple[str, ...], rest: list[str]) -> list[str]:
        positionals: list[str] = []
        for index, token in enumerate(rest):
            if token == FLAG_TERMINATOR:
                positionals.extend(rest[index + 1:])
                break
            if token.startswith("-") and token != "-":
                raise FlagError(
                    f"{' '.join(path)!r} accepts no flags (got {token!r})", path
                )
            positionals.append(token)
        return positionals

    # ------------------------------------------------------------------
    # Help
    # ------------------------------------------------------------------

    def show_help(self, tokens: Sequence[str] = ()) -> None:
        """Print the command listing.

        If ``tokens`` name a command with subcommands, its subcommands
        are listed instead of the top level.
        """
        if tokens:
            try:
                path, command, _ = self.locate(tokens)
            except UnknownCommandError:
                logger.debug("No help target %r; showing top level", list(tokens))
            else:
                if not command.is_leaf:
                    self.help.show(command.children, path)
                    return
        self.help.show(self._cmds)

    def _help_action(self, config: Any, args: Mapping[str, str]) -> None:
        self.show_help()


def exit_with(app: App, argv: Sequence[str] | None = None) -> NoReturn:
    """Run ``app`` and exit the process with its exit code."""
    sys.exit(app.main(argv))
