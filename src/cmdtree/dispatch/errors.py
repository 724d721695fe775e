"""Dispatch error types and exit codes.

Every failure the dispatcher can detect while resolving tokens is a
``DispatchError`` subclass.  Each carries the exit code it maps to and a
human-readable message; ``App.run`` and ``App.pre_run`` catch them at
the boundary and return the code instead of raising.
"""
from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes returned by the dispatcher.

    SUCCESS
        Help was shown or the action was invoked.
    FAILURE
        The command resolved but could not run (not pre-run eligible,
        no action defined).
    USAGE
        The tokens did not match the registry (unknown command, missing
        argument, bad flag).
    """

    SUCCESS = 0
    FAILURE = 1
    USAGE = 2


def _format_path(path: tuple[str, ...]) -> str:
    return " ".join(path)


class DispatchError(Exception):
    """Base class for all resolution failures."""

    exit_code: ExitCode = ExitCode.FAILURE

    def __init__(self, message: str, path: tuple[str, ...] = ()) -> None:
        self.message = message
        self.path = path
        super().__init__(message)


class UnknownCommandError(DispatchError):
    """Raised when a token does not name a known command."""

    exit_code = ExitCode.USAGE

    def __init__(self, token: str, path: tuple[str, ...] = ()) -> None:
        self.token = token
        if path:
            message = f"unknown command {token!r} for {_format_path(path)!r}"
        else:
            message = f"unknown command {token!r}"
        super().__init__(message, path)


class MissingArgumentError(DispatchError):
    """Raised when fewer positional tokens remain than required arguments."""

    exit_code = ExitCode.USAGE

    def __init__(self, path: tuple[str, ...], missing: tuple[str, ...]) -> None:
        self.missing = missing
        names = ", ".join(missing)
        noun = "argument" if len(missing) == 1 else "arguments"
        super().__init__(
            f"{_format_path(path)!r} is missing required {noun}: {names}", path
        )


class FlagError(DispatchError):
    """Raised when flag tokens cannot be parsed for the resolved command."""

    exit_code = ExitCode.USAGE


class PreRunIneligibleError(DispatchError):
    """Raised by the pre-run pass for commands not marked ``pre_run``."""

    def __init__(self, path: tuple[str, ...]) -> None:
        super().__init__(
            f"{_format_path(path)!r} cannot be run during the pre-run pass", path
        )


class NoActionDefinedError(DispatchError):
    """Raised when the resolved command has nothing to invoke."""

    def __init__(self, path: tuple[str, ...], subcommands: list[str] | None = None) -> None:
        self.subcommands = list(subcommands or [])
        message = f"{_format_path(path)!r} has no action"
        if self.subcommands:
            message += f"; available subcommands: {', '.join(self.subcommands)}"
        super().__init__(message, path)
